from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .rules import BidTotalRule

logger = logging.getLogger(__name__)

BID_RULE_ENV = "WHIST_BID_TOTAL_RULE"
RESULTS_DIR_ENV = "WHIST_RESULTS_DIR"
LOG_LEVEL_ENV = "WHIST_LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    """Runtime defaults, read from the environment (and a .env file if present)."""
    bid_rule: BidTotalRule = BidTotalRule.FORBID_THIRTEEN
    results_dir: Optional[Path] = None
    log_level: str = "INFO"


def parse_bid_rule(raw: str) -> BidTotalRule:
    value = raw.strip().lower().replace("-", "_")
    try:
        return BidTotalRule(value)
    except ValueError:
        choices = ", ".join(rule.value for rule in BidTotalRule)
        raise ValueError(
            f"Unknown bid total rule '{raw}'. Expected one of {choices}."
        ) from None


def load_settings(dotenv_path: Optional[str | Path] = None) -> Settings:
    # Values already in the environment win over the .env file.
    load_dotenv(dotenv_path)

    raw_rule = os.environ.get(BID_RULE_ENV)
    bid_rule = (
        parse_bid_rule(raw_rule) if raw_rule else BidTotalRule.FORBID_THIRTEEN
    )

    raw_dir = os.environ.get(RESULTS_DIR_ENV)
    results_dir = Path(raw_dir).expanduser() if raw_dir else None

    log_level = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()

    logger.debug(
        "Loaded settings: bid_rule=%s results_dir=%s log_level=%s",
        bid_rule.value,
        results_dir,
        log_level,
    )
    return Settings(bid_rule=bid_rule, results_dir=results_dir, log_level=log_level)

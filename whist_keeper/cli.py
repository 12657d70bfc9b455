from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import load_settings, parse_bid_rule
from .engine import ScoreKeeper
from .errors import ValidationError
from .game_log import write_round_scores_csv
from .journal import RoundJournal
from .paths import resolve_results_path
from .suits import MAX_BID, MIN_BID

logger = logging.getLogger(__name__)


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Replay a scripted Whist game through the score keeper and write "
            "the per-round score table to a CSV file."
        )
    )

    parser.add_argument(
        "--script",
        type=str,
        required=True,
        help=(
            "JSON file with 'players' (4 names) and 'rounds', each round "
            "holding lead_bidder, lead_bid, trump, bids and tricks. A round "
            'of the form {"delete_last": true} removes the previous round.'
        ),
    )
    parser.add_argument(
        "--csv",
        type=str,
        default="whist_scores.csv",
        help="Path to the output CSV file (default: whist_scores.csv).",
    )
    parser.add_argument(
        "--game-id",
        type=str,
        default=None,
        help="Label written to the game_id column (default: script file stem).",
    )
    parser.add_argument(
        "--bid-rule",
        type=str,
        default=None,
        help=(
            "Bid total check: forbid_thirteen, require_thirteen or any. "
            "Defaults to WHIST_BID_TOTAL_RULE, else forbid_thirteen."
        ),
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ...). Default: INFO.",
    )
    parser.add_argument(
        "--verbose-log",
        type=str,
        default=None,
        help="Optional path for a round-by-round journal file.",
    )

    return parser.parse_args(argv)


def load_script(path: Path) -> Dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        script = json.load(f)
    if not isinstance(script, dict) or "players" not in script:
        raise ValueError(f"{path} must be a JSON object with a 'players' list")
    script.setdefault("rounds", [])
    return script


def _checked_values(
    keeper: ScoreKeeper,
    values: Dict[str, Any],
    label: str,
) -> Dict[str, int]:
    """Reject unknown players and out-of-range counts before any nudging."""
    checked: Dict[str, int] = {}
    for name, raw in values.items():
        if name not in keeper.players:
            raise ValidationError(f"Unknown player '{name}'.")
        value = int(raw)
        if not MIN_BID <= value <= MAX_BID:
            raise ValidationError(
                f"{label} for {name} must be between {MIN_BID} and {MAX_BID}; got {value}."
            )
        checked[name] = value
    return checked


def play_round(keeper: ScoreKeeper, entry: Dict[str, Any]) -> None:
    """Enter one round the way an operator would: pick, nudge, submit."""
    if entry.get("delete_last"):
        keeper.delete_last_round()
        return

    bids = _checked_values(keeper, entry.get("bids", {}), "Bid")
    tricks = _checked_values(keeper, entry.get("tricks", {}), "Tricks")

    keeper.select_lead_bidder(
        entry["lead_bidder"],
        int(entry.get("lead_bid", keeper.lead_bid)),
        entry.get("trump", keeper.trump),
    )

    for name, value in bids.items():
        keeper.adjust_bid(name, value - keeper.current_bids[name])
    keeper.submit_bids()

    for name, value in tricks.items():
        keeper.adjust_tricks(name, value - keeper.current_tricks[name])
    keeper.submit_tricks()


def replay(keeper: ScoreKeeper, script: Dict[str, Any]) -> bool:
    """Feed a whole script through `keeper`. Returns False if a round was rejected."""
    try:
        keeper.set_player_names(script["players"])
    except ValidationError as exc:
        logger.error("Cannot start game: %s", exc)
        return False

    for index, entry in enumerate(script["rounds"], start=1):
        try:
            play_round(keeper, entry)
        except ValidationError as exc:
            logger.error("Round %d of the script was rejected: %s", index, exc)
            return False
    return True


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    settings = load_settings()

    logging.basicConfig(
        level=getattr(logging, (args.log_level or settings.log_level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    bid_rule = parse_bid_rule(args.bid_rule) if args.bid_rule else settings.bid_rule
    script_path = Path(args.script)
    game_id = args.game_id or script_path.stem
    csv_path = resolve_results_path(args.csv, settings.results_dir)
    journal: Optional[RoundJournal] = (
        RoundJournal(resolve_results_path(args.verbose_log, settings.results_dir), game_id)
        if args.verbose_log
        else None
    )

    logger.info("Script: %s", script_path)
    logger.info("Bid total rule: %s", bid_rule.value)
    logger.info("Output CSV: %s", csv_path)
    if journal:
        logger.info("Round journal: %s", journal.path)

    script = load_script(script_path)
    keeper = ScoreKeeper(bid_rule=bid_rule, journal=journal, game_label=game_id)
    completed = replay(keeper, script)

    rows = write_round_scores_csv(keeper.game_state, csv_path, game_id=game_id)
    if journal:
        journal.flush()

    standings = sorted(keeper.totals().items(), key=lambda item: item[1], reverse=True)
    for place, (name, total) in enumerate(standings, start=1):
        logger.info("%d. %s: %d", place, name, total)

    if not completed:
        logger.info(
            "Stopped after %d round(s); wrote %d rows to %s",
            len(keeper.game_state.completed_rounds),
            rows,
            csv_path,
        )
        raise SystemExit(1)

    logger.info(
        "Finished %d round(s); wrote %d rows to %s",
        len(keeper.game_state.completed_rounds),
        rows,
        csv_path,
    )


if __name__ == "__main__":
    main()

'''
python3 -m whist_keeper.cli \
  --script sample_game.json \
  --csv sample_game_scores.csv \
  --verbose-log sample_game_journal.log
'''

'''
WHIST_BID_TOTAL_RULE=require_thirteen python3 -m whist_keeper.cli \
  --script sample_game.json \
  --log-level DEBUG
'''

from __future__ import annotations

import enum
from typing import Dict, List, Optional, Tuple

from .errors import ValidationError
from .suits import MAX_BID, MIN_BID, TRICKS_PER_ROUND

# Penalty for a nil bidder who took 1..5 tricks; 6 or more costs nothing.
NIL_PENALTIES = (-50, -40, -30, -20, -10)

TRICK_TOTAL_MESSAGE = "The total sum of tricks must be 13."


class BidTotalRule(enum.Enum):
    """How the combined bids of a round are checked before trick taking."""

    FORBID_THIRTEEN = "forbid_thirteen"
    REQUIRE_THIRTEEN = "require_thirteen"
    ANY = "any"


def clamp(value: int, low: int = MIN_BID, high: int = MAX_BID) -> int:
    return max(low, min(high, value))


def score(
    bid: int,
    tricks: int,
    total_bids: int,
    any_player_met_bid: bool,
) -> int:
    """
    Points one player earns for a round.

    - Nobody at the table made their bid: the round is void, 0 for everyone.
    - Nil bid (0): +50 for taking no tricks when the table underbid
      (total_bids < 13), +25 when it did not; 1..5 tricks are penalised
      from NIL_PENALTIES; 6 or more score 0.
    - Otherwise: 10 + bid^2 when tricks == bid, else -10 per trick off.
    """
    if not any_player_met_bid:
        return 0
    if bid == 0:
        if tricks == 0:
            return 50 if total_bids < TRICKS_PER_ROUND else 25
        if tricks >= 6:
            return 0
        return NIL_PENALTIES[tricks - 1]
    if tricks == bid:
        return 10 + bid * bid
    return -10 * abs(bid - tricks)


def any_player_met_bid(bids: Dict[str, int], tricks: Dict[str, int]) -> bool:
    return any(bids[name] == tricks.get(name) for name in bids)


def score_round(
    players: List[str],
    bids: Dict[str, int],
    tricks: Dict[str, int],
    total_bids: int,
    previous_scores: Optional[Dict[str, int]] = None,
) -> Tuple[Dict[str, int], Dict[str, int]]:
    """
    Score every player independently and add to their running totals.

    Returns (deltas, cumulative_scores), both keyed in seating order.
    """
    previous_scores = previous_scores or {}
    met = any_player_met_bid(bids, tricks)

    deltas: Dict[str, int] = {}
    totals: Dict[str, int] = {}
    for name in players:
        delta = score(bids[name], tricks[name], total_bids, met)
        deltas[name] = delta
        totals[name] = previous_scores.get(name, 0) + delta

    return deltas, totals


def validate_bid_total(total_bids: int, rule: BidTotalRule) -> None:
    if rule == BidTotalRule.FORBID_THIRTEEN and total_bids == TRICKS_PER_ROUND:
        raise ValidationError(
            "The combined sum of bids cannot be 13. Please adjust the bids."
        )
    if rule == BidTotalRule.REQUIRE_THIRTEEN and total_bids != TRICKS_PER_ROUND:
        raise ValidationError(
            "The combined sum of bids must be 13. Please adjust the bids."
        )


def validate_trick_total(total_tricks: int) -> None:
    if total_tricks != TRICKS_PER_ROUND:
        raise ValidationError(
            f"{TRICK_TOTAL_MESSAGE} Please adjust the tricks."
        )

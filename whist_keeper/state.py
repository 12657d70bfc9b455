from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .suits import DEFAULT_LEAD_BID, DEFAULT_TRUMP, TRICKS_PER_ROUND, Suit


class Phase(enum.Enum):
    LEAD_BIDDER = "lead_bidder"
    BID = "bid"
    TRICK = "trick"

    def __str__(self) -> str:
        return self.value


def ordered(players: List[str], values: Dict[str, int], default: int = 0) -> Dict[str, int]:
    """Re-key `values` in seating order, filling missing players with `default`."""
    return {name: values.get(name, default) for name in players}


@dataclass
class Round:
    lead_bidder: str
    lead_bid: int
    trump: Suit
    # player -> bid, in seating order
    bids: Dict[str, int]
    total_bids: int
    # Filled once the trick phase is submitted.
    tricks: Dict[str, int] = field(default_factory=dict)
    deltas: Dict[str, int] = field(default_factory=dict)
    # Cumulative totals through this round.
    scores: Dict[str, int] = field(default_factory=dict)

    @property
    def is_complete(self) -> bool:
        return bool(self.tricks) and bool(self.scores)

    @property
    def overbid(self) -> bool:
        """True when the table bid for more tricks than there are."""
        return self.total_bids > TRICKS_PER_ROUND


@dataclass(frozen=True)
class WorkingState:
    """
    Inputs for the round being entered, before they are submitted.

    Never mutated: the score keeper swaps in a new instance (via
    ``dataclasses.replace``) on every adjustment and phase change.
    """
    bids: Dict[str, int]
    tricks: Dict[str, int] = field(default_factory=dict)
    lead_bidder: Optional[str] = None
    lead_bid: int = DEFAULT_LEAD_BID
    trump: Suit = DEFAULT_TRUMP

    @classmethod
    def fresh(cls, players: List[str]) -> "WorkingState":
        return cls(bids={name: 0 for name in players})


@dataclass
class GameState:
    players: List[str] = field(default_factory=list)
    rounds: List[Round] = field(default_factory=list)

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def completed_rounds(self) -> List[Round]:
        return [r for r in self.rounds if r.is_complete]

    def totals(self) -> Dict[str, int]:
        """Cumulative score per player after the last completed round."""
        completed = self.completed_rounds
        if not completed:
            return {name: 0 for name in self.players}
        return ordered(self.players, completed[-1].scores)

from .engine import ScoreKeeper
from .errors import PhaseError, ValidationError
from .rules import BidTotalRule, score
from .state import Phase, Round
from .suits import Suit

__all__ = [
    "ScoreKeeper",
    "ValidationError",
    "PhaseError",
    "BidTotalRule",
    "score",
    "Phase",
    "Round",
    "Suit",
]

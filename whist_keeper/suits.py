from __future__ import annotations

import enum

# A 52-card deck dealt to four players.
NUM_PLAYERS = 4
TRICKS_PER_ROUND = 13

MIN_BID = 0
MAX_BID = TRICKS_PER_ROUND
MIN_LEAD_BID = 5
DEFAULT_LEAD_BID = 5


class Suit(enum.Enum):
    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"
    NO_TRUMP = "NT"

    def __str__(self) -> str:
        return self.value


DEFAULT_TRUMP = Suit.SPADES


def parse_suit(raw: str | Suit) -> Suit:
    """
    Accept either the symbol ("♥", "NT") or the member name ("hearts").
    """
    if isinstance(raw, Suit):
        return raw
    text = str(raw).strip()
    for suit in Suit:
        if text == suit.value or text.upper() == suit.name:
            return suit
    raise ValueError(f"Unknown trump suit '{raw}'")

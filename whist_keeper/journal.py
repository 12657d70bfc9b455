from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from .state import Round


class RoundJournal:
    """Accumulates a readable, round-by-round record of a scoring session."""

    def __init__(self, path: Path, game_id: Optional[str] = None) -> None:
        self.path = Path(path)
        self.game_id = game_id
        self._entries: List[str] = []

    def _header(self, title: str, round_number: Optional[int]) -> str:
        parts = [title]
        if self.game_id is not None:
            parts.append(f"Game: {self.game_id}")
        if round_number is not None:
            parts.append(f"Round: {round_number}")
        return f"=== {' | '.join(parts)} ==="

    def log_round(self, round_number: int, round_: Round) -> None:
        lines = [
            self._header("Round scored", round_number),
            f"Lead bidder: {round_.lead_bidder} ({round_.lead_bid} {round_.trump})",
            f"Total bids: {round_.total_bids} ({'over' if round_.overbid else 'under'})",
        ]
        for name, bid in round_.bids.items():
            lines.append(
                f"  {name}: bid {bid}, tricks {round_.tricks[name]}, "
                f"delta {round_.deltas[name]:+d}, total {round_.scores[name]}"
            )
        self._entries.append("\n".join(lines))

    def log_rejection(
        self,
        operation: str,
        error: str,
        round_number: Optional[int] = None,
        values: Optional[Dict[str, int]] = None,
    ) -> None:
        lines = [self._header(f"Rejected {operation}", round_number), f"Error: {error}"]
        if values:
            lines.append(
                "Values: " + ", ".join(f"{k}={v}" for k, v in values.items())
            )
        self._entries.append("\n".join(lines))

    def log_deletion(self, round_number: int) -> None:
        self._entries.append(self._header("Deleted round", round_number))

    def flush(self) -> None:
        if not self._entries:
            return
        to_write = "\n\n".join(self._entries)
        self._entries.clear()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(to_write + "\n\n")

from __future__ import annotations

import csv
from typing import Any, Dict, List, Optional

from .state import GameState

FIELDNAMES = [
    "game_id",
    "round_index",
    "player",
    "lead_bidder",
    "lead_bid",
    "trump",
    "total_bids",
    "overbid",
    "bid",
    "tricks",
    "round_delta",
    "total_score",
]


def build_round_score_rows(
    game_state: GameState,
    game_id: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Build a list of rows summarizing per-round scores for CSV export.

    Each row corresponds to (round, player) and has keys in FIELDNAMES. A
    round still waiting for its tricks is skipped, so a game can be exported
    mid-round.
    """
    rows: List[Dict[str, Any]] = []

    for round_index, round_state in enumerate(game_state.rounds):
        if not round_state.is_complete:
            continue
        for name in game_state.players:
            rows.append(
                {
                    "game_id": game_id,
                    "round_index": round_index,
                    "player": name,
                    "lead_bidder": round_state.lead_bidder,
                    "lead_bid": round_state.lead_bid,
                    "trump": round_state.trump.value,
                    "total_bids": round_state.total_bids,
                    "overbid": round_state.overbid,
                    "bid": round_state.bids[name],
                    "tricks": round_state.tricks[name],
                    "round_delta": round_state.deltas[name],
                    "total_score": round_state.scores[name],
                }
            )

    return rows


def write_round_scores_csv(
    game_state: GameState,
    path,
    game_id: Optional[str] = None,
) -> int:
    """
    Write per-round scores to a CSV file and return the number of data rows.

    `path` can be a string or any path-like object accepted by `open`.
    """
    rows = build_round_score_rows(game_state, game_id=game_id)

    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

    return len(rows)

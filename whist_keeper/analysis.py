from __future__ import annotations

from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

# Columns every exported score table carries (see game_log.FIELDNAMES).
REQUIRED_COLUMNS = ("game_id", "round_index", "player", "bid", "tricks", "total_score")


def load_score_table(path: str | Path) -> pd.DataFrame:
    df = pd.read_csv(path)
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{path} is missing columns: {', '.join(missing)}")
    # A table exported without a game id reads back as NaN.
    df["game_id"] = df["game_id"].fillna("")
    return df


def bid_miss(df: pd.DataFrame) -> pd.DataFrame:
    """
    Add a `miss` column: tricks taken minus tricks bid.

    negative -> underbid result (took fewer than bid)
    positive -> overtricks
    """
    out = df.copy()
    out["miss"] = out["tricks"] - out["bid"]
    return out


def final_standings(df: pd.DataFrame) -> pd.DataFrame:
    """Last total per (game, player), best first within each game."""
    last_round = df.groupby("game_id", dropna=False)["round_index"].transform("max")
    final = df[df["round_index"] == last_round]
    return (
        final[["game_id", "player", "total_score"]]
        .sort_values(["game_id", "total_score"], ascending=[True, False])
        .reset_index(drop=True)
    )


def bid_accuracy(df: pd.DataFrame) -> pd.DataFrame:
    """Per player: rounds played, share of exact bids, mean absolute miss."""
    scored = bid_miss(df)
    scored["exact"] = scored["miss"] == 0
    scored["abs_miss"] = np.abs(scored["miss"])
    return (
        scored.groupby("player")
        .agg(
            rounds=("round_index", "count"),
            exact_rate=("exact", "mean"),
            mean_abs_miss=("abs_miss", "mean"),
        )
        .sort_values("exact_rate", ascending=False)
    )


def plot_score_progression(
    df: pd.DataFrame,
    ax: Optional[plt.Axes] = None,
) -> plt.Axes:
    """
    Mean cumulative score per round for each player, with a 95% CI band
    when the table holds more than one game.
    """
    stats = (
        df.groupby(["player", "round_index"])["total_score"]
        .agg(["mean", "std", "count"])
        .reset_index()
    )
    # mean ± 1.96 * (std / sqrt(n)); a single game has no spread.
    stats["ci95"] = (1.96 * stats["std"] / np.sqrt(stats["count"])).fillna(0.0)

    if ax is None:
        _, ax = plt.subplots(figsize=(10, 6))

    for player in df["player"].drop_duplicates():
        sub = stats[stats["player"] == player].sort_values("round_index")
        # Rounds are shown 1-based, the way players count them.
        x = sub["round_index"] + 1
        ax.plot(x, sub["mean"], marker="o", label=player)
        ax.fill_between(x, sub["mean"] - sub["ci95"], sub["mean"] + sub["ci95"], alpha=0.2)

    ax.axhline(0, linestyle="--", linewidth=0.8)
    ax.set_xlabel("Round")
    ax.set_ylabel("Cumulative score")
    ax.set_title("Score progression")
    ax.grid(True, linestyle=":", alpha=0.5)
    ax.legend()
    return ax

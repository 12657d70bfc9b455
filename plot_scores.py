from __future__ import annotations

import argparse
from typing import List

import matplotlib.pyplot as plt

from whist_keeper.analysis import (
    bid_accuracy,
    final_standings,
    load_score_table,
    plot_score_progression,
)


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Summarize and plot an exported Whist score table."
    )
    parser.add_argument("csv", help="Score table written by whist_keeper.cli.")
    parser.add_argument(
        "--save",
        type=str,
        default=None,
        help="Write the chart to this file instead of opening a window.",
    )
    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    df = load_score_table(args.csv)

    print(final_standings(df).to_string(index=False))
    print()
    print(bid_accuracy(df).to_string(float_format=lambda v: f"{v:.2f}"))

    fig, ax = plt.subplots(figsize=(10, 6))
    plot_score_progression(df, ax=ax)
    fig.tight_layout()
    if args.save:
        fig.savefig(args.save, dpi=150)
    else:
        plt.show()


if __name__ == "__main__":
    main()

from __future__ import annotations

import random
import sys
from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np

from valleyfarm.autoplay import AutoplayOptions, AutoplayResult, simulate_days
from valleyfarm.config import GameConfig
from valleyfarm.crops import CROP_CATALOG, crops_for_season
from valleyfarm.clock import season_for_day
from valleyfarm.game import new_game

DEFAULT_DAYS = 28


def _parse_args(argv: list[str]) -> tuple[str, str, int]:
    """Parse CLI args into (config_path, output_path, days)."""
    days = DEFAULT_DAYS
    args: list[str] = []
    idx = 1
    while idx < len(argv):
        arg = argv[idx]
        if arg == "--days":
            if idx + 1 >= len(argv):
                raise ValueError("missing value for --days")
            days = int(argv[idx + 1])
            idx += 2
            continue
        if arg.startswith("--days="):
            days = int(arg.split("=", 1)[1])
            idx += 1
            continue
        args.append(arg)
        idx += 1

    if not args:
        raise ValueError("missing config path")
    if days < 1:
        raise ValueError("days must be >= 1")
    output_path = args[1] if len(args) > 1 else ""
    return args[0], output_path, days


def _strategies(cfg: GameConfig) -> list[str]:
    """Return "best" plus every crop plantable in the starting season."""
    return ["best"] + crops_for_season(season_for_day(cfg.start_day))


def _run_strategy(cfg: GameConfig, crop: str, days: int) -> AutoplayResult:
    # Same weather sequence for every strategy so curves are comparable.
    game = new_game(cfg, rng=random.Random(cfg.random_seed if cfg.random_seed is not None else 0))
    return simulate_days(game, days, AutoplayOptions(crop=crop))


def _gold_matrix(results: Sequence[AutoplayResult]) -> np.ndarray:
    """Stack per-day gold histories into a (strategies, days) matrix, padding short runs."""
    if not results:
        return np.zeros((0, 0), dtype=float)
    width = max(len(r.gold_history) for r in results)
    matrix = np.zeros((len(results), width), dtype=float)
    for i, r in enumerate(results):
        history = r.gold_history
        if not history:
            continue
        matrix[i, : len(history)] = history
        matrix[i, len(history) :] = history[-1]
    return matrix


def _best_strategy(labels: Sequence[str], final_gold: np.ndarray) -> tuple[str, int]:
    """Return the label and value of the strategy with the highest final gold."""
    if len(labels) == 0:
        raise ValueError("no strategies to compare")
    idx = int(np.argmax(final_gold))
    return labels[idx], int(final_gold[idx])


def main() -> int:
    """Plot gold over time for each planting strategy."""
    if len(sys.argv) < 2:
        print("Usage: python -m valleyfarm.graph_app path/to/config.json [output.png]")
        print("Optional: --days 28")
        return 2
    try:
        config_path, output_path, days = _parse_args(sys.argv)
    except ValueError as exc:
        print(f"Error: {exc}")
        return 2

    cfg = GameConfig.from_json_file(config_path)
    labels = _strategies(cfg)
    results = [_run_strategy(cfg, label, days) for label in labels]
    matrix = _gold_matrix(results)
    final_gold = np.array([r.final_state.ledger.gold if r.final_state else 0 for r in results], dtype=float)
    best_label, best_gold = _best_strategy(labels, final_gold)
    print(f"best strategy over {days} days: {best_label} ({best_gold:,}g)")

    fig, (curve_ax, bar_ax) = plt.subplots(1, 2, figsize=(13, 5.5))
    day_axis = np.arange(1, matrix.shape[1] + 1)
    for label, row in zip(labels, matrix):
        emoji = CROP_CATALOG[label].emoji if label in CROP_CATALOG else ""
        curve_ax.plot(day_axis, row, label=f"{emoji} {label}".strip(), linewidth=1.6)
    curve_ax.set_title("Gold at end of each day")
    curve_ax.set_xlabel("day")
    curve_ax.set_ylabel("gold")
    curve_ax.legend(fontsize=8)
    curve_ax.grid(alpha=0.3)

    colors = ["tab:orange" if label == best_label else "tab:green" for label in labels]
    bar_ax.bar(labels, final_gold, color=colors)
    bar_ax.set_title(f"Final gold after {days} days")
    bar_ax.tick_params(axis="x", rotation=30)
    for x, value in enumerate(final_gold):
        bar_ax.text(x, value, f"{int(value):,}", ha="center", va="bottom", fontsize=8)
    fig.tight_layout()

    if output_path:
        fig.savefig(output_path, dpi=150)
    else:
        plt.show()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

import logging
import sys

from valleyfarm.autoplay import AutoplayOptions, simulate_days
from valleyfarm.config import GameConfig, _normalize_crop_name
from valleyfarm.crops import CROP_CATALOG, CROP_TYPES
from valleyfarm.game import new_game
from valleyfarm.validation import validate_game_state

DEFAULT_DAYS = 28


def _parse_args(argv: list[str]) -> tuple[str, int, str, bool]:
    """Parse CLI args into (config_path, days, crop, verbose)."""
    crop = "best"
    verbose = False
    args: list[str] = []
    idx = 1
    while idx < len(argv):
        arg = argv[idx]
        if arg in ("-v", "--verbose"):
            verbose = True
            idx += 1
            continue
        if arg == "--crop":
            if idx + 1 >= len(argv):
                raise ValueError("missing value for --crop")
            crop = argv[idx + 1]
            idx += 2
            continue
        if arg.startswith("--crop="):
            crop = arg.split("=", 1)[1]
            idx += 1
            continue
        args.append(arg)
        idx += 1

    if not args:
        raise ValueError("missing config path")
    if len(args) > 2:
        raise ValueError(f"unexpected arguments: {' '.join(args[2:])}")
    if crop.strip().lower() != "best":
        crop = _normalize_crop_name(crop)
    days = int(args[1]) if len(args) == 2 else DEFAULT_DAYS
    if days < 0:
        raise ValueError("days must be >= 0")
    return args[0], days, crop, verbose


def main() -> int:
    """Play a farm unattended from a JSON config and print a season report."""
    if len(sys.argv) < 2:
        print("Usage: python -m valleyfarm.main path/to/config.json [days]")
        print("Optional: --crop parsnip|...|best  --verbose")
        return 2
    try:
        config_path, days, crop, verbose = _parse_args(sys.argv)
    except ValueError as exc:
        print(f"Error: {exc}")
        return 2

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        cfg = GameConfig.from_json_file(config_path)
        game = new_game(cfg)
    except (OSError, ValueError) as exc:
        print(f"Error: invalid config: {exc}")
        return 2

    start = game.clock
    print(
        f"grid={cfg.grid_size}x{cfg.grid_size} gold={cfg.starting_gold} energy={cfg.initial_energy}/{cfg.max_energy} "
        f"start=year {start.year} {start.season} {start.season_day} ({start.weather})"
    )
    print(f"days={days} crop strategy={crop}\n")

    result = simulate_days(game, days, AutoplayOptions(crop=crop))
    validate_game_state(game.state)

    clock = game.clock
    ledger = game.ledger
    for crop_type in CROP_TYPES:
        harvested = result.harvested[crop_type]
        bought = result.seeds_bought[crop_type]
        if not harvested and not bought:
            continue
        spec = CROP_CATALOG[crop_type]
        print(f"{spec.emoji} {crop_type}:")
        print(f"  seeds bought: {bought} ({bought * spec.seed_price}g)")
        print(f"  harvested: {harvested} ({harvested * spec.sell_price}g)")

    growing = sum(1 for _ in game.grid.crops())
    print()
    print(f"end: year {clock.year} {clock.season} {clock.season_day} ({clock.weather})")
    print(f"crops still growing: {growing}")
    print(f"seeds left: {sum(ledger.seed_stock.values())}")
    print(f"gold earned from sales: {result.gold_earned}")
    if result.exhausted_days:
        print(f"days ending exhausted: {result.exhausted_days}")
    print(f"FINAL GOLD: {ledger.gold}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

from dataclasses import dataclass, field
import logging

from valleyfarm.crops import CROP_CATALOG, CROP_TYPES, CropType, crop_spec, crops_for_season
from valleyfarm.actions import ENERGY_COST
from valleyfarm.game import FarmGame, GameState
from valleyfarm.grid import Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AutoplayOptions:
    # "best" = highest profit per growth day among crops that can still mature.
    crop: str = "best"
    gold_reserve: int = 0
    max_tiles: int | None = None


@dataclass
class AutoplayResult:
    days: int
    gold_history: list[int] = field(default_factory=list)
    harvested: dict[CropType, int] = field(default_factory=lambda: {c: 0 for c in CROP_TYPES})
    seeds_bought: dict[CropType, int] = field(default_factory=lambda: {c: 0 for c in CROP_TYPES})
    gold_earned: int = 0
    exhausted_days: int = 0
    final_state: GameState | None = None

    @property
    def total_harvested(self) -> int:
        return sum(self.harvested.values())


def choose_crop(game: FarmGame, options: AutoplayOptions, days_remaining: int) -> CropType | None:
    """Pick the crop to plant today, or None if nothing suitable is in season."""
    season = game.clock.season
    # A crop needs grow_time watered nights; the harvest happens the morning after.
    if options.crop != "best":
        spec = crop_spec(options.crop)
        if not spec.in_season(season) or spec.grow_time > days_remaining:
            return None
        return spec.crop_type

    best: CropType | None = None
    best_score = 0.0
    for crop_type in crops_for_season(season):
        spec = CROP_CATALOG[crop_type]
        if spec.grow_time > days_remaining:
            continue
        score = spec.profit_per_day
        if score > best_score:
            best_score = score
            best = crop_type
    return best


def _plot_positions(game: FarmGame, options: AutoplayOptions) -> list[Position]:
    positions = list(game.grid.positions())
    if options.max_tiles is not None:
        positions = positions[: max(0, options.max_tiles)]
    return positions


def _harvest_and_sell(game: FarmGame, positions: list[Position], result: AutoplayResult) -> None:
    for position in positions:
        crop = game.grid.tile(position).crop
        if crop is None or not crop.is_mature:
            continue
        if game.apply_action(position, tool="harvest") == "applied":
            result.harvested[crop.crop_type] += 1
    result.gold_earned += game.sell_all()


def _buy_seeds(game: FarmGame, crop_type: CropType, wanted: int, options: AutoplayOptions, result: AutoplayResult) -> None:
    price = CROP_CATALOG[crop_type].seed_price
    missing = wanted - game.ledger.seed_stock[crop_type]
    while missing > 0 and game.ledger.gold - price >= options.gold_reserve:
        if not game.buy_seed(crop_type):
            break
        result.seeds_bought[crop_type] += 1
        missing -= 1


def _tend(game: FarmGame, positions: list[Position], crop_type: CropType | None) -> None:
    # Water what is already growing before spending energy on new ground.
    for position in positions:
        crop = game.grid.tile(position).crop
        if crop is not None and not crop.watered and not crop.is_mature:
            game.apply_action(position, tool="water")

    if crop_type is None:
        return
    plant_cost = ENERGY_COST["plant"] + ENERGY_COST["water"]
    for position in positions:
        if game.ledger.seed_stock[crop_type] <= 0:
            break
        tile = game.grid.tile(position)
        if not tile.is_empty:
            continue
        if not tile.tilled:
            if game.ledger.energy < ENERGY_COST["till"] + plant_cost:
                continue
            game.apply_action(position, tool="till")
        if game.ledger.energy < plant_cost:
            break
        if game.apply_action(position, tool="plant", selected_seed=crop_type) == "applied":
            game.apply_action(position, tool="water")


def simulate_days(game: FarmGame, days: int, options: AutoplayOptions | None = None) -> AutoplayResult:
    """
    Play the farm unattended for a number of days.

    Each day: harvest and sell everything mature, restock seeds for the empty
    plots, water growing crops, till and plant, then sleep. A final harvest
    and sale runs on the morning after the last night.
    """
    options = options or AutoplayOptions()
    days = max(0, int(days))
    result = AutoplayResult(days=days)
    positions = _plot_positions(game, options)

    for day_index in range(days):
        _harvest_and_sell(game, positions, result)

        days_remaining = days - day_index
        crop_type = choose_crop(game, options, days_remaining)
        if crop_type is not None:
            open_plots = sum(1 for p in positions if game.grid.tile(p).crop is None)
            _buy_seeds(game, crop_type, open_plots, options, result)

        _tend(game, positions, crop_type)
        if game.ledger.is_exhausted:
            result.exhausted_days += 1

        result.gold_history.append(game.ledger.gold)
        game.advance_day()

    _harvest_and_sell(game, positions, result)
    result.final_state = game.state
    logger.info(
        f"Autoplay finished after {days} days: gold={game.ledger.gold} "
        f"harvested={result.total_harvested} earned={result.gold_earned}"
    )
    return result

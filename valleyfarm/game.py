from __future__ import annotations

from dataclasses import dataclass, replace
import logging
import random

from valleyfarm.actions import Outcome, Tool, _normalize_tool, apply_action
from valleyfarm.clock import RandomSource, WorldClock
from valleyfarm.config import GameConfig
from valleyfarm.crops import CropType, crop_spec
from valleyfarm.day_cycle import advance_day
from valleyfarm.grid import Grid, Position
from valleyfarm.ledger import PlayerLedger
from valleyfarm.market import ShopEntry, buy_seed, sell_all, shop_listing
from valleyfarm.validation import validate_game_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameState:
    grid: Grid
    ledger: PlayerLedger
    clock: WorldClock


class FarmGame:
    """
    Single owner of the simulation state.

    Every operation computes a complete new GameState and swaps it in with one
    assignment, so anything reading `state` sees either the old or the new
    snapshot, never a grid from one and a ledger from the other.
    """

    def __init__(
        self,
        state: GameState,
        rng: RandomSource | None = None,
        tool: Tool = "till",
        selected_seed: CropType = "parsnip",
    ):
        self._state = state
        self._rng = rng if rng is not None else random.Random()
        self.tool: Tool = _normalize_tool(tool)
        self.selected_seed: CropType = crop_spec(selected_seed).crop_type

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def grid(self) -> Grid:
        return self._state.grid

    @property
    def ledger(self) -> PlayerLedger:
        return self._state.ledger

    @property
    def clock(self) -> WorldClock:
        return self._state.clock

    def select_tool(self, tool: str) -> None:
        self.tool = _normalize_tool(tool)

    def select_seed(self, crop_type: str) -> None:
        self.selected_seed = crop_spec(crop_type).crop_type

    def apply_action(
        self,
        position: Position,
        tool: str | None = None,
        selected_seed: str | None = None,
    ) -> Outcome:
        """Use a tool on a tile; tool and seed default to the current selection."""
        use_tool = self.tool if tool is None else _normalize_tool(tool)
        seed = self.selected_seed if selected_seed is None else selected_seed
        state = self._state
        result = apply_action(state.grid, state.ledger, state.clock, use_tool, seed, position)
        if result.applied:
            self._state = replace(state, grid=result.grid, ledger=result.ledger)
            logger.debug(f"{use_tool} at {position}: energy {state.ledger.energy} -> {result.ledger.energy}")
        elif result.outcome == "exhausted":
            logger.debug(f"{use_tool} at {position} rejected: too tired")
        return result.outcome

    def advance_day(self) -> None:
        state = self._state
        result = advance_day(state.grid, state.ledger, state.clock, self._rng)
        self._state = GameState(grid=result.grid, ledger=result.ledger, clock=result.clock)
        clock = result.clock
        logger.info(f"Day {clock.day}: {clock.season} {clock.season_day}, {clock.weather}")

    def buy_seed(self, crop_type: str) -> bool:
        purchase = buy_seed(self._state.ledger, crop_type)
        if purchase.bought:
            self._state = replace(self._state, ledger=purchase.ledger)
        return purchase.bought

    def sell_all(self) -> int:
        sale = sell_all(self._state.ledger)
        if sale.gold_gained:
            self._state = replace(self._state, ledger=sale.ledger)
            logger.info(f"Sold {sum(sale.sold.values())} crops for {sale.gold_gained}g")
        return sale.gold_gained

    def shop_listing(self) -> list[ShopEntry]:
        return shop_listing(self._state.clock.season, self._state.ledger.gold)


def new_game(config: GameConfig | None = None, rng: RandomSource | None = None) -> FarmGame:
    """Build a fresh game from starting conditions."""
    cfg = config or GameConfig()
    validate_game_config(cfg)
    if rng is None:
        rng = random.Random(cfg.random_seed)
    ledger = PlayerLedger(
        gold=cfg.starting_gold,
        energy=cfg.initial_energy,
        max_energy=cfg.max_energy,
        seed_stock=dict(cfg.starting_seeds),
        harvest_inventory=dict(cfg.starting_inventory),
    )
    state = GameState(
        grid=Grid.empty(cfg.grid_size),
        ledger=ledger,
        clock=WorldClock(day=cfg.start_day, weather=cfg.start_weather),
    )
    return FarmGame(state, rng=rng)

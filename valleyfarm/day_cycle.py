from __future__ import annotations

from dataclasses import dataclass, replace

from valleyfarm.clock import RandomSource, WorldClock
from valleyfarm.grid import Crop, Grid
from valleyfarm.ledger import PlayerLedger


@dataclass(frozen=True)
class DayResult:
    grid: Grid
    ledger: PlayerLedger
    clock: WorldClock

    @property
    def rained(self) -> bool:
        return self.clock.weather == "rainy"


def grow_crops(grid: Grid) -> Grid:
    """Run the overnight growth pass over every cropped tile."""
    return grid.map_crops(Crop.grown)


def apply_rain(grid: Grid) -> Grid:
    """Mark every crop as watered."""
    return grid.map_crops(lambda crop: replace(crop, watered=True))


def advance_day(
    grid: Grid,
    ledger: PlayerLedger,
    clock: WorldClock,
    rng: RandomSource,
) -> DayResult:
    """
    Sleep through one night.

    Order matters:
    1. growth consumes the watered flags set during the day, then clears them
    2. the clock moves to the next day and draws new weather
    3. energy is refilled
    4. if the new day is rainy, every crop is watered once, now; that water
       is consumed by the *next* advance_day growth pass, not this one
    """
    grid = grow_crops(grid)
    clock = clock.next_day(rng)
    ledger = ledger.restored()
    if clock.weather == "rainy":
        grid = apply_rain(grid)
    return DayResult(grid=grid, ledger=ledger, clock=clock)

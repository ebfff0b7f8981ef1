from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Literal

from valleyfarm.clock import WorldClock
from valleyfarm.crops import crop_spec
from valleyfarm.grid import Crop, Grid, Position
from valleyfarm.ledger import PlayerLedger

Tool = Literal["till", "water", "plant", "harvest"]
Outcome = Literal["applied", "noop", "exhausted"]

TOOLS: tuple[Tool, ...] = ("till", "water", "plant", "harvest")

# Harvesting is free; every other tool costs energy.
ENERGY_COST: dict[Tool, int] = {
    "till": 2,
    "water": 1,
    "plant": 1,
    "harvest": 0,
}


@dataclass(frozen=True)
class ActionResult:
    grid: Grid
    ledger: PlayerLedger
    outcome: Outcome

    @property
    def applied(self) -> bool:
        return self.outcome == "applied"


def apply_action(
    grid: Grid,
    ledger: PlayerLedger,
    clock: WorldClock,
    tool: Tool,
    selected_seed: str | None,
    position: Position,
) -> ActionResult:
    """
    Validate and apply a single tool use on one tile.

    Rule violations (wrong tile state, out of season, no seed stock, immature
    crop) are absorbed as "noop" with the inputs returned untouched. The only
    distinguished rejection is "exhausted", checked before anything else.
    Bad coordinates or an unknown tool are caller bugs and raise.
    """
    tool = _normalize_tool(tool)
    tile = grid.tile(position)
    if ledger.is_exhausted:
        return ActionResult(grid, ledger, "exhausted")

    if tool == "till":
        if tile.tilled:
            return ActionResult(grid, ledger, "noop")
        new_tile = replace(tile, tilled=True)

    elif tool == "water":
        if not tile.tilled or tile.crop is None or tile.crop.watered:
            return ActionResult(grid, ledger, "noop")
        new_tile = replace(tile, crop=replace(tile.crop, watered=True))

    elif tool == "plant":
        if selected_seed is None:
            raise ValueError("plant requires a selected seed")
        spec = crop_spec(selected_seed)
        if (
            not tile.tilled
            or not tile.is_empty
            or ledger.seed_stock[spec.crop_type] <= 0
            or not spec.in_season(clock.season)
        ):
            return ActionResult(grid, ledger, "noop")
        new_tile = replace(tile, crop=Crop.sprout(spec.crop_type, clock.day))
        ledger = ledger.with_seeds(spec.crop_type, -1)

    else:
        if tile.crop is None or not tile.crop.is_mature:
            return ActionResult(grid, ledger, "noop")
        ledger = ledger.with_harvest(tile.crop.crop_type, 1)
        new_tile = replace(tile, crop=None)

    return ActionResult(
        grid=grid.with_tile(position, new_tile),
        ledger=ledger.spend_energy(ENERGY_COST[tool]),
        outcome="applied",
    )


def _normalize_tool(raw: Any) -> Tool:
    """Normalize tool names, accepting the hoe/seeds aliases."""
    key = str(raw).strip().lower()
    aliases = {"hoe": "till", "watering_can": "water", "seeds": "plant", "seed": "plant"}
    key = aliases.get(key, key)
    if key not in TOOLS:
        raise ValueError(f"Unknown tool: {raw}")
    return key

from __future__ import annotations

from typing import TYPE_CHECKING

from valleyfarm.config import GameConfig
from valleyfarm.crops import CROP_TYPES
from valleyfarm.grid import Grid
from valleyfarm.ledger import PlayerLedger

if TYPE_CHECKING:
    from valleyfarm.game import GameState


class ValidationError(ValueError):
    """Raised when input data is logically invalid."""


def validate_game_config(cfg: GameConfig) -> None:
    """Validate starting conditions before a game is built from them."""
    if cfg.grid_size < 1:
        raise ValidationError(f"grid_size must be >= 1 (got {cfg.grid_size})")
    if cfg.max_energy <= 0:
        raise ValidationError(f"max_energy must be > 0 (got {cfg.max_energy})")
    _ensure_non_negative(cfg.starting_gold, "starting_gold")
    _ensure_non_negative(cfg.initial_energy, "starting_energy")
    if cfg.initial_energy > cfg.max_energy:
        raise ValidationError(
            f"starting_energy {cfg.initial_energy} exceeds max_energy {cfg.max_energy}"
        )
    if cfg.start_day < 1:
        raise ValidationError(f"start_day must be >= 1 (got {cfg.start_day})")
    for label, mapping in (("seeds", cfg.starting_seeds), ("inventory", cfg.starting_inventory)):
        for key, value in mapping.items():
            if key not in CROP_TYPES:
                raise ValidationError(f"{label}.{key} is not a known crop")
            _ensure_non_negative(value, f"{label}.{key}")


def validate_game_state(state: "GameState") -> None:
    """Check every invariant a consistent game state must satisfy."""
    _validate_grid(state.grid)
    _validate_ledger(state.ledger)
    if state.clock.day < 1:
        raise ValidationError(f"day must be >= 1 (got {state.clock.day})")


def _ensure_non_negative(value: int, name: str) -> None:
    if value < 0:
        raise ValidationError(f"{name} must be >= 0 (got {value})")


def _validate_grid(grid: Grid) -> None:
    for row in grid.rows:
        if len(row) != grid.size:
            raise ValidationError(f"grid row has {len(row)} tiles, expected {grid.size}")
    for position, tile in grid.tiles():
        crop = tile.crop
        if crop is None:
            continue
        if not tile.tilled:
            raise ValidationError(f"tile {position} has a crop but is not tilled")
        if crop.growth < 0 or crop.growth > crop.max_growth:
            raise ValidationError(
                f"tile {position} crop growth {crop.growth} outside 0..{crop.max_growth}"
            )


def _validate_ledger(ledger: PlayerLedger) -> None:
    _ensure_non_negative(ledger.gold, "gold")
    if ledger.energy < 0 or ledger.energy > ledger.max_energy:
        raise ValidationError(f"energy {ledger.energy} outside 0..{ledger.max_energy}")
    for label, counts in (("seed_stock", ledger.seed_stock), ("harvest_inventory", ledger.harvest_inventory)):
        missing = [crop_type for crop_type in CROP_TYPES if crop_type not in counts]
        if missing:
            raise ValidationError(f"{label} missing crop types: {', '.join(missing)}")
        for crop_type, value in counts.items():
            _ensure_non_negative(value, f"{label}.{crop_type}")

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping

from valleyfarm.crops import CROP_TYPES, CropType, crop_spec


def _full_counts(raw: Mapping[str, int] | None = None) -> dict[CropType, int]:
    """Return a per-crop count mapping with every crop type present."""
    counts: dict[CropType, int] = {crop_type: 0 for crop_type in CROP_TYPES}
    for key, value in (raw or {}).items():
        spec = crop_spec(key)
        counts[spec.crop_type] = int(value)
    return counts


@dataclass(frozen=True)
class PlayerLedger:
    """Player resources: gold, energy and per-crop seed and harvest counts."""

    gold: int = 500
    energy: int = 100
    max_energy: int = 100
    seed_stock: Mapping[CropType, int] = field(default_factory=_full_counts)
    harvest_inventory: Mapping[CropType, int] = field(default_factory=_full_counts)

    def __post_init__(self) -> None:
        if self.max_energy <= 0:
            raise ValueError(f"max_energy must be > 0 (got {self.max_energy})")
        if self.energy < 0 or self.energy > self.max_energy:
            raise ValueError(f"energy must be in 0..{self.max_energy} (got {self.energy})")
        if self.gold < 0:
            raise ValueError(f"gold must be >= 0 (got {self.gold})")
        # All seven crop types are always keys; the maps are read-only views.
        object.__setattr__(self, "seed_stock", MappingProxyType(_full_counts(self.seed_stock)))
        object.__setattr__(self, "harvest_inventory", MappingProxyType(_full_counts(self.harvest_inventory)))
        for label, counts in (("seed_stock", self.seed_stock), ("harvest_inventory", self.harvest_inventory)):
            for crop_type, value in counts.items():
                if value < 0:
                    raise ValueError(f"{label}.{crop_type} must be >= 0 (got {value})")

    @property
    def is_exhausted(self) -> bool:
        return self.energy <= 0

    @property
    def harvest_total(self) -> int:
        return sum(self.harvest_inventory.values())

    def spend_energy(self, cost: int) -> "PlayerLedger":
        """Return a ledger with energy reduced by cost, floored at zero."""
        return replace(self, energy=max(0, self.energy - cost))

    def restored(self) -> "PlayerLedger":
        return replace(self, energy=self.max_energy)

    def with_seeds(self, crop_type: CropType, delta: int) -> "PlayerLedger":
        stock = dict(self.seed_stock)
        stock[crop_type] = stock[crop_type] + delta
        return replace(self, seed_stock=stock)

    def with_harvest(self, crop_type: CropType, delta: int) -> "PlayerLedger":
        inventory = dict(self.harvest_inventory)
        inventory[crop_type] = inventory[crop_type] + delta
        return replace(self, harvest_inventory=inventory)

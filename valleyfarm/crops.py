from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Literal

from valleyfarm.clock import Season, _normalize_season

CropType = Literal["parsnip", "cauliflower", "potato", "strawberry", "melon", "corn", "pumpkin"]

CROP_TYPES: tuple[CropType, ...] = ("parsnip", "cauliflower", "potato", "strawberry", "melon", "corn", "pumpkin")


@dataclass(frozen=True)
class CropSpec:
    crop_type: CropType
    emoji: str
    # Glyph per visual growth stage, seedling first and ripe last.
    stages: tuple[str, ...]
    grow_time: int
    sell_price: int
    seed_price: int
    seasons: tuple[Season, ...]

    @property
    def stage_count(self) -> int:
        return len(self.stages)

    def in_season(self, season: Season) -> bool:
        """Return True if this crop may be planted during the given season."""
        return season in self.seasons

    @property
    def profit_per_day(self) -> float:
        """Return raw sale profit per growth day for a single planting."""
        return (self.sell_price - self.seed_price) / self.grow_time


CROP_CATALOG: dict[CropType, CropSpec] = {
    "parsnip": CropSpec("parsnip", "🥕", ("🌱", "🌿", "🥕"), 4, 35, 20, ("spring",)),
    "cauliflower": CropSpec("cauliflower", "🥦", ("🌱", "🌿", "🥬", "🥦"), 12, 175, 80, ("spring",)),
    "potato": CropSpec("potato", "🥔", ("🌱", "🌿", "🥔"), 6, 80, 50, ("spring",)),
    "strawberry": CropSpec("strawberry", "🍓", ("🌱", "🌿", "🌸", "🍓"), 8, 120, 100, ("spring", "summer")),
    "melon": CropSpec("melon", "🍈", ("🌱", "🌿", "🍈"), 12, 250, 80, ("summer",)),
    "corn": CropSpec("corn", "🌽", ("🌱", "🌿", "🌾", "🌽"), 14, 50, 150, ("summer", "fall")),
    "pumpkin": CropSpec("pumpkin", "🎃", ("🌱", "🌿", "🎃"), 13, 320, 100, ("fall",)),
}


def crop_spec(crop_type: str) -> CropSpec:
    """Return catalog data for a crop type, raising ValueError for unknown types."""
    spec = CROP_CATALOG.get(crop_type)
    if spec is None:
        raise ValueError(f"Unknown crop type: {crop_type}")
    return spec


def is_in_season(crop_type: str, season: str) -> bool:
    return crop_spec(crop_type).in_season(_normalize_season(season))


def crops_for_season(season: str) -> list[CropType]:
    """Return crop types plantable in a season, in catalog order."""
    key = _normalize_season(season)
    return [crop_type for crop_type in CROP_TYPES if CROP_CATALOG[crop_type].in_season(key)]


def stage_index(growth: int, max_growth: int, stage_count: int) -> int:
    """Map growth progress onto a 0-based visual stage index."""
    if stage_count < 1:
        raise ValueError("stage_count must be >= 1")
    if max_growth <= 0:
        return stage_count - 1
    idx = math.floor((growth / max_growth) * (stage_count - 1))
    return min(idx, stage_count - 1)


def stage_glyph(crop_type: str, growth: int, max_growth: int) -> str:
    """Return the stage emoji a renderer would show for a crop."""
    spec = crop_spec(crop_type)
    return spec.stages[stage_index(growth, max_growth, spec.stage_count)]

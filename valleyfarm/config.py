from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
import json
from pathlib import Path

from valleyfarm.clock import Weather, _normalize_season, _normalize_weather, day_from_season_day
from valleyfarm.crops import CROP_TYPES, CropType
from valleyfarm.grid import GRID_SIZE


def _default_seeds() -> dict[CropType, int]:
    return {"parsnip": 15}


@dataclass(frozen=True)
class GameConfig:
    """Starting conditions for a new farm."""

    grid_size: int = GRID_SIZE
    starting_gold: int = 500
    max_energy: int = 100
    starting_energy: int | None = None  # None = start rested
    starting_seeds: dict[CropType, int] = field(default_factory=_default_seeds)
    starting_inventory: dict[CropType, int] = field(default_factory=dict)
    start_day: int = 1
    start_weather: Weather = "sunny"
    random_seed: int | None = None

    @property
    def initial_energy(self) -> int:
        return self.max_energy if self.starting_energy is None else self.starting_energy

    @staticmethod
    def from_json_file(path: str | Path) -> "GameConfig":
        """Load config from a JSON file on disk."""
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        return GameConfig.from_dict(raw)

    @staticmethod
    def from_dict(raw: dict[str, Any]) -> "GameConfig":
        """Build config from a decoded JSON dict."""
        if not isinstance(raw, dict):
            raise ValueError("config must be a JSON object")
        player_raw = raw.get("player", {})
        if not isinstance(player_raw, dict):
            raise ValueError("player must be a mapping")

        start_day_raw = raw.get("start_day")
        cal_raw = raw.get("calendar", {})
        if start_day_raw is None and isinstance(cal_raw, dict) and cal_raw:
            season_raw = cal_raw.get("season")
            day_raw = cal_raw.get("day")
            if season_raw is not None and day_raw is not None:
                start_day_raw = day_from_season_day(
                    _normalize_season(season_raw),
                    int(day_raw),
                    int(cal_raw.get("year", 1)),
                )

        energy_raw = player_raw.get("energy")
        seed_raw = raw.get("random_seed")
        seeds_raw = player_raw.get("seeds")
        return GameConfig(
            grid_size=int(raw.get("grid_size", GRID_SIZE)),
            starting_gold=int(player_raw.get("gold", 500)),
            max_energy=int(player_raw.get("max_energy", 100)),
            starting_energy=int(energy_raw) if energy_raw is not None else None,
            starting_seeds=_parse_crop_int_map(seeds_raw) if seeds_raw is not None else _default_seeds(),
            starting_inventory=_parse_crop_int_map(player_raw.get("inventory")),
            start_day=int(start_day_raw) if start_day_raw is not None else 1,
            start_weather=_normalize_weather(raw.get("weather", "sunny")),
            random_seed=int(seed_raw) if seed_raw is not None else None,
        )


def _normalize_crop_name(raw: Any) -> CropType:
    """Normalize crop identifiers (case, spacing, plural seeds) to a catalog crop type."""
    if raw is None:
        raise ValueError("Unknown crop name: None")
    key = str(raw).strip().lower()
    norm = key.replace(" ", "").replace("_", "").replace("-", "")
    for suffix in ("seeds", "seed"):
        if norm.endswith(suffix) and norm != suffix:
            norm = norm[: -len(suffix)]
            break
    if norm == "cauli":
        norm = "cauliflower"
    if norm in CROP_TYPES:
        return norm
    raise ValueError(f"Unknown crop name: {raw}")


def _parse_crop_int_map(raw: Any) -> dict[CropType, int]:
    """Parse a per-crop integer mapping; 'all' applies one value to every crop."""
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError("Expected a mapping for per-crop values")
    out: dict[CropType, int] = {}
    for key, value in raw.items():
        if str(key).strip().lower() == "all":
            for crop_type in CROP_TYPES:
                out[crop_type] = int(value)
        else:
            out[_normalize_crop_name(key)] = int(value)
    return out

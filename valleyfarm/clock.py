from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Literal, Protocol, Sequence

Season = Literal["spring", "summer", "fall", "winter"]
Weather = Literal["sunny", "rainy", "cloudy"]

SEASONS: tuple[Season, ...] = ("spring", "summer", "fall", "winter")
DAYS_PER_SEASON = 28
DAYS_PER_YEAR = DAYS_PER_SEASON * len(SEASONS)

# Five equally likely slots: 60% sunny, 20% cloudy, 20% rainy.
WEATHER_TABLE: tuple[Weather, ...] = ("sunny", "sunny", "sunny", "cloudy", "rainy")


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


def _check_day(day: int) -> None:
    if day < 1:
        raise ValueError("day must be >= 1")


def season_index(day: int) -> int:
    """Return the 0-based season index for a 1-based absolute day."""
    _check_day(day)
    return ((day - 1) // DAYS_PER_SEASON) % len(SEASONS)


def season_for_day(day: int) -> Season:
    """Return the season for a 1-based absolute day."""
    #  1..28  = spring
    # 29..56  = summer
    # 57..84  = fall
    # 85..112 = winter, then wrap
    return SEASONS[season_index(day)]


def season_day(day: int) -> int:
    """Return the 1..28 day within the current season."""
    _check_day(day)
    return ((day - 1) % DAYS_PER_SEASON) + 1


def year_for_day(day: int) -> int:
    _check_day(day)
    return ((day - 1) // DAYS_PER_YEAR) + 1


def day_from_season_day(season: Season, day: int, year: int = 1) -> int:
    """Convert a season/day pair (1..28) and year to an absolute day."""
    if day < 1 or day > DAYS_PER_SEASON:
        raise ValueError(f"day must be in 1..{DAYS_PER_SEASON}")
    if year < 1:
        raise ValueError("year must be >= 1")
    offset = SEASONS.index(_normalize_season(season)) * DAYS_PER_SEASON
    return (year - 1) * DAYS_PER_YEAR + offset + day


def roll_weather(rng: RandomSource, table: Sequence[Weather] = WEATHER_TABLE) -> Weather:
    """Draw one slot from the weather table using the injected random source."""
    return table[rng.randrange(len(table))]


@dataclass(frozen=True)
class WorldClock:
    day: int = 1
    weather: Weather = "sunny"

    def __post_init__(self) -> None:
        _check_day(self.day)
        if self.weather not in WEATHER_TABLE:
            raise ValueError(f"Unknown weather: {self.weather}")

    @property
    def season(self) -> Season:
        return season_for_day(self.day)

    @property
    def season_index(self) -> int:
        return season_index(self.day)

    @property
    def season_day(self) -> int:
        return season_day(self.day)

    @property
    def year(self) -> int:
        return year_for_day(self.day)

    @property
    def days_left_in_season(self) -> int:
        """Return how many advancements remain before the season changes."""
        return DAYS_PER_SEASON - self.season_day

    def next_day(self, rng: RandomSource) -> "WorldClock":
        """Return the clock for the following day with freshly drawn weather."""
        return replace(self, day=self.day + 1, weather=roll_weather(rng))


def _normalize_season(raw: Any) -> Season:
    """Normalize season identifiers to lowercase canonical values."""
    key = str(raw).strip().lower()
    if key == "autumn":
        key = "fall"
    if key not in SEASONS:
        raise ValueError(f"Unknown season: {raw}")
    return key


def _normalize_weather(raw: Any) -> Weather:
    key = str(raw).strip().lower()
    if key not in WEATHER_TABLE:
        raise ValueError(f"Unknown weather: {raw}")
    return key

import pytest

from valleyfarm.clock import (
    WEATHER_TABLE,
    WorldClock,
    _normalize_season,
    day_from_season_day,
    roll_weather,
    season_day,
    season_for_day,
    season_index,
    year_for_day,
)


class FixedRandom:
    """Returns the given slot indices in order."""

    def __init__(self, *slots):
        self.slots = list(slots)
        self.calls = 0

    def randrange(self, stop):
        value = self.slots[self.calls % len(self.slots)]
        self.calls += 1
        assert 0 <= value < stop
        return value


@pytest.mark.parametrize(
    "day, season, day_in_season",
    [
        (1, "spring", 1),
        (28, "spring", 28),
        (29, "summer", 1),
        (56, "summer", 28),
        (57, "fall", 1),
        (85, "winter", 1),
        (112, "winter", 28),
        (113, "spring", 1),
    ],
)
def test_season_rollover(day, season, day_in_season):
    assert season_for_day(day) == season
    assert season_day(day) == day_in_season


def test_season_index_wraps_years():
    assert season_index(1) == 0
    assert season_index(29) == 1
    assert season_index(113) == 0
    assert year_for_day(112) == 1
    assert year_for_day(113) == 2


def test_day_must_be_positive():
    with pytest.raises(ValueError):
        season_for_day(0)
    with pytest.raises(ValueError):
        WorldClock(day=0)


def test_day_from_season_day():
    assert day_from_season_day("spring", 1) == 1
    assert day_from_season_day("summer", 1) == 29
    assert day_from_season_day("Winter", 28) == 112
    assert day_from_season_day("spring", 1, year=2) == 113
    with pytest.raises(ValueError):
        day_from_season_day("spring", 29)


def test_weather_table_is_weighted_three_one_one():
    assert len(WEATHER_TABLE) == 5
    assert WEATHER_TABLE.count("sunny") == 3
    assert WEATHER_TABLE.count("cloudy") == 1
    assert WEATHER_TABLE.count("rainy") == 1


def test_roll_weather_uses_injected_source():
    rng = FixedRandom(0, 3, 4)
    assert [roll_weather(rng) for _ in range(3)] == ["sunny", "cloudy", "rainy"]


def test_clock_next_day():
    clock = WorldClock(day=28, weather="sunny")
    nxt = clock.next_day(FixedRandom(4))
    assert nxt.day == 29
    assert nxt.season == "summer"
    assert nxt.season_day == 1
    assert nxt.weather == "rainy"
    # the original snapshot is untouched
    assert clock.day == 28


def test_clock_derived_fields():
    clock = WorldClock(day=1)
    assert clock.season == "spring"
    assert clock.season_index == 0
    assert clock.days_left_in_season == 27
    assert clock.year == 1
    with pytest.raises(ValueError):
        WorldClock(day=1, weather="snowy")


def test_normalize_season():
    assert _normalize_season(" Autumn ") == "fall"
    assert _normalize_season("SPRING") == "spring"
    with pytest.raises(ValueError):
        _normalize_season("monsoon")

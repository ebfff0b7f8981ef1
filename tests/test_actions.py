import pytest

from valleyfarm.actions import ENERGY_COST, _normalize_tool, apply_action
from valleyfarm.clock import WorldClock
from valleyfarm.grid import Crop, Grid, Tile
from valleyfarm.ledger import PlayerLedger

POS = (1, 2)


def _grid_with(tile: Tile) -> Grid:
    return Grid.empty().with_tile(POS, tile)


def _ledger(**kwargs) -> PlayerLedger:
    kwargs.setdefault("seed_stock", {"parsnip": 3})
    return PlayerLedger(**kwargs)


SPRING = WorldClock(day=3)
SUMMER = WorldClock(day=30)


def test_till_untilled_tile():
    grid, ledger = Grid.empty(), _ledger()
    result = apply_action(grid, ledger, SPRING, "till", None, POS)
    assert result.outcome == "applied"
    assert result.applied
    assert result.grid.tile(POS).tilled
    assert result.ledger.energy == 98
    # inputs are not mutated
    assert not grid.tile(POS).tilled
    assert ledger.energy == 100


def test_till_already_tilled_is_free_noop():
    grid, ledger = _grid_with(Tile(tilled=True)), _ledger()
    result = apply_action(grid, ledger, SPRING, "till", None, POS)
    assert result.outcome == "noop"
    assert result.grid is grid
    assert result.ledger is ledger
    assert not result.applied


def test_water_crop():
    grid = _grid_with(Tile(tilled=True, crop=Crop.sprout("parsnip", 1)))
    result = apply_action(grid, _ledger(), SPRING, "water", None, POS)
    assert result.outcome == "applied"
    assert result.grid.tile(POS).crop.watered
    assert result.ledger.energy == 99


@pytest.mark.parametrize(
    "tile",
    [
        Tile(),
        Tile(tilled=True),
        Tile(tilled=True, crop=Crop("parsnip", growth=1, max_growth=4, watered=True)),
    ],
)
def test_water_noops(tile):
    grid, ledger = _grid_with(tile), _ledger()
    result = apply_action(grid, ledger, SPRING, "water", None, POS)
    assert result.outcome == "noop"
    assert result.grid is grid
    assert result.ledger is ledger


def test_plant_in_season():
    grid, ledger = _grid_with(Tile(tilled=True)), _ledger()
    result = apply_action(grid, ledger, SPRING, "plant", "parsnip", POS)
    assert result.outcome == "applied"
    crop = result.grid.tile(POS).crop
    assert crop == Crop("parsnip", growth=0, max_growth=4, watered=False, planted_on_day=3)
    assert result.ledger.seed_stock["parsnip"] == 2
    assert result.ledger.energy == 99


@pytest.mark.parametrize(
    "tile, seed, clock, stock",
    [
        # out of season
        (Tile(tilled=True), "parsnip", SUMMER, {"parsnip": 3}),
        # out of stock
        (Tile(tilled=True), "potato", SPRING, {"parsnip": 3}),
        # untilled
        (Tile(), "parsnip", SPRING, {"parsnip": 3}),
        # occupied
        (Tile(tilled=True, crop=Crop.sprout("potato", 1)), "parsnip", SPRING, {"parsnip": 3}),
    ],
)
def test_plant_noops(tile, seed, clock, stock):
    grid, ledger = _grid_with(tile), _ledger(seed_stock=stock)
    result = apply_action(grid, ledger, clock, "plant", seed, POS)
    assert result.outcome == "noop"
    assert result.grid is grid
    assert result.ledger.seed_stock == ledger.seed_stock
    assert result.ledger.energy == ledger.energy


def test_plant_multi_season_crop_in_second_season():
    grid = _grid_with(Tile(tilled=True))
    result = apply_action(grid, _ledger(seed_stock={"strawberry": 1}), SUMMER, "plant", "strawberry", POS)
    assert result.outcome == "applied"
    assert result.ledger.seed_stock["strawberry"] == 0


def test_harvest_mature_crop_costs_no_energy():
    grid = _grid_with(Tile(tilled=True, crop=Crop("corn", growth=14, max_growth=14)))
    result = apply_action(grid, _ledger(energy=5), SPRING, "harvest", None, POS)
    assert result.outcome == "applied"
    tile = result.grid.tile(POS)
    assert tile.tilled
    assert tile.crop is None
    assert result.ledger.harvest_inventory["corn"] == 1
    assert result.ledger.energy == 5


def test_harvest_immature_crop_is_noop():
    grid = _grid_with(Tile(tilled=True, crop=Crop("corn", growth=13, max_growth=14, watered=True)))
    ledger = _ledger()
    result = apply_action(grid, ledger, SPRING, "harvest", None, POS)
    assert result.outcome == "noop"
    assert result.grid == grid
    assert result.ledger == ledger


@pytest.mark.parametrize("tool", ["till", "water", "plant", "harvest"])
def test_zero_energy_is_exhausted(tool):
    grid = _grid_with(Tile(tilled=True, crop=Crop("parsnip", growth=4, max_growth=4)))
    ledger = _ledger(energy=0)
    result = apply_action(grid, ledger, SPRING, tool, "parsnip", POS)
    assert result.outcome == "exhausted"
    assert result.grid == grid
    assert result.ledger == ledger


def test_low_energy_action_floors_at_zero():
    result = apply_action(Grid.empty(), _ledger(energy=1), SPRING, "till", None, POS)
    assert result.outcome == "applied"
    assert result.ledger.energy == 0


def test_energy_costs():
    assert ENERGY_COST == {"till": 2, "water": 1, "plant": 1, "harvest": 0}


def test_caller_bugs_raise():
    with pytest.raises(IndexError):
        apply_action(Grid.empty(), _ledger(), SPRING, "till", None, (6, 0))
    with pytest.raises(ValueError):
        apply_action(Grid.empty(), _ledger(), SPRING, "scythe", None, POS)
    with pytest.raises(ValueError):
        apply_action(_grid_with(Tile(tilled=True)), _ledger(), SPRING, "plant", None, POS)
    with pytest.raises(ValueError):
        apply_action(_grid_with(Tile(tilled=True)), _ledger(), SPRING, "plant", "turnip", POS)


def test_tool_aliases():
    assert _normalize_tool("Hoe") == "till"
    assert _normalize_tool("seeds") == "plant"
    assert _normalize_tool("harvest") == "harvest"

import pytest

from valleyfarm.ledger import PlayerLedger
from valleyfarm.market import buy_seed, inventory_value, sell_all, shop_listing


def test_sell_all_totals_and_clears():
    ledger = PlayerLedger(gold=10, harvest_inventory={"parsnip": 3, "corn": 1})
    sale = sell_all(ledger)
    assert sale.gold_gained == 3 * 35 + 1 * 50 == 155
    assert sale.ledger.gold == 165
    assert sale.sold == {"parsnip": 3, "corn": 1}
    assert all(count == 0 for count in sale.ledger.harvest_inventory.values())
    assert len(sale.ledger.harvest_inventory) == 7


def test_sell_all_with_nothing_is_noop():
    ledger = PlayerLedger(gold=10)
    sale = sell_all(ledger)
    assert sale.gold_gained == 0
    assert sale.ledger is ledger
    assert sell_all(sale.ledger).gold_gained == 0


def test_buy_seed_insufficient_gold():
    ledger = PlayerLedger(gold=50)
    purchase = buy_seed(ledger, "pumpkin")
    assert purchase.bought is False
    assert purchase.ledger is ledger


def test_buy_seed_success():
    purchase = buy_seed(PlayerLedger(gold=150), "pumpkin")
    assert purchase.bought is True
    assert purchase.ledger.gold == 50
    assert purchase.ledger.seed_stock["pumpkin"] == 1


def test_buy_seed_exact_gold():
    purchase = buy_seed(PlayerLedger(gold=20), "parsnip")
    assert purchase.bought
    assert purchase.ledger.gold == 0


def test_buy_unknown_seed_raises():
    with pytest.raises(ValueError):
        buy_seed(PlayerLedger(), "turnip")


def test_inventory_value():
    ledger = PlayerLedger(harvest_inventory={"pumpkin": 2, "melon": 1})
    assert inventory_value(ledger) == 2 * 320 + 250


def test_shop_listing_by_season():
    fall = shop_listing("fall", gold=120)
    assert [entry.crop.crop_type for entry in fall] == ["corn", "pumpkin"]
    assert [entry.affordable for entry in fall] == [False, True]
    assert shop_listing("winter") == []
    assert all(entry.affordable for entry in shop_listing("spring"))

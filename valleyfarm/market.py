from __future__ import annotations

from dataclasses import dataclass, field, replace

from valleyfarm.clock import _normalize_season
from valleyfarm.crops import CROP_CATALOG, CROP_TYPES, CropSpec, CropType, crop_spec, crops_for_season
from valleyfarm.ledger import PlayerLedger


@dataclass(frozen=True)
class SeedPurchase:
    ledger: PlayerLedger
    bought: bool


@dataclass(frozen=True)
class Sale:
    ledger: PlayerLedger
    gold_gained: int
    sold: dict[CropType, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ShopEntry:
    crop: CropSpec
    affordable: bool


def buy_seed(ledger: PlayerLedger, crop_type: str) -> SeedPurchase:
    """Buy one seed packet if the player can afford it; otherwise leave the ledger alone."""
    spec = crop_spec(crop_type)
    if ledger.gold < spec.seed_price:
        return SeedPurchase(ledger=ledger, bought=False)
    updated = replace(ledger, gold=ledger.gold - spec.seed_price).with_seeds(spec.crop_type, 1)
    return SeedPurchase(ledger=updated, bought=True)


def sell_all(ledger: PlayerLedger) -> Sale:
    """Sell every harvested crop at its catalog price."""
    sold = {crop_type: count for crop_type, count in ledger.harvest_inventory.items() if count > 0}
    if not sold:
        return Sale(ledger=ledger, gold_gained=0)
    gained = sum(count * CROP_CATALOG[crop_type].sell_price for crop_type, count in sold.items())
    inventory = {crop_type: 0 for crop_type in CROP_TYPES}
    updated = replace(ledger, gold=ledger.gold + gained, harvest_inventory=inventory)
    return Sale(ledger=updated, gold_gained=gained, sold=sold)


def inventory_value(ledger: PlayerLedger) -> int:
    """Return the gold sell_all would yield right now."""
    return sum(count * CROP_CATALOG[crop_type].sell_price for crop_type, count in ledger.harvest_inventory.items())


def shop_listing(season: str, gold: int | None = None) -> list[ShopEntry]:
    """Return the seeds on sale this season, flagging which ones the player can afford."""
    key = _normalize_season(season)
    entries = []
    for crop_type in crops_for_season(key):
        spec = CROP_CATALOG[crop_type]
        affordable = True if gold is None else gold >= spec.seed_price
        entries.append(ShopEntry(crop=spec, affordable=affordable))
    return entries

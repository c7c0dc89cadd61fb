"""
Shop module for the crawler.

The shop opens between floors and sells consumables, permanent upgrades,
special services and relics.
"""

from .catalog import (
    SHOP_EFFECTS,
    PurchaseResult,
    ShopItemDefinition,
    ShopOffer,
    buy_item,
    can_buy_item,
    get_price,
    get_shop_inventory,
    is_shop_floor,
)

__all__ = [
    "PurchaseResult",
    "SHOP_EFFECTS",
    "ShopItemDefinition",
    "ShopOffer",
    "buy_item",
    "can_buy_item",
    "get_price",
    "get_shop_inventory",
    "is_shop_floor",
]

"""아이템 시스템 Core — 순수 Python, DB 무관"""

from .models import (
    EffectTrigger,
    EffectType,
    Item,
    ItemEffect,
    ItemRarity,
    ItemType,
)
from .pricing import BalanceReport, calculate_item_power, calculate_price
from .registry import ItemCatalog

__all__ = [
    "EffectTrigger",
    "EffectType",
    "Item",
    "ItemEffect",
    "ItemRarity",
    "ItemType",
    "ItemCatalog",
    "BalanceReport",
    "calculate_item_power",
    "calculate_price",
]

"""경제 Core — 구매/판매 + 라운드 수입"""

from .money import (
    award_round_money,
    calculate_round_income,
    can_afford,
    get_money_bonus_from_items,
    get_money_multiplier_from_items,
    is_inventory_full,
    purchase_item,
    sell_item,
    update_money_item_durations,
)

__all__ = [
    "award_round_money",
    "calculate_round_income",
    "can_afford",
    "get_money_bonus_from_items",
    "get_money_multiplier_from_items",
    "is_inventory_full",
    "purchase_item",
    "sell_item",
    "update_money_item_durations",
]

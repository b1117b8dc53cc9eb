"""상점 Core — 상점 생성 + AI 구매 전략"""

from .generator import generate_shop, get_rarity_weights, refresh_shop
from .strategy import GreedyShopStrategy, IdleShopStrategy, ShopStrategy

__all__ = [
    "generate_shop",
    "get_rarity_weights",
    "refresh_shop",
    "ShopStrategy",
    "GreedyShopStrategy",
    "IdleShopStrategy",
]

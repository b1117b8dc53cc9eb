"""AI opponent shop strategy module."""

from src.services.ai.factory import get_shop_strategy

__all__ = [
    "get_shop_strategy",
]

"""Factory for creating AI shop strategy instances."""

from typing import Optional

from src.config import settings
from src.core.logging import get_logger
from src.core.shop.strategy import GreedyShopStrategy, IdleShopStrategy, ShopStrategy

logger = get_logger(__name__)


def get_shop_strategy(strategy_name: Optional[str] = None) -> ShopStrategy:
    """Get an AI shop strategy instance.

    Args:
        strategy_name: Optional strategy name. If not specified,
                      uses AI_SHOP_STRATEGY from config.

    Returns:
        A ShopStrategy instance.
    """
    name = strategy_name or settings.AI_SHOP_STRATEGY

    if name == "greedy":
        logger.debug("Using GreedyShopStrategy")
        return GreedyShopStrategy()

    if name == "idle":
        logger.debug("Using IdleShopStrategy")
        return IdleShopStrategy()

    # Fallback to GreedyShopStrategy for unknown names
    logger.warning("Unknown shop strategy '%s', falling back to GreedyShopStrategy", name)
    return GreedyShopStrategy()

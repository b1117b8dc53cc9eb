"""게임 세션 Core — 라운드 진행 상태 머신"""

from .models import (
    BattleTimeline,
    GamePhase,
    GamePhaseError,
    GameState,
    GameStats,
    ShopTransaction,
    TransactionType,
)
from .session import (
    end_round,
    get_game_stats,
    initialize_game,
    perform_ai_shopping,
    purchase_item,
    sell_item,
    start_battle,
    start_shop_phase,
)

__all__ = [
    "BattleTimeline",
    "GamePhase",
    "GamePhaseError",
    "GameState",
    "GameStats",
    "ShopTransaction",
    "TransactionType",
    "end_round",
    "get_game_stats",
    "initialize_game",
    "perform_ai_shopping",
    "purchase_item",
    "sell_item",
    "start_battle",
    "start_shop_phase",
]

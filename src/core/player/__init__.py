"""참가자(플레이어/AI) Core"""

from .factory import create_ai_opponent, create_player, update_player_max_hp
from .models import Player, PlayerCalculatedStats, PlayerStats, StatBreakdown

__all__ = [
    "Player",
    "PlayerStats",
    "PlayerCalculatedStats",
    "StatBreakdown",
    "create_player",
    "create_ai_opponent",
    "update_player_max_hp",
]

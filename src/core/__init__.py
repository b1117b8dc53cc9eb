"""Emoji Battler Core Engine"""
__version__ = "0.1.0"

from src.core.battle import BattleState, execute_battle
from src.core.game import GamePhase, GameState, initialize_game
from src.core.item import Item, ItemCatalog, ItemEffect
from src.core.player import Player, create_ai_opponent, create_player

__all__ = [
    "BattleState",
    "execute_battle",
    "GamePhase",
    "GameState",
    "initialize_game",
    "Item",
    "ItemCatalog",
    "ItemEffect",
    "Player",
    "create_ai_opponent",
    "create_player",
]

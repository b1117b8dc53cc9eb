"""게임 세션 도메인 모델 (DB 무관)"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from src.core.battle.models import BattleState
from src.core.constants import MAX_ROUNDS
from src.core.difficulty import Difficulty
from src.core.item.models import Item
from src.core.player.models import Player


class GamePhaseError(RuntimeError):
    """단계 순서 위반 (상대 없이 배틀 시작, 배틀 없이 라운드 종료 등)."""


class GamePhase(str, Enum):
    MENU = "menu"
    SHOP = "shop"
    BATTLE = "battle"
    SUMMARY = "summary"
    GAME_OVER = "gameOver"


class TransactionType(str, Enum):
    MONEY_RECEIVED = "money_received"
    ITEM_BOUGHT = "item_bought"
    ITEM_SOLD = "item_sold"


@dataclass
class ShopTransaction:
    round: int
    type: TransactionType
    amount: Optional[int] = None
    item: Optional[Item] = None  # 거래 시점 사본
    timestamp: float = field(default_factory=time.time)


@dataclass
class BattleTimeline:
    round: int
    player_won: bool
    player_hp: int
    opponent_hp: int
    lost_life: bool
    life_saved: bool = False


@dataclass
class GameState:
    difficulty: Difficulty
    player: Player
    phase: GamePhase = GamePhase.SHOP
    current_round: int = 1
    max_rounds: int = MAX_ROUNDS
    opponent: Optional[Player] = None
    current_battle: Optional[BattleState] = None
    player_shop_inventory: list[Item] = field(default_factory=list)
    ai_shop_inventory: list[Item] = field(default_factory=list)
    purchased_shop_item_ids: list[str] = field(default_factory=list)
    sold_items: list[Item] = field(default_factory=list)
    transaction_log: list[ShopTransaction] = field(default_factory=list)
    skill_points: int = 0  # 이번 판에서 획득한 스킬 포인트
    consecutive_wins: int = 0
    battle_timeline: list[BattleTimeline] = field(default_factory=list)
    game_start_time: float = field(default_factory=time.time)

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def player_won_game(self) -> bool:
        """모든 라운드를 생명이 남은 채로 마쳤는가."""
        return self.is_over and self.player.stats.lives > 0


@dataclass
class GameStats:
    total_battles: int
    battles_won: int
    battles_lost: int
    lives_lost: int
    total_damage_dealt: int
    total_damage_received: int
    total_damage_blocked: int
    total_money_spent: int
    total_items_bought: int
    current_round: int
    game_duration: float  # 초

"""배틀 참가자 도메인 모델 (인간/AI 공용)"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Optional

from src.core.difficulty import Difficulty
from src.core.item.models import Item
from src.core.skills.models import AppliedSkill


@dataclass
class PlayerStats:
    base_attack: int
    base_defense: int
    current_hp: int
    max_hp: int
    speed: float = 1.0
    attack_count: int = 0
    lives: int = 0
    money: int = 0

    # 게임 오버 화면용 누적치
    total_damage_dealt: int = 0
    total_damage_received: int = 0
    total_damage_blocked: int = 0
    total_money_spent: int = 0
    total_items_bought: int = 0


@dataclass
class Player:
    """참가자. items 순서 = 획득 순서 (표시/순회 순서에만 영향)."""

    stats: PlayerStats
    items: list[Item] = field(default_factory=list)
    skills: list[AppliedSkill] = field(default_factory=list)
    is_ai: bool = False
    difficulty: Optional[Difficulty] = None

    @property
    def is_alive(self) -> bool:
        return self.stats.current_hp > 0

    def clone(self) -> Player:
        """배틀용 깊은 복사. 스탯/아이템/효과 상태 모두 독립."""
        return copy.deepcopy(self)


@dataclass
class StatBreakdown:
    attack: int = 0
    defense: int = 0


@dataclass
class PlayerCalculatedStats:
    total_attack: int
    total_defense: int
    defense_percent: float  # MAX_DEFENSE_PERCENT 상한
    attack_multiplier: float
    defense_multiplier: float
    base: StatBreakdown = field(default_factory=StatBreakdown)
    skills: StatBreakdown = field(default_factory=StatBreakdown)
    items: StatBreakdown = field(default_factory=StatBreakdown)

"""아이템 도메인 모델 (DB 무관)"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ItemRarity(str, Enum):
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class ItemType(str, Enum):
    ATTACK = "attack"
    DEFENSE = "defense"
    PASSIVE = "passive"


class EffectTrigger(str, Enum):
    ON_ATTACK = "onAttack"
    ON_DEFEND = "onDefend"
    ON_HIT = "onHit"
    ON_BLOCK = "onBlock"
    ON_TURN_START = "onTurnStart"
    ON_TURN_END = "onTurnEnd"
    ON_BATTLE_START = "onBattleStart"
    ON_BATTLE_END = "onBattleEnd"
    PASSIVE = "passive"


class EffectType(str, Enum):
    DAMAGE = "damage"
    BLOCK = "block"
    HEAL = "heal"
    VAMPIRE = "vampire"
    ATTACK_MULTIPLY = "attackMultiply"
    DEFENSE_MULTIPLY = "defenseMultiply"
    SPEED_BOOST = "speedBoost"
    TEMP_POWER = "tempPower"
    STACK = "stack"
    LUCK = "luck"
    PREVENT_LIFE_LOSS = "preventLifeLoss"
    REDUCE_OPPONENT_ATTACK = "reduceOpponentAttack"
    MONEY_BONUS = "moneyBonus"
    MONEY_MULTIPLIER = "moneyMultiplier"
    MAX_HP_BONUS = "maxHPBonus"


DEFAULT_MAX_STACKS = 10


@dataclass
class ItemEffect:
    """게임 로직의 최소 단위. 템플릿 값 + 런타임 상태를 함께 보관."""

    trigger: EffectTrigger
    effect_type: EffectType
    value: float  # effect_type에 따라 고정값 / 비율 / 스택당 증가량

    chance: Optional[float] = None  # (0, 1], 발동마다 독립 판정

    # 스택
    stackable: bool = False
    current_stacks: int = 0
    max_stacks: Optional[int] = None

    # 턴 단위 카운트다운 (tempPower)
    duration: Optional[int] = None
    base_duration: Optional[int] = None  # 배틀 시작 시 duration 복원값

    # 배틀/라운드 단위 카운트다운 + 파괴
    breakable: bool = False
    max_duration: Optional[int] = None
    current_duration: int = 0
    is_broken: bool = False

    def __post_init__(self) -> None:
        if self.duration is not None and self.base_duration is None:
            self.base_duration = self.duration

    @property
    def stack_cap(self) -> int:
        return self.max_stacks or DEFAULT_MAX_STACKS


@dataclass
class Item:
    """아이템. 카탈로그 템플릿에서 instantiate()로 복제된 개체만 게임에 들어간다."""

    id: str
    name: str
    emoji: str
    rarity: ItemRarity
    item_type: ItemType
    base_attack: int = 0
    base_defense: int = 0
    price: int = 0  # 카탈로그 로드 시 1회 계산
    description: str = ""
    can_sell: bool = True
    effects: list[ItemEffect] = field(default_factory=list)

    @property
    def is_broken(self) -> bool:
        """효과 하나라도 파괴되면 아이템 전체가 무력화된다."""
        return any(e.is_broken for e in self.effects)

    def mark_broken(self, effect: ItemEffect) -> None:
        """effect 파괴 + 판매 불가 전환 (한 번 False면 영구)."""
        effect.is_broken = True
        self.can_sell = False

    def active_effects(self, trigger: Optional[EffectTrigger] = None) -> list[ItemEffect]:
        """파괴되지 않은 아이템의 효과 목록. 파괴된 아이템이면 빈 리스트."""
        if self.is_broken:
            return []
        if trigger is None:
            return list(self.effects)
        return [e for e in self.effects if e.trigger == trigger]

    def clone(self) -> Item:
        return copy.deepcopy(self)

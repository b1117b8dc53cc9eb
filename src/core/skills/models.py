"""영구 스킬 도메인 모델"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SkillEffectType(str, Enum):
    BASE_ATTACK = "baseAttack"
    BASE_DEFENSE = "baseDefense"
    STARTING_MONEY = "startingMoney"
    MAX_HP = "maxHP"
    ATTACK_MULTIPLIER = "attackMultiplier"
    DEFENSE_MULTIPLIER = "defenseMultiplier"
    MONEY_PER_ROUND = "moneyPerRound"


@dataclass(frozen=True)
class Skill:
    """스킬 트리 노드 — 불변"""

    id: str
    name: str
    description: str
    cost: int  # 레벨당 스킬 포인트
    max_level: int
    effect_type: SkillEffectType
    value: float  # 레벨당 증가량


@dataclass
class AppliedSkill:
    """플레이어가 보유한 스킬 레벨"""

    skill_id: str
    level: int = 1


@dataclass
class SkillPurchaseResult:
    success: bool
    message: str
    updated_skills: Optional[list[AppliedSkill]] = None
    remaining_points: Optional[int] = None

"""영구 스킬 적용/구매 로직"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .models import AppliedSkill, SkillEffectType, SkillPurchaseResult
from .tree import get_skill_by_id

if TYPE_CHECKING:
    from src.core.player.models import Player

logger = logging.getLogger(__name__)


def get_skill_bonus(skills: list[AppliedSkill], effect_type: SkillEffectType) -> float:
    """effect_type에 해당하는 스킬 보너스 합계 (value × level)."""
    bonus: float = 0
    for applied in skills:
        skill = get_skill_by_id(applied.skill_id)
        if skill and skill.effect_type == effect_type:
            bonus += skill.value * applied.level
    return bonus


def apply_skills(player: Player, skills: list[AppliedSkill]) -> None:
    """고정값 스킬을 base 스탯에 1회 반영.

    배율 스킬(attack/defenseMultiplier)은 여기서 반영하지 않는다 —
    MultiplierSource가 아이템 배율과 같은 누산기에 합산.
    startingMoney / moneyPerRound는 각각 게임 시작 / 라운드 수입 시점에 반영.
    """
    for applied in skills:
        skill = get_skill_by_id(applied.skill_id)
        if skill is None:
            logger.warning("Unknown skill ignored: %s", applied.skill_id)
            continue

        total = int(skill.value * applied.level)
        if skill.effect_type == SkillEffectType.BASE_ATTACK:
            player.stats.base_attack += total
        elif skill.effect_type == SkillEffectType.BASE_DEFENSE:
            player.stats.base_defense += total
        elif skill.effect_type == SkillEffectType.MAX_HP:
            player.stats.max_hp += total
            player.stats.current_hp += total


def get_starting_money_bonus(skills: list[AppliedSkill]) -> int:
    return int(get_skill_bonus(skills, SkillEffectType.STARTING_MONEY))


def get_money_per_round_bonus(skills: list[AppliedSkill]) -> int:
    return int(get_skill_bonus(skills, SkillEffectType.MONEY_PER_ROUND))


def get_max_hp_bonus(skills: list[AppliedSkill]) -> int:
    return int(get_skill_bonus(skills, SkillEffectType.MAX_HP))


def can_afford_skill(cost: int, max_level: int, current_level: int, points: int) -> bool:
    if current_level >= max_level:
        return False
    return points >= cost


def get_skill_level(skill_id: str, skills: list[AppliedSkill]) -> int:
    for applied in skills:
        if applied.skill_id == skill_id:
            return applied.level
    return 0


def purchase_skill(
    skill_id: str,
    current_skills: list[AppliedSkill],
    available_points: int,
) -> SkillPurchaseResult:
    """스킬 1레벨 구매. 입력 리스트는 변경하지 않는다."""
    skill = get_skill_by_id(skill_id)
    if skill is None:
        return SkillPurchaseResult(success=False, message="Skill not found")

    current_level = get_skill_level(skill_id, current_skills)
    if current_level >= skill.max_level:
        return SkillPurchaseResult(
            success=False, message=f"{skill.name} is already at max level"
        )

    if not can_afford_skill(skill.cost, skill.max_level, current_level, available_points):
        return SkillPurchaseResult(
            success=False,
            message=f"Not enough skill points (need {skill.cost}, have {available_points})",
        )

    updated = [AppliedSkill(s.skill_id, s.level) for s in current_skills]
    for applied in updated:
        if applied.skill_id == skill_id:
            applied.level += 1
            break
    else:
        updated.append(AppliedSkill(skill_id=skill_id, level=1))

    logger.info("Skill %s leveled up to %d", skill_id, current_level + 1)
    return SkillPurchaseResult(
        success=True,
        message=f"{skill.name} leveled up to {current_level + 1}",
        updated_skills=updated,
        remaining_points=available_points - skill.cost,
    )


def get_total_points_spent(skills: list[AppliedSkill]) -> int:
    total = 0
    for applied in skills:
        skill = get_skill_by_id(applied.skill_id)
        if skill:
            total += skill.cost * applied.level
    return total


def get_skill_summary(skills: list[AppliedSkill]) -> dict[str, float]:
    """스킬 보너스 요약. 배율은 보너스분만 (1.0 제외)."""
    return {
        "base_attack": get_skill_bonus(skills, SkillEffectType.BASE_ATTACK),
        "base_defense": get_skill_bonus(skills, SkillEffectType.BASE_DEFENSE),
        "max_hp": get_skill_bonus(skills, SkillEffectType.MAX_HP),
        "starting_money": get_skill_bonus(skills, SkillEffectType.STARTING_MONEY),
        "money_per_round": get_skill_bonus(skills, SkillEffectType.MONEY_PER_ROUND),
        "attack_multiplier": get_skill_bonus(skills, SkillEffectType.ATTACK_MULTIPLIER),
        "defense_multiplier": get_skill_bonus(skills, SkillEffectType.DEFENSE_MULTIPLIER),
    }

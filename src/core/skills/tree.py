"""스킬 트리 정의"""

from typing import Optional

from .models import Skill, SkillEffectType

SKILL_TREE: tuple[Skill, ...] = (
    # === 기본 스탯 ===
    Skill(
        id="base_attack",
        name="Power Training",
        description="+2 base attack per level",
        cost=2,
        max_level=10,
        effect_type=SkillEffectType.BASE_ATTACK,
        value=2,
    ),
    Skill(
        id="base_defense",
        name="Fortification",
        description="+2 base defense per level",
        cost=2,
        max_level=10,
        effect_type=SkillEffectType.BASE_DEFENSE,
        value=2,
    ),
    Skill(
        id="max_hp",
        name="Vitality",
        description="+20 max HP per level",
        cost=3,
        max_level=5,
        effect_type=SkillEffectType.MAX_HP,
        value=20,
    ),
    # === 경제 ===
    Skill(
        id="starting_money",
        name="Wealth",
        description="+50 starting money per level",
        cost=3,
        max_level=5,
        effect_type=SkillEffectType.STARTING_MONEY,
        value=50,
    ),
    Skill(
        id="money_per_round",
        name="Prosperity",
        description="+20 money per round",
        cost=5,
        max_level=5,
        effect_type=SkillEffectType.MONEY_PER_ROUND,
        value=20,
    ),
    # === 배율 ===
    Skill(
        id="attack_multiplier",
        name="Mastery",
        description="+5% attack damage per level",
        cost=5,
        max_level=5,
        effect_type=SkillEffectType.ATTACK_MULTIPLIER,
        value=0.05,
    ),
    Skill(
        id="defense_multiplier",
        name="Resilience",
        description="+5% defense per level",
        cost=5,
        max_level=5,
        effect_type=SkillEffectType.DEFENSE_MULTIPLIER,
        value=0.05,
    ),
)

_SKILLS_BY_ID: dict[str, Skill] = {s.id: s for s in SKILL_TREE}


def get_skill_by_id(skill_id: str) -> Optional[Skill]:
    return _SKILLS_BY_ID.get(skill_id)


def get_all_skills() -> list[Skill]:
    return list(SKILL_TREE)


def get_total_skill_cost(skill: Skill) -> int:
    """최대 레벨까지 필요한 총 포인트."""
    return skill.cost * skill.max_level

"""영구 스킬 Core"""

from .manager import apply_skills, get_skill_summary, purchase_skill
from .models import AppliedSkill, Skill, SkillEffectType, SkillPurchaseResult
from .tree import SKILL_TREE, get_all_skills, get_skill_by_id

__all__ = [
    "AppliedSkill",
    "Skill",
    "SkillEffectType",
    "SkillPurchaseResult",
    "SKILL_TREE",
    "apply_skills",
    "get_all_skills",
    "get_skill_by_id",
    "get_skill_summary",
    "purchase_skill",
]

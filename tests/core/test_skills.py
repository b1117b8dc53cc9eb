"""영구 스킬 테스트"""

from src.core.player.factory import create_player
from src.core.skills.manager import (
    get_money_per_round_bonus,
    get_skill_summary,
    get_total_points_spent,
    purchase_skill,
)
from src.core.skills.models import AppliedSkill
from src.core.skills.tree import SKILL_TREE, get_skill_by_id, get_total_skill_cost


class TestSkillTree:
    def test_ids_unique(self):
        ids = [s.id for s in SKILL_TREE]
        assert len(ids) == len(set(ids))

    def test_lookup(self):
        assert get_skill_by_id("max_hp").value == 20
        assert get_skill_by_id("missing") is None

    def test_total_cost(self):
        assert get_total_skill_cost(get_skill_by_id("base_attack")) == 20


class TestPurchaseSkill:
    def test_first_level(self):
        result = purchase_skill("base_attack", [], 5)
        assert result.success
        assert result.updated_skills == [AppliedSkill("base_attack", 1)]
        assert result.remaining_points == 3

    def test_level_up_does_not_mutate_input(self):
        current = [AppliedSkill("base_attack", 2)]
        result = purchase_skill("base_attack", current, 10)
        assert result.updated_skills[0].level == 3
        assert current[0].level == 2

    def test_not_enough_points(self):
        result = purchase_skill("money_per_round", [], 4)
        assert not result.success
        assert result.updated_skills is None

    def test_max_level(self):
        result = purchase_skill("max_hp", [AppliedSkill("max_hp", 5)], 100)
        assert not result.success
        assert "max level" in result.message

    def test_unknown_skill(self):
        assert not purchase_skill("flying", [], 100).success


class TestApplySkills:
    def test_player_gets_flat_bonuses(self):
        player = create_player(
            [
                AppliedSkill("base_attack", 2),
                AppliedSkill("base_defense", 1),
                AppliedSkill("max_hp", 1),
                AppliedSkill("starting_money", 2),
            ]
        )
        assert player.stats.base_attack == 14
        assert player.stats.base_defense == 7
        assert player.stats.max_hp == 120
        assert player.stats.current_hp == 120
        assert player.stats.money == 300

    def test_multiplier_skills_not_baked_into_stats(self):
        player = create_player([AppliedSkill("attack_multiplier", 3)])
        assert player.stats.base_attack == 10

    def test_summary_and_spent(self):
        skills = [AppliedSkill("money_per_round", 2), AppliedSkill("defense_multiplier", 1)]
        summary = get_skill_summary(skills)
        assert summary["money_per_round"] == 40
        assert summary["defense_multiplier"] == 0.05
        assert get_money_per_round_bonus(skills) == 40
        assert get_total_points_spent(skills) == 15

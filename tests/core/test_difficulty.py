"""난이도 프리셋 / 진행도 테스트"""

import pytest

from src.core.difficulty import (
    DifficultyLevel,
    DifficultyProgress,
    can_select_difficulty,
    get_difficulty,
    skill_points_for_win,
    update_difficulty_progress,
)
from src.core.player.factory import create_ai_opponent


class TestPresets:
    def test_normal(self):
        d = get_difficulty("normal")
        assert d.level == DifficultyLevel.NORMAL
        assert d.ai_stat_multiplier == 1.0
        assert d.torment_level is None

    def test_torment_keeps_level(self):
        assert get_difficulty(DifficultyLevel.TORMENT, 3).torment_level == 3

    def test_torment_level_ignored_elsewhere(self):
        assert get_difficulty("hard", 3).torment_level is None

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            get_difficulty("nightmare")

    def test_ai_opponent_scaled(self):
        ai = create_ai_opponent(get_difficulty("master"))
        assert ai.is_ai
        assert ai.stats.base_attack == 13
        assert ai.stats.base_defense == 7  # 6.5 → 7
        assert ai.stats.money == 350


class TestSkillPointRewards:
    def test_normal_every_third_win(self):
        normal = get_difficulty("normal")
        assert [skill_points_for_win(normal, n) for n in range(1, 7)] == [0, 0, 1, 0, 0, 1]

    def test_torment_every_win(self):
        assert skill_points_for_win(get_difficulty("torment", 1), 1) == 4


class TestProgress:
    def test_win_marks_level(self):
        progress = update_difficulty_progress(DifficultyProgress(), get_difficulty("expert"), True)
        assert progress.expert
        assert not progress.master

    def test_loss_keeps_progress(self):
        original = DifficultyProgress(hard=True)
        assert update_difficulty_progress(original, get_difficulty("master"), False) is original

    def test_torment_keeps_highest(self):
        progress = DifficultyProgress(torment=4)
        updated = update_difficulty_progress(progress, get_difficulty("torment", 2), True)
        assert updated.torment == 4
        assert progress.torment == 4

    def test_torment_unlock_window(self):
        progress = DifficultyProgress(torment=1)
        assert can_select_difficulty(get_difficulty("torment", 3), progress)
        assert not can_select_difficulty(get_difficulty("torment", 4), progress)
        assert can_select_difficulty(get_difficulty("master"), DifficultyProgress())

    def test_dict_roundtrip(self):
        progress = DifficultyProgress(normal=True, torment=2)
        assert DifficultyProgress.from_dict(progress.to_dict()) == progress

"""난이도 프리셋 + 진행도 — 순수 Python"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DifficultyLevel(str, Enum):
    NORMAL = "normal"
    HARD = "hard"
    EXPERT = "expert"
    MASTER = "master"
    TORMENT = "torment"


@dataclass
class Difficulty:
    level: DifficultyLevel
    ai_skill_points: int
    ai_money_bonus: int
    ai_stat_multiplier: float
    ai_optimal_play_percent: float  # 0~1
    torment_level: Optional[int] = None


# (ai_skill_points, ai_money_bonus, ai_stat_multiplier, ai_optimal_play_percent)
DIFFICULTY_PRESETS: dict[DifficultyLevel, tuple[int, int, float, float]] = {
    DifficultyLevel.NORMAL: (0, 0, 1.0, 0.5),
    DifficultyLevel.HARD: (5, 50, 1.1, 0.7),
    DifficultyLevel.EXPERT: (10, 100, 1.2, 0.85),
    DifficultyLevel.MASTER: (15, 150, 1.3, 0.95),
    DifficultyLevel.TORMENT: (20, 200, 1.5, 1.0),
}

# 승리 시 스킬 포인트: (N승마다, 지급량)
SKILL_POINT_REWARDS: dict[DifficultyLevel, tuple[int, int]] = {
    DifficultyLevel.NORMAL: (3, 1),
    DifficultyLevel.HARD: (2, 1),
    DifficultyLevel.EXPERT: (1, 1),
    DifficultyLevel.MASTER: (1, 2),
    DifficultyLevel.TORMENT: (1, 4),
}

TORMENT_UNLOCK_AHEAD = 2


def get_difficulty(
    level: DifficultyLevel | str, torment_level: Optional[int] = None
) -> Difficulty:
    level = DifficultyLevel(level)
    skill_points, money_bonus, stat_mult, optimal = DIFFICULTY_PRESETS[level]
    return Difficulty(
        level=level,
        ai_skill_points=skill_points,
        ai_money_bonus=money_bonus,
        ai_stat_multiplier=stat_mult,
        ai_optimal_play_percent=optimal,
        torment_level=torment_level if level == DifficultyLevel.TORMENT else None,
    )


@dataclass
class DifficultyProgress:
    """난이도별 최고 기록. torment는 정수 레벨."""

    normal: bool = False
    hard: bool = False
    expert: bool = False
    master: bool = False
    torment: int = 0

    def to_dict(self) -> dict:
        return {
            "normal": self.normal,
            "hard": self.hard,
            "expert": self.expert,
            "master": self.master,
            "torment": self.torment,
        }

    @classmethod
    def from_dict(cls, data: dict) -> DifficultyProgress:
        return cls(
            normal=bool(data.get("normal", False)),
            hard=bool(data.get("hard", False)),
            expert=bool(data.get("expert", False)),
            master=bool(data.get("master", False)),
            torment=int(data.get("torment", 0)),
        )


def skill_points_for_win(difficulty: Difficulty, consecutive_wins: int) -> int:
    """normal: 3승마다 1, hard: 2승마다 1, expert: 1, master: 2, torment: 4"""
    every, amount = SKILL_POINT_REWARDS.get(difficulty.level, (0, 0))
    if every <= 0:
        return 0
    return amount if consecutive_wins % every == 0 else 0


def update_difficulty_progress(
    progress: DifficultyProgress, difficulty: Difficulty, won: bool
) -> DifficultyProgress:
    """게임 클리어 시 진행도 갱신. 원본은 건드리지 않고 새 객체 반환."""
    if not won:
        return progress

    updated = DifficultyProgress(**progress.to_dict())
    if difficulty.level == DifficultyLevel.TORMENT:
        if difficulty.torment_level:
            updated.torment = max(updated.torment, difficulty.torment_level)
    else:
        setattr(updated, difficulty.level.value, True)
    return updated


def can_select_difficulty(difficulty: Difficulty, progress: DifficultyProgress) -> bool:
    """torment 외에는 항상 선택 가능. torment는 최고 기록 + 2 레벨까지."""
    if difficulty.level != DifficultyLevel.TORMENT:
        return True
    torment_level = difficulty.torment_level or 1
    return torment_level <= progress.torment + TORMENT_UNLOCK_AHEAD

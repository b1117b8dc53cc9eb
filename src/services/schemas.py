"""Persistence schemas (save files, profile export)."""

import time
from typing import Any

from pydantic import BaseModel, Field

from src.core.constants import SAVE_VERSION
from src.core.game.models import GameState


class SaveGame(BaseModel):
    """저장 파일 1건"""

    version: str = Field(default=SAVE_VERSION, min_length=1, description="저장 포맷 버전")
    game_state: GameState = Field(..., description="진행 중인 게임 전체 상태")
    timestamp: float = Field(default_factory=time.time, description="저장 시각 (epoch 초)")


class ProfileSnapshot(BaseModel):
    """영구 진행도 (프로필) 내보내기용"""

    profile_id: str
    total_skill_points: int = Field(default=0, ge=0)
    permanent_skills: list[dict[str, Any]] = []
    difficulty_progress: dict[str, Any] = {}
    games_played: int = 0
    games_won: int = 0

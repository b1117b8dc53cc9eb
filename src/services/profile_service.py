"""프로필 Service — 판을 넘어 유지되는 스킬 포인트 / 영구 스킬 / 난이도 진행도

game_over 이벤트를 구독해 이번 판의 스킬 포인트를 적립하고 진행도를 갱신한다.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from src.core.difficulty import (
    DifficultyProgress,
    can_select_difficulty,
    get_difficulty,
    update_difficulty_progress,
)
from src.core.event_bus import EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.logging import get_logger
from src.core.skills.manager import purchase_skill
from src.core.skills.models import AppliedSkill, SkillPurchaseResult
from src.db.models import ProfileModel
from src.services.schemas import ProfileSnapshot

logger = get_logger(__name__)

DEFAULT_PROFILE = "default"


class ProfileService:
    """영구 진행도 CRUD + game_over 처리"""

    def __init__(self, db: Session, event_bus: EventBus, profile_id: str = DEFAULT_PROFILE):
        self._db = db
        self._bus = event_bus
        self._profile_id = profile_id
        self._register_event_handlers()

    def _register_event_handlers(self) -> None:
        """EventBus 구독"""
        self._bus.subscribe(EventTypes.GAME_OVER, self._on_game_over)

    # === 조회 ===

    def get_or_create(self) -> ProfileModel:
        row = (
            self._db.query(ProfileModel)
            .filter(ProfileModel.profile_id == self._profile_id)
            .first()
        )
        if row is None:
            now = datetime.now(timezone.utc)
            row = ProfileModel(
                profile_id=self._profile_id,
                total_skill_points=0,
                permanent_skills=[],
                difficulty_progress=DifficultyProgress().to_dict(),
                games_played=0,
                games_won=0,
                created_at=now,
                updated_at=now,
            )
            self._db.add(row)
            self._db.commit()
            logger.info("Created profile %s", self._profile_id)
        return row

    def get_permanent_skills(self) -> list[AppliedSkill]:
        row = self.get_or_create()
        return [
            AppliedSkill(skill_id=s["skill_id"], level=int(s.get("level", 1)))
            for s in row.permanent_skills or []
        ]

    def get_difficulty_progress(self) -> DifficultyProgress:
        return DifficultyProgress.from_dict(self.get_or_create().difficulty_progress or {})

    def get_skill_points(self) -> int:
        return self.get_or_create().total_skill_points

    def snapshot(self) -> ProfileSnapshot:
        row = self.get_or_create()
        return ProfileSnapshot(
            profile_id=row.profile_id,
            total_skill_points=row.total_skill_points,
            permanent_skills=list(row.permanent_skills or []),
            difficulty_progress=dict(row.difficulty_progress or {}),
            games_played=row.games_played,
            games_won=row.games_won,
        )

    def can_select(self, level: str, torment_level: Optional[int] = None) -> bool:
        return can_select_difficulty(
            get_difficulty(level, torment_level), self.get_difficulty_progress()
        )

    # === 변경 ===

    def purchase_skill(self, skill_id: str) -> SkillPurchaseResult:
        """스킬 1레벨 구매 후 저장. 실패 시 DB 변경 없음."""
        row = self.get_or_create()
        result = purchase_skill(skill_id, self.get_permanent_skills(), row.total_skill_points)
        if not result.success:
            logger.info("Skill purchase failed: %s (%s)", skill_id, result.message)
            return result

        row.permanent_skills = [
            {"skill_id": s.skill_id, "level": s.level} for s in result.updated_skills
        ]
        row.total_skill_points = result.remaining_points
        self._touch(row)
        return result

    def bank_skill_points(self, points: int) -> int:
        """스킬 포인트 적립. 반환: 적립 후 합계."""
        row = self.get_or_create()
        if points > 0:
            row.total_skill_points += points
            self._touch(row)
            logger.info("Banked %d skill points (total %d)", points, row.total_skill_points)
        return row.total_skill_points

    def record_game_result(
        self, level: str, torment_level: Optional[int], won: bool
    ) -> DifficultyProgress:
        row = self.get_or_create()
        progress = update_difficulty_progress(
            self.get_difficulty_progress(), get_difficulty(level, torment_level), won
        )
        row.difficulty_progress = progress.to_dict()
        row.games_played += 1
        if won:
            row.games_won += 1
        self._touch(row)
        return progress

    def _touch(self, row: ProfileModel) -> None:
        row.updated_at = datetime.now(timezone.utc)
        self._db.commit()

    # === 이벤트 핸들러 ===

    def _on_game_over(self, event: GameEvent) -> None:
        data = event.data
        self.bank_skill_points(int(data.get("skill_points", 0)))
        self.record_game_result(
            data["difficulty"], data.get("torment_level"), bool(data.get("won", False))
        )
        logger.info(
            "Game result recorded for %s: won=%s difficulty=%s",
            self._profile_id,
            data.get("won"),
            data["difficulty"],
        )

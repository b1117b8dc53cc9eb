"""세이브 Service — GameState ↔ DB / JSON

저장 포맷은 SaveGame(pydantic) 으로 검증한다.
손상되었거나 형식이 맞지 않는 저장은 None 으로 처리하고 로그만 남긴다.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from src.core.constants import SAVE_VERSION
from src.core.game.models import GameState
from src.core.logging import get_logger
from src.db.models import SaveGameModel
from src.services.schemas import SaveGame

logger = get_logger(__name__)

DEFAULT_SLOT = "default"


def _check_version(save: SaveGame) -> None:
    if save.version != SAVE_VERSION:
        # 현재는 포맷 변경이 없어 그대로 사용
        logger.warning("Migrating save from %s to %s", save.version, SAVE_VERSION)
        save.version = SAVE_VERSION


class SaveService:
    """슬롯 단위 저장/불러오기 + JSON 내보내기"""

    def __init__(self, db: Session):
        self._db = db

    def _get_row(self, slot: str) -> Optional[SaveGameModel]:
        return self._db.query(SaveGameModel).filter(SaveGameModel.slot == slot).first()

    def save_game(self, state: GameState, slot: str = DEFAULT_SLOT) -> bool:
        save = SaveGame(game_state=state)
        payload = save.model_dump(mode="json")["game_state"]
        now = datetime.now(timezone.utc)

        row = self._get_row(slot)
        if row is None:
            row = SaveGameModel(slot=slot, version=save.version, payload=payload, saved_at=now)
            self._db.add(row)
        else:
            row.version = save.version
            row.payload = payload
            row.saved_at = now
        self._db.commit()

        logger.info("Saved game to slot '%s' (round %d)", slot, state.current_round)
        return True

    def load_game(self, slot: str = DEFAULT_SLOT) -> Optional[GameState]:
        row = self._get_row(slot)
        if row is None:
            return None

        try:
            save = SaveGame(
                version=row.version,
                game_state=row.payload,
                timestamp=row.saved_at.timestamp(),
            )
        except ValidationError as e:
            logger.error("Invalid save in slot '%s': %s", slot, e)
            return None

        _check_version(save)
        logger.info("Loaded game from slot '%s'", slot)
        return save.game_state

    def has_save(self, slot: str = DEFAULT_SLOT) -> bool:
        return self._get_row(slot) is not None

    def delete_save(self, slot: str = DEFAULT_SLOT) -> bool:
        row = self._get_row(slot)
        if row is None:
            return False
        self._db.delete(row)
        self._db.commit()
        logger.info("Deleted save slot '%s'", slot)
        return True

    # === JSON 내보내기/가져오기 ===

    @staticmethod
    def export_json(state: GameState) -> str:
        return SaveGame(game_state=state).model_dump_json(indent=2)

    @staticmethod
    def import_json(text: str) -> Optional[GameState]:
        try:
            save = SaveGame.model_validate_json(text)
        except ValidationError as e:
            logger.error("Failed to import save: %s", e)
            return None

        _check_version(save)
        return save.game_state

"""Application entrypoint — 서비스 조립 + 자동 진행 데모

    python -m src.main --difficulty hard --save
"""

import argparse
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from src.config import settings
from src.core.battle.battle_log import format_battle_log
from src.core.difficulty import DifficultyLevel, get_difficulty
from src.core.event_bus import EventBus
from src.core.item.registry import ItemCatalog
from src.core.logging import get_logger, setup_logging
from src.core.shop.strategy import GreedyShopStrategy
from src.db.database import SessionLocal, init_db
from src.services.game_service import GameService
from src.services.profile_service import ProfileService
from src.services.save_service import SaveService

logger = get_logger(__name__)


@dataclass
class App:
    """조립된 서비스 묶음"""

    db: Session
    event_bus: EventBus
    catalog: ItemCatalog
    game_service: GameService
    profile_service: ProfileService
    save_service: SaveService

    def close(self) -> None:
        logger.info("Shutting down...")
        self.db.close()


def bootstrap(db: Optional[Session] = None) -> App:
    """DB 테이블 생성 → 카탈로그 로드 → 서비스 조립."""
    if db is None:
        logger.info("Creating database tables...")
        init_db()
        db = SessionLocal()

    logger.info("Loading item catalog...")
    catalog = ItemCatalog()
    catalog.load_from_json(settings.ITEM_DATA_PATH)

    event_bus = EventBus()
    profile_service = ProfileService(db, event_bus)
    save_service = SaveService(db)
    game_service = GameService(event_bus, catalog)
    logger.info("Services initialized (%d items)", catalog.count())

    return App(
        db=db,
        event_bus=event_bus,
        catalog=catalog,
        game_service=game_service,
        profile_service=profile_service,
        save_service=save_service,
    )


def autoplay(app: App, level: str, torment_level: Optional[int] = None, save: bool = False) -> bool:
    """플레이어 쪽도 Greedy 전략으로 구매하며 한 판을 끝까지 진행. 반환: 클리어 여부."""
    games = app.game_service
    profiles = app.profile_service
    if not profiles.can_select(level, torment_level):
        logger.warning("Difficulty locked: %s %s", level, torment_level)
        return False

    difficulty = get_difficulty(level, torment_level)
    state = games.new_game(difficulty, profiles.get_permanent_skills())
    picker = GreedyShopStrategy()

    while not state.is_over:
        wishlist = picker.select_purchases(
            state.player_shop_inventory, state.player, difficulty, state.current_round
        )
        for item in wishlist:
            games.purchase(item.id)

        battle = games.start_battle()
        logger.debug("Round %d log:\n%s", battle.round, format_battle_log(battle.events))
        games.end_round()
        if save and not state.is_over:
            app.save_service.save_game(state)

    stats = games.stats()
    logger.info(
        "Game finished: won=%s battles=%d/%d lives_lost=%d",
        state.player_won_game,
        stats.battles_won,
        stats.total_battles,
        stats.lives_lost,
    )
    if save:
        app.save_service.delete_save()
    return state.player_won_game


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run an automated emoji battler game")
    parser.add_argument(
        "--difficulty",
        choices=[level.value for level in DifficultyLevel],
        default=DifficultyLevel.NORMAL.value,
    )
    parser.add_argument("--torment-level", type=int, default=None)
    parser.add_argument("--save", action="store_true", help="Save progress after every round")
    args = parser.parse_args(argv)

    setup_logging(settings.LOG_LEVEL)
    app = bootstrap()
    try:
        won = autoplay(app, args.difficulty, args.torment_level, save=args.save)
    finally:
        app.close()
    return 0 if won else 1


if __name__ == "__main__":
    raise SystemExit(main())

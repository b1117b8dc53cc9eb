"""게임 Service — 세션 진행 + EventBus 발행

Core(game.session)를 감싸 rng / 상점 전략 / 이벤트 발행을 담당.
DB 에는 직접 접근하지 않는다 (영속화는 SaveService / ProfileService).
"""

import random
from typing import Optional

from src.config import settings
from src.core.battle.models import BattleState
from src.core.difficulty import Difficulty
from src.core.event_bus import EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.game import session
from src.core.game.models import BattleTimeline, GameState, GameStats
from src.core.item.models import Item
from src.core.item.registry import ItemCatalog
from src.core.logging import get_logger
from src.core.player.models import Player
from src.core.shop.strategy import ShopStrategy
from src.core.skills.models import AppliedSkill
from src.services.ai.factory import get_shop_strategy

logger = get_logger(__name__)

SOURCE = "game_service"


def _broken_ids(player: Optional[Player]) -> set[int]:
    if player is None:
        return set()
    return {id(item) for item in player.items if item.is_broken}


class GameService:
    """게임 1판의 진행 관리"""

    def __init__(
        self,
        event_bus: EventBus,
        catalog: ItemCatalog,
        strategy: Optional[ShopStrategy] = None,
        rng: Optional[random.Random] = None,
    ):
        self._bus = event_bus
        self._catalog = catalog
        self._strategy = strategy or get_shop_strategy()
        self._rng = rng or random.Random(settings.RNG_SEED)
        self._state: Optional[GameState] = None

    @property
    def state(self) -> GameState:
        if self._state is None:
            raise RuntimeError("No active game")
        return self._state

    @property
    def has_game(self) -> bool:
        return self._state is not None

    # === 세션 시작 ===

    def new_game(
        self, difficulty: Difficulty, permanent_skills: Optional[list[AppliedSkill]] = None
    ) -> GameState:
        self._state = session.initialize_game(
            difficulty, list(permanent_skills or []), self._catalog, self._strategy, self._rng
        )
        return self._state

    def resume(self, state: GameState) -> None:
        """저장된 게임 이어하기."""
        self._state = state
        logger.info("Resumed game at round %d (%s)", state.current_round, state.phase.value)

    # === 상점 ===

    def purchase(self, item_id: str) -> bool:
        """플레이어 상점에서 구매. 상점에 없는 id면 False."""
        state = self.state
        item = next((i for i in state.player_shop_inventory if i.id == item_id), None)
        if item is None or item_id in state.purchased_shop_item_ids:
            logger.info("Purchase rejected (not in shop): %s", item_id)
            return False

        if not session.purchase_item(state, item):
            return False

        self._emit(
            EventTypes.ITEM_PURCHASED,
            {"item_id": item.id, "price": item.price, "round": state.current_round},
            key=item.id,
        )
        self._bus.reset_chain()
        return True

    def sell(self, item_id: str) -> bool:
        state = self.state
        item = self._find_owned(item_id)
        if item is None or not session.sell_item(state, item):
            return False

        self._emit(
            EventTypes.ITEM_SOLD,
            {"item_id": item.id, "price": item.price, "round": state.current_round},
            key=item.id,
        )
        self._bus.reset_chain()
        return True

    def _find_owned(self, item_id: str) -> Optional[Item]:
        return next((i for i in self.state.player.items if i.id == item_id), None)

    # === 배틀 / 라운드 ===

    def start_battle(self) -> BattleState:
        state = self.state
        before = _broken_ids(state.player)

        battle = session.start_battle(state, self._rng)

        self._emit(
            EventTypes.BATTLE_COMPLETED,
            {
                "round": battle.round,
                "winner": battle.winner.value,
                "turns": battle.turn,
                "player_hp": battle.player.stats.current_hp,
                "opponent_hp": battle.opponent.stats.current_hp,
            },
        )
        self._emit_broken(before)
        self._bus.reset_chain()
        return battle

    def end_round(self) -> BattleTimeline:
        state = self.state
        before = _broken_ids(state.player)

        timeline = session.end_round(state, self._catalog, self._strategy, self._rng)

        self._emit_broken(before)
        if timeline.lost_life:
            self._emit(
                EventTypes.LIFE_LOST,
                {"round": timeline.round, "lives": state.player.stats.lives},
            )
        self._emit(
            EventTypes.ROUND_ENDED,
            {
                "round": timeline.round,
                "player_won": timeline.player_won,
                "lost_life": timeline.lost_life,
                "life_saved": timeline.life_saved,
            },
        )
        if state.is_over:
            self._emit(
                EventTypes.GAME_OVER,
                {
                    "won": state.player_won_game,
                    "difficulty": state.difficulty.level.value,
                    "torment_level": state.difficulty.torment_level,
                    "skill_points": state.skill_points,
                    "rounds": state.current_round,
                },
            )
        self._bus.reset_chain()
        return timeline

    def stats(self) -> GameStats:
        return session.get_game_stats(self.state)

    # === 이벤트 ===

    def _emit(self, event_type: str, data: dict, key: str = "") -> None:
        self._bus.emit(GameEvent(event_type=event_type, data=data, source=SOURCE, key=key))

    def _emit_broken(self, before: set[int]) -> None:
        for item in self.state.player.items:
            if item.is_broken and id(item) not in before:
                logger.info("Item broken: %s", item.id)
                self._emit(
                    EventTypes.ITEM_BROKEN,
                    {"item_id": item.id, "round": self.state.current_round},
                    key=item.id,
                )

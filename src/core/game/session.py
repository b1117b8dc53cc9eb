"""게임 세션 진행 — GameState 에 대한 단계별 순수 함수

흐름: initialize_game → (start_shop_phase → purchase/sell → start_battle → end_round) × N → gameOver
"""

from __future__ import annotations

import logging
import random
import time
from typing import Optional

from src.core.battle.effects import consume_life_prevention
from src.core.battle.engine import execute_battle
from src.core.battle.models import BattleState, Winner
from src.core.constants import MAX_LIVES, MONEY_PER_ROUND
from src.core.difficulty import Difficulty, skill_points_for_win
from src.core.economy import money
from src.core.item.models import Item
from src.core.item.registry import ItemCatalog
from src.core.player.factory import create_ai_opponent, create_player, update_player_max_hp
from src.core.player.models import Player
from src.core.shop.generator import generate_shop
from src.core.shop.strategy import ShopStrategy
from src.core.skills.models import AppliedSkill

from .models import (
    BattleTimeline,
    GamePhase,
    GamePhaseError,
    GameState,
    GameStats,
    ShopTransaction,
    TransactionType,
)

logger = logging.getLogger(__name__)


def initialize_game(
    difficulty: Difficulty,
    permanent_skills: list[AppliedSkill],
    catalog: ItemCatalog,
    strategy: ShopStrategy,
    rng: Optional[random.Random] = None,
) -> GameState:
    """새 게임. 1라운드 상점 단계에서 시작 (1라운드는 수입 없음)."""
    player = create_player(permanent_skills)
    state = GameState(
        difficulty=difficulty,
        player=player,
        opponent=create_ai_opponent(difficulty),
    )
    state.player_shop_inventory = generate_shop(player.items, 1, catalog, rng)
    state.ai_shop_inventory = generate_shop(state.opponent.items, 1, catalog, rng)
    perform_ai_shopping(state, strategy, rng)

    logger.info(
        "Game initialized: difficulty=%s skills=%d money=%d",
        difficulty.level.value,
        len(permanent_skills),
        player.stats.money,
    )
    return state


def _worst_sellable(
    ai_player: Player, strategy: ShopStrategy, difficulty: Difficulty, round: int
) -> Optional[Item]:
    sellable = [i for i in ai_player.items if i.can_sell]
    if not sellable:
        return None
    return min(sellable, key=lambda i: strategy.score_item(i, ai_player, difficulty, round))


def perform_ai_shopping(
    state: GameState, strategy: ShopStrategy, rng: Optional[random.Random] = None
) -> list[Item]:
    """AI 구매. 슬롯이 가득 차면 가장 약한 판매 가능 아이템과 교체를 검토.

    반환: 실제로 구매한 아이템.
    """
    ai = state.opponent
    if ai is None:
        return []

    round = state.current_round
    bought: list[Item] = []
    wishlist = strategy.select_purchases(
        state.ai_shop_inventory, ai, state.difficulty, round, rng
    )

    for item in wishlist:
        if money.is_inventory_full(ai):
            worst = _worst_sellable(ai, strategy, state.difficulty, round)
            if worst is None or not strategy.should_sell_item(
                worst, item, ai, state.difficulty, round
            ):
                continue
            money.sell_item(ai, worst)
            update_player_max_hp(ai)
            logger.debug("AI sold %s to make room for %s", worst.id, item.id)

        if money.purchase_item(ai, item):
            update_player_max_hp(ai)
            state.ai_shop_inventory = [i for i in state.ai_shop_inventory if i.id != item.id]
            bought.append(item)

    logger.debug("AI bought %d items in round %d", len(bought), round)
    return bought


def start_shop_phase(
    state: GameState,
    catalog: ItemCatalog,
    strategy: ShopStrategy,
    rng: Optional[random.Random] = None,
) -> int:
    """상점 단계 진입: 수입 지급 → 머니 아이템 내구도 → 새 상점 → AI 쇼핑.

    반환: 플레이어 수입.
    """
    state.phase = GamePhase.SHOP
    state.purchased_shop_item_ids = []
    state.sold_items = []

    earned = money.award_round_money(state.player, state.current_round)
    state.transaction_log.append(
        ShopTransaction(
            round=state.current_round, type=TransactionType.MONEY_RECEIVED, amount=earned
        )
    )
    money.update_money_item_durations(state.player)

    state.player_shop_inventory = generate_shop(
        state.player.items, state.current_round, catalog, rng
    )

    if state.opponent is not None:
        state.opponent.stats.money += MONEY_PER_ROUND + state.difficulty.ai_money_bonus
        state.ai_shop_inventory = generate_shop(
            state.opponent.items, state.current_round, catalog, rng
        )
        perform_ai_shopping(state, strategy, rng)

    return earned


def purchase_item(state: GameState, item: Item) -> bool:
    if not money.purchase_item(state.player, item):
        return False

    state.purchased_shop_item_ids.append(item.id)
    state.transaction_log.append(
        ShopTransaction(
            round=state.current_round, type=TransactionType.ITEM_BOUGHT, item=item.clone()
        )
    )
    update_player_max_hp(state.player)
    logger.info("Player bought %s for %d", item.id, item.price)
    return True


def sell_item(state: GameState, item: Item) -> bool:
    if not money.sell_item(state.player, item):
        return False

    state.sold_items.append(item)
    state.transaction_log.append(
        ShopTransaction(
            round=state.current_round, type=TransactionType.ITEM_SOLD, item=item.clone()
        )
    )
    update_player_max_hp(state.player)
    logger.info("Player sold %s for %d", item.id, item.price)
    return True


def start_battle(state: GameState, rng: Optional[random.Random] = None) -> BattleState:
    """양측 HP 를 최대치로 회복한 뒤 배틀 실행. 상대가 없으면 GamePhaseError."""
    if state.opponent is None:
        raise GamePhaseError("No opponent available for battle")

    state.phase = GamePhase.BATTLE
    state.player.stats.current_hp = state.player.stats.max_hp
    state.opponent.stats.current_hp = state.opponent.stats.max_hp

    state.current_battle = execute_battle(
        state.player, state.opponent, state.current_round, rng
    )
    return state.current_battle


def end_round(
    state: GameState,
    catalog: ItemCatalog,
    strategy: ShopStrategy,
    rng: Optional[random.Random] = None,
) -> BattleTimeline:
    """라운드 정산. 배틀이 없으면 GamePhaseError.

    - 무승부는 승리로 취급
    - 패배 시 생명 보호 아이템이 있으면 그것을 소모하고 생명 유지
    - 생명 0 또는 마지막 라운드면 gameOver, 아니면 다음 상점 단계
    """
    battle = state.current_battle
    if battle is None:
        raise GamePhaseError("No battle to end")

    player_won = battle.winner in (Winner.PLAYER, Winner.DRAW)
    life_saved = False
    if not player_won:
        life_saved = consume_life_prevention(state.player, battle.turn) is not None
    lost_life = not player_won and not life_saved

    timeline = BattleTimeline(
        round=state.current_round,
        player_won=player_won,
        player_hp=battle.player.stats.current_hp,
        opponent_hp=battle.opponent.stats.current_hp,
        lost_life=lost_life,
        life_saved=life_saved,
    )
    state.battle_timeline.append(timeline)

    if player_won:
        state.consecutive_wins += 1
        state.skill_points += skill_points_for_win(state.difficulty, state.consecutive_wins)
    else:
        state.consecutive_wins = 0

    if lost_life:
        state.player.stats.lives -= 1
        logger.info(
            "Player lost a life in round %d (%d left)",
            state.current_round,
            state.player.stats.lives,
        )
        if state.player.stats.lives <= 0:
            state.phase = GamePhase.GAME_OVER
            logger.info("Game over: out of lives at round %d", state.current_round)
            return timeline

    if state.current_round >= state.max_rounds:
        state.phase = GamePhase.GAME_OVER
        logger.info("Game over: all %d rounds completed", state.max_rounds)
        return timeline

    state.current_round += 1
    start_shop_phase(state, catalog, strategy, rng)
    return timeline


def get_game_stats(state: GameState) -> GameStats:
    total = len(state.battle_timeline)
    won = sum(1 for b in state.battle_timeline if b.player_won)
    stats = state.player.stats
    return GameStats(
        total_battles=total,
        battles_won=won,
        battles_lost=total - won,
        lives_lost=MAX_LIVES - stats.lives,
        total_damage_dealt=stats.total_damage_dealt,
        total_damage_received=stats.total_damage_received,
        total_damage_blocked=stats.total_damage_blocked,
        total_money_spent=stats.total_money_spent,
        total_items_bought=stats.total_items_bought,
        current_round=state.current_round,
        game_duration=time.time() - state.game_start_time,
    )

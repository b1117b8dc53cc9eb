"""자금 관리 — 구매/판매 검증 + 라운드 수입

검증 실패는 예외가 아니라 False 반환.
"""

from __future__ import annotations

import logging

from src.core.constants import MAX_ITEMS, MONEY_PER_ROUND, round_half_up
from src.core.item.models import EffectTrigger, EffectType, Item
from src.core.player.models import Player
from src.core.skills.manager import get_money_per_round_bonus

logger = logging.getLogger(__name__)


def can_afford(player: Player, item: Item) -> bool:
    return player.stats.money >= item.price


def is_inventory_full(player: Player) -> bool:
    return len(player.items) >= MAX_ITEMS


def purchase_item(player: Player, item: Item) -> bool:
    """자금/슬롯 검증 후 구매. 누적 지출/구매 수 갱신."""
    if not can_afford(player, item):
        logger.info(
            "Purchase rejected (insufficient money): %s costs %d, has %d",
            item.id,
            item.price,
            player.stats.money,
        )
        return False

    if is_inventory_full(player):
        logger.info("Purchase rejected (inventory full): %s", item.id)
        return False

    player.stats.money -= item.price
    player.stats.total_money_spent += item.price
    player.stats.total_items_bought += 1
    player.items.append(item)
    return True


def _find_owned(player: Player, item: Item) -> int:
    for i, owned in enumerate(player.items):
        if owned is item:
            return i
    for i, owned in enumerate(player.items):
        if owned.id == item.id:
            return i
    return -1


def sell_item(player: Player, item: Item) -> bool:
    """판매가 = 구매가 전액. 미보유 / 판매 불가(파괴) 아이템은 거부."""
    index = _find_owned(player, item)
    if index == -1:
        logger.warning("Sell rejected (not owned): %s", item.id)
        return False

    owned = player.items[index]
    if not owned.can_sell:
        logger.info("Sell rejected (unsellable): %s", owned.id)
        return False

    player.items.pop(index)
    player.stats.money += owned.price
    return True


# =============================================================================
# 라운드 수입
# =============================================================================


def get_money_bonus_from_items(player: Player) -> int:
    """passive moneyBonus 합계 (파괴된 아이템 제외)."""
    bonus = 0
    for item in player.items:
        for effect in item.active_effects(EffectTrigger.PASSIVE):
            if effect.effect_type == EffectType.MONEY_BONUS:
                bonus += int(effect.value)
    return bonus


def get_money_multiplier_from_items(player: Player) -> float:
    """passive moneyMultiplier 곱 (파괴된 아이템 제외)."""
    multiplier = 1.0
    for item in player.items:
        for effect in item.active_effects(EffectTrigger.PASSIVE):
            if effect.effect_type == EffectType.MONEY_MULTIPLIER:
                multiplier *= effect.value
    return multiplier


def calculate_round_income(player: Player) -> int:
    """(기본 수입 + 스킬 보너스 + 아이템 보너스) × 아이템 배율."""
    base = (
        MONEY_PER_ROUND
        + get_money_per_round_bonus(player.skills)
        + get_money_bonus_from_items(player)
    )
    return round_half_up(base * get_money_multiplier_from_items(player))


def award_round_money(player: Player, round: int) -> int:
    """라운드 수입 지급. 반환: 지급액."""
    earned = calculate_round_income(player)
    player.stats.money += earned
    logger.debug("Round %d income: +%d (total %d)", round, earned, player.stats.money)
    return earned


def update_money_item_durations(player: Player) -> list[Item]:
    """라운드 단위 moneyMultiplier 내구도. 반환: 이번에 파괴된 아이템."""
    broken: list[Item] = []
    for item in player.items:
        if item.is_broken:
            continue
        for effect in item.effects:
            if effect.effect_type != EffectType.MONEY_MULTIPLIER or not effect.breakable:
                continue
            effect.current_duration += 1
            if effect.max_duration and effect.current_duration >= effect.max_duration:
                item.mark_broken(effect)
                broken.append(item)
                logger.info("Money item expired after %d rounds: %s", effect.current_duration, item.id)
                break
    return broken

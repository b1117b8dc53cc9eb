"""아이템 효과 엔진 — 트리거별 상태 변화 효과 적용

계산기 담당 (여기서는 이벤트 없음):
    damage, block, attackMultiply, defenseMultiply, speedBoost
효과 엔진 담당 (상태 변화 + 이벤트):
    heal, vampire, stack, tempPower, preventLifeLoss
라운드/경제 담당:
    moneyBonus, moneyMultiplier, maxHPBonus
무효 (전투에 영향 없음):
    luck, reduceOpponentAttack
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Optional

from src.core.constants import round_half_up
from src.core.item.models import EffectTrigger, EffectType, Item, ItemEffect
from src.core.player.models import Player

from .battle_log import create_heal_event, create_item_effect_event
from .calculator import apply_heal, calculate_heal
from .models import BattleEvent, EffectApplicationResult, Side

logger = logging.getLogger(__name__)

EffectHandler = Callable[
    [ItemEffect, Item, Player, Side, int, Optional[int], Optional[random.Random]],
    EffectApplicationResult,
]


def side_of(player: Player) -> Side:
    return Side.OPPONENT if player.is_ai else Side.PLAYER


def _roll(effect: ItemEffect, rng: Optional[random.Random]) -> bool:
    if effect.chance is None:
        return True
    return (rng or random).random() < effect.chance


# =============================================================================
# 효과 타입별 핸들러
# =============================================================================


def _apply_heal(effect, item, player, side, turn, damage_dealt, rng):
    actual = 0
    if _roll(effect, rng):
        actual = apply_heal(player, calculate_heal(effect))
        description = "(at max HP)" if actual == 0 else None
    else:
        description = "(no proc)"

    if actual > 0:
        message = f"{item.emoji} {item.name} heals for {actual} HP!"
    else:
        message = f"{item.emoji} {item.name} heal blocked {description}"

    event = create_heal_event(
        turn, side, item, actual, description, player.stats.current_hp, message
    )
    return EffectApplicationResult(events=[event])


def _apply_vampire(effect, item, player, side, turn, damage_dealt, rng):
    if not damage_dealt or damage_dealt <= 0:
        return EffectApplicationResult()

    percent = round_half_up(effect.value * 100)
    actual = 0
    if _roll(effect, rng):
        actual = apply_heal(player, calculate_heal(effect, damage_dealt))
        suffix = " - at max HP" if actual == 0 else ""
    else:
        suffix = " - no proc"

    if actual > 0:
        message = f"{item.emoji} {item.name} drains {actual} HP!"
    else:
        message = f"{item.emoji} {item.name} vampire heal blocked{suffix}"

    event = create_heal_event(
        turn,
        side,
        item,
        actual,
        f"Vampire ({percent}%){suffix}",
        player.stats.current_hp,
        message,
    )
    return EffectApplicationResult(events=[event])


def _apply_stack(effect, item, player, side, turn, damage_dealt, rng):
    cap = effect.stack_cap
    if effect.current_stacks >= cap or not _roll(effect, rng):
        return EffectApplicationResult()

    effect.current_stacks += 1
    event = create_item_effect_event(
        turn,
        side,
        item,
        f"Stack +{effect.value} ({effect.current_stacks}/{cap})",
        f"{item.emoji} {item.name} gains a stack! ({effect.current_stacks}/{cap})",
    )
    return EffectApplicationResult(events=[event])


def _apply_temp_power(effect, item, player, side, turn, damage_dealt, rng):
    if effect.duration is None or effect.duration <= 0 or not _roll(effect, rng):
        return EffectApplicationResult()

    effect.duration -= 1
    if effect.duration == 0 and effect.breakable:
        item.mark_broken(effect)
        logger.debug("Temporary power expired: %s (%s)", item.id, side.value)
        event = create_item_effect_event(
            turn,
            side,
            item,
            "Temporary power expired",
            f"{item.emoji} {item.name} power fades away!",
        )
        return EffectApplicationResult(events=[event])
    return EffectApplicationResult()


def _spend_life_prevention(effect: ItemEffect, item: Item, side: Side, turn: int) -> BattleEvent:
    """1회용: 발동 즉시 자신을 파괴."""
    item.mark_broken(effect)
    return create_item_effect_event(
        turn,
        side,
        item,
        "Life saved!",
        f"{item.emoji} {item.name} prevents life loss!",
    )


def _apply_prevent_life_loss(effect, item, player, side, turn, damage_dealt, rng):
    if effect.is_broken or not _roll(effect, rng):
        return EffectApplicationResult()
    event = _spend_life_prevention(effect, item, side, turn)
    return EffectApplicationResult(events=[event], prevent_life_loss=True)


def _no_event(effect, item, player, side, turn, damage_dealt, rng):
    return EffectApplicationResult()


_HANDLERS: dict[EffectType, EffectHandler] = {
    EffectType.HEAL: _apply_heal,
    EffectType.VAMPIRE: _apply_vampire,
    EffectType.STACK: _apply_stack,
    EffectType.TEMP_POWER: _apply_temp_power,
    EffectType.PREVENT_LIFE_LOSS: _apply_prevent_life_loss,
    # 계산기에서 합산
    EffectType.DAMAGE: _no_event,
    EffectType.BLOCK: _no_event,
    EffectType.ATTACK_MULTIPLY: _no_event,
    EffectType.DEFENSE_MULTIPLY: _no_event,
    EffectType.SPEED_BOOST: _no_event,
    # 라운드 수입 / 최대 HP 재계산에서 처리
    EffectType.MONEY_BONUS: _no_event,
    EffectType.MONEY_MULTIPLIER: _no_event,
    EffectType.MAX_HP_BONUS: _no_event,
    # 무효
    EffectType.LUCK: _no_event,
    EffectType.REDUCE_OPPONENT_ATTACK: _no_event,
}


# =============================================================================
# 공개 API
# =============================================================================


def apply_effects(
    trigger: EffectTrigger,
    player: Player,
    opponent: Player,
    turn: int,
    damage_dealt: Optional[int] = None,
    rng: Optional[random.Random] = None,
    side: Optional[Side] = None,
) -> EffectApplicationResult:
    """player 소유 아이템 중 trigger 에 해당하는 효과를 순서대로 적용.

    순서: 아이템 목록 순 → 아이템 내 효과 순.
    도중에 파괴된 아이템의 나머지 효과는 건너뛴다.
    opponent 는 현재 어떤 효과도 참조하지 않지만 호출 계약상 유지.
    side 미지정 시 is_ai 로 판정.
    """
    side = side or side_of(player)
    result = EffectApplicationResult()

    for item in player.items:
        for effect in item.active_effects(trigger):
            if item.is_broken:
                break
            handler = _HANDLERS[effect.effect_type]
            applied = handler(effect, item, player, side, turn, damage_dealt, rng)
            result.events.extend(applied.events)
            if applied.prevent_life_loss:
                result.prevent_life_loss = True

    return result


def reset_battle_effects(player: Player) -> None:
    """배틀 시작 시 1회: 스택 0, tempPower duration 복원.

    파괴 상태(is_broken / can_sell)는 배틀을 넘어 유지된다.
    """
    for item in player.items:
        for effect in item.effects:
            if effect.stackable or effect.effect_type == EffectType.STACK:
                effect.current_stacks = 0
            if (
                effect.effect_type == EffectType.TEMP_POWER
                and effect.base_duration is not None
                and not effect.is_broken
            ):
                effect.duration = effect.base_duration


def update_breakable_items(player: Player) -> list[Item]:
    """배틀 종료 시 1회: 배틀 수 기준 내구도 증가 + max_duration 도달 시 파괴.

    moneyMultiplier 는 라운드 단위로 상점 단계에서 따로 센다.
    반환: 이번에 새로 파괴된 아이템.
    """
    broken: list[Item] = []
    for item in player.items:
        if item.is_broken:
            continue
        for effect in item.effects:
            if not effect.breakable or effect.max_duration is None:
                continue
            if effect.effect_type == EffectType.MONEY_MULTIPLIER:
                continue
            effect.current_duration += 1
            if effect.current_duration >= effect.max_duration:
                item.mark_broken(effect)
                broken.append(item)
                logger.debug("Item worn out after %d battles: %s", effect.current_duration, item.id)
                break
    return broken


def _find_life_prevention(player: Player) -> Optional[tuple[Item, ItemEffect]]:
    for item in player.items:
        for effect in item.active_effects():
            if effect.effect_type == EffectType.PREVENT_LIFE_LOSS and not effect.is_broken:
                return item, effect
    return None


def has_life_prevention_item(player: Player) -> bool:
    return _find_life_prevention(player) is not None


def consume_life_prevention(player: Player, turn: int = 0) -> Optional[BattleEvent]:
    """패배 시 첫 번째 생명 보호 아이템을 소모(파괴). 없으면 None."""
    found = _find_life_prevention(player)
    if found is None:
        return None

    item, effect = found
    event = _spend_life_prevention(effect, item, side_of(player), turn)
    logger.info("Life loss prevented by %s", item.id)
    return event

"""배틀 엔진 — 턴 루프 상태 머신

턴 1회 = 공격 1회. 짝수 턴은 플레이어, 홀수 턴은 상대.
배틀은 두 참가자의 깊은 복사본 위에서 진행되고,
종료 후 아이템 런타임 상태(파괴/내구도/스택)만 원본 로스터에 되돌려 쓴다.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from src.core.constants import (
    DAMAGE_MULTIPLIER_START,
    MAX_BATTLE_TURNS,
    SPEED_INCREASE_INTERVAL,
)
from src.core.item.models import EffectTrigger, Item
from src.core.player.models import Player

from .battle_log import (
    create_attack_event,
    create_damage_multiplier_event,
    create_draw_event,
    create_speed_increase_event,
    create_turn_start_event,
)
from .calculator import (
    apply_damage,
    calculate_damage,
    calculate_damage_multiplier,
    calculate_speed_multiplier,
)
from .effects import apply_effects, reset_battle_effects, update_breakable_items
from .models import (
    BattleEventType,
    BattleState,
    BattleStatus,
    DamageResult,
    Side,
    Winner,
)

logger = logging.getLogger(__name__)

# 단일 공격 턴 기준 간격 (라운드 = 공격 2회)
SPEED_CHECK_TURNS = SPEED_INCREASE_INTERVAL * 2
DAMAGE_MULTIPLIER_START_TURN = DAMAGE_MULTIPLIER_START * 2
DAMAGE_MULTIPLIER_CHECK_TURNS = 4


def acting_side(turn: int) -> Side:
    return Side.PLAYER if turn % 2 == 0 else Side.OPPONENT


def _fire_both(
    state: BattleState,
    trigger: EffectTrigger,
    first: Side,
    rng: Optional[random.Random],
) -> None:
    """양측 트리거 발동. first 먼저, 그 다음 반대편."""
    for side in (first, first.other):
        result = apply_effects(
            trigger,
            state.participant(side),
            state.participant(side.other),
            state.turn,
            rng=rng,
            side=side,
        )
        state.record(*result.events)


def execute_attack(
    state: BattleState,
    side: Side,
    rng: Optional[random.Random] = None,
) -> DamageResult:
    """side 의 공격 1회.

    순서: 데미지 계산 → 적용 → attack_count 증가 →
          onHit(공격자) → onAttack(공격자) → onBlock(방어자, 블록 시) → onDefend(방어자)
    연쇄 중 회복은 공격 이벤트 details 에 병합되고, 나머지 효과 이벤트는 뒤따라 기록된다.
    치명타(방어자 HP 0)면 연쇄 효과는 발동하지 않는다.
    """
    attacker = state.participant(side)
    defender = state.participant(side.other)

    result = calculate_damage(
        attacker, defender, state.speed_multiplier, state.damage_multiplier, rng
    )
    dealt = apply_damage(defender, result.final_damage)
    attacker.stats.attack_count += 1

    state.deltas(side).damage_dealt += dealt
    state.deltas(side.other).damage_received += dealt
    state.deltas(side.other).damage_blocked += result.blocked_damage

    cascade = []
    if defender.is_alive:
        turn = state.turn
        cascade += apply_effects(
            EffectTrigger.ON_HIT, attacker, defender, turn, result.final_damage, rng, side
        ).events
        cascade += apply_effects(
            EffectTrigger.ON_ATTACK, attacker, defender, turn, result.final_damage, rng, side
        ).events
        if result.block_percent > 0:
            cascade += apply_effects(
                EffectTrigger.ON_BLOCK, defender, attacker, turn, rng=rng, side=side.other
            ).events
        cascade += apply_effects(
            EffectTrigger.ON_DEFEND, defender, attacker, turn, rng=rng, side=side.other
        ).events

    heal_details = [
        detail
        for event in cascade
        if event.event_type == BattleEventType.HEAL
        for detail in event.details
    ]
    trailing = [e for e in cascade if e.event_type != BattleEventType.HEAL]

    attack_event = create_attack_event(
        state.turn,
        side,
        result,
        state.player.stats.current_hp,
        state.opponent.stats.current_hp,
        heal_details,
    )
    state.record(attack_event, *trailing)
    return result


def _check_speed_increase(state: BattleState) -> None:
    next_turn = state.turn + 1
    if next_turn % SPEED_CHECK_TURNS != 0:
        return
    multiplier = calculate_speed_multiplier(next_turn // 2)
    if multiplier > state.speed_multiplier:
        state.speed_multiplier = multiplier
        state.record(
            create_speed_increase_event(state.turn, acting_side(state.turn), multiplier)
        )


def _check_damage_multiplier(state: BattleState) -> None:
    turn = state.turn
    if turn < DAMAGE_MULTIPLIER_START_TURN:
        return
    if (turn - DAMAGE_MULTIPLIER_START_TURN) % DAMAGE_MULTIPLIER_CHECK_TURNS != 0:
        return
    multiplier = calculate_damage_multiplier(turn // 2)
    if multiplier > state.damage_multiplier:
        state.damage_multiplier = multiplier
        state.record(
            create_damage_multiplier_event(turn, acting_side(turn), multiplier)
        )


def _run_turns(state: BattleState, rng: Optional[random.Random]) -> None:
    while state.turn < MAX_BATTLE_TURNS:
        side = acting_side(state.turn)
        attacker = state.participant(side)
        defender = state.participant(side.other)

        state.record(create_turn_start_event(state.turn, side))
        _fire_both(state, EffectTrigger.ON_TURN_START, side, rng)

        if attacker.is_alive:
            execute_attack(state, side, rng)
            if not defender.is_alive:
                state.winner = Winner(side.value)
                state.record_hp()
                return

        _fire_both(state, EffectTrigger.ON_TURN_END, side, rng)
        _check_speed_increase(state)
        _check_damage_multiplier(state)

        state.record_hp()
        state.turn += 1

    state.winner = Winner.DRAW
    state.record(create_draw_event(state.turn))


def _sync_item_state(source: list[Item], target: list[Item]) -> None:
    """배틀 복사본의 아이템 런타임 상태를 원본 로스터에 복사 (인덱스 대응)."""
    for src_item, dst_item in zip(source, target):
        dst_item.can_sell = src_item.can_sell
        for src_effect, dst_effect in zip(src_item.effects, dst_item.effects):
            dst_effect.is_broken = src_effect.is_broken
            dst_effect.current_duration = src_effect.current_duration
            dst_effect.duration = src_effect.duration
            dst_effect.current_stacks = src_effect.current_stacks


def _fold_deltas(state: BattleState, player: Player, opponent: Player) -> None:
    for persistent, side in ((player, Side.PLAYER), (opponent, Side.OPPONENT)):
        deltas = state.deltas(side)
        persistent.stats.total_damage_dealt += deltas.damage_dealt
        persistent.stats.total_damage_received += deltas.damage_received
        persistent.stats.total_damage_blocked += deltas.damage_blocked


def execute_battle(
    player: Player,
    opponent: Player,
    round: int,
    rng: Optional[random.Random] = None,
) -> BattleState:
    """배틀 1회 전체 실행. 반환된 BattleState 는 항상 완료 상태.

    원본 player / opponent 에는 다음만 반영된다:
    - 아이템 런타임 상태 (배틀 중 파괴 포함)
    - 누적 통계 (가한/받은/막은 데미지)
    HP 는 복사본에만 남는다.
    """
    state = BattleState(
        round=round,
        player=player.clone(),
        opponent=opponent.clone(),
        status=BattleStatus.RUNNING,
    )
    reset_battle_effects(state.player)
    reset_battle_effects(state.opponent)
    state.record_hp()

    _fire_both(state, EffectTrigger.ON_BATTLE_START, Side.PLAYER, rng)
    _run_turns(state, rng)
    state.status = BattleStatus.COMPLETE

    _fire_both(state, EffectTrigger.ON_BATTLE_END, Side.PLAYER, rng)

    update_breakable_items(state.player)
    update_breakable_items(state.opponent)

    _sync_item_state(state.player.items, player.items)
    _sync_item_state(state.opponent.items, opponent.items)
    _fold_deltas(state, player, opponent)

    logger.info(
        "Battle round %d finished: winner=%s turns=%d hp=%d/%d",
        round,
        state.winner.value,
        state.turn,
        state.player.stats.current_hp,
        state.opponent.stats.current_hp,
    )
    logger.debug("Battle round %d produced %d events", round, len(state.events))
    return state

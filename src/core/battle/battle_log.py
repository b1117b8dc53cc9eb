"""배틀 로그 — DamageResult / 효과 결과를 BattleEvent 로 변환 (상태 없음)

details 순서는 표시 계약이다:
기본 공격 → 아이템 공격 → 효과 데미지 → (블록 시) 기본 방어 → 아이템/효과 블록 → 최종 데미지
"""

from __future__ import annotations

from typing import Iterable, Optional

from src.core.constants import round_half_up
from src.core.item.models import Item

from .models import BattleEvent, BattleEventDetail, BattleEventType, DamageResult, Side

DRAW_MESSAGE = "⏱️ Battle lasted too long! It's a draw!"


def create_attack_event(
    turn: int,
    attacker: Side,
    damage_result: DamageResult,
    player_hp: int,
    opponent_hp: int,
    extra_details: Iterable[BattleEventDetail] = (),
) -> BattleEvent:
    """공격 이벤트. extra_details(공격이 유발한 회복)는 최종 데미지 뒤에 붙는다."""
    breakdown = damage_result.breakdown
    block = damage_result.block_breakdown

    details: list[BattleEventDetail] = [
        BattleEventDetail(raw_damage=breakdown.base_damage, effect_description="Base Attack")
    ]
    for c in breakdown.item_damages:
        details.append(
            BattleEventDetail(
                item_id=c.item_id,
                item_name=c.item_name,
                item_emoji=c.item_emoji,
                raw_damage=c.amount,
                effect_description="Item Attack",
            )
        )
    for c in breakdown.effect_damages:
        details.append(
            BattleEventDetail(
                item_id=c.item_id,
                item_name=c.item_name,
                item_emoji=c.item_emoji,
                raw_damage=c.amount,
                effect_description="Effect Damage",
            )
        )

    if damage_result.block_amount > 0:
        details.append(
            BattleEventDetail(
                block_amount=block.base_block,
                block_percent=damage_result.block_percent,
                effect_description="Base Defense",
            )
        )
        for c in block.item_blocks:
            details.append(
                BattleEventDetail(
                    item_id=c.item_id,
                    item_name=c.item_name,
                    item_emoji=c.item_emoji,
                    block_amount=c.amount,
                    effect_description="Item/Effect Block",
                )
            )

    details.append(
        BattleEventDetail(final_damage=damage_result.final_damage, effect_description="Final Damage")
    )
    details.extend(extra_details)

    return BattleEvent(
        turn=turn,
        attacker=attacker,
        event_type=BattleEventType.ATTACK,
        message=_attack_message(attacker, damage_result),
        details=tuple(details),
        current_player_hp=player_hp,
        current_opponent_hp=opponent_hp,
    )


def _attack_message(attacker: Side, result: DamageResult) -> str:
    attacker_name = "You" if attacker == Side.PLAYER else "Opponent"
    defender_name = "Opponent" if attacker == Side.PLAYER else "You"
    if result.block_percent > 0:
        return (
            f"{attacker_name} attack for {result.raw_damage} damage. "
            f"{defender_name} block {round_half_up(result.block_percent * 100)}% "
            f"({result.final_damage} damage dealt)."
        )
    return f"{attacker_name} attack for {result.final_damage} damage!"


def create_heal_event(
    turn: int,
    healer: Side,
    item: Item,
    heal_amount: int,
    description: Optional[str],
    current_hp: int,
    message: str,
) -> BattleEvent:
    """회복 이벤트. HP 스냅샷은 회복한 쪽만 기록."""
    detail = BattleEventDetail(
        item_id=item.id,
        item_name=item.name,
        item_emoji=item.emoji,
        heal_amount=heal_amount,
        healer=healer,
        effect_description=description,
    )
    return BattleEvent(
        turn=turn,
        attacker=healer,
        event_type=BattleEventType.HEAL,
        message=message,
        details=(detail,),
        current_player_hp=current_hp if healer == Side.PLAYER else None,
        current_opponent_hp=current_hp if healer == Side.OPPONENT else None,
    )


def create_item_effect_event(
    turn: int, side: Side, item: Item, description: str, message: str
) -> BattleEvent:
    """스택 / 만료 / 생명 보호 등 상태 변화 이벤트."""
    detail = BattleEventDetail(
        item_id=item.id,
        item_name=item.name,
        item_emoji=item.emoji,
        effect_description=description,
    )
    return BattleEvent(
        turn=turn,
        attacker=side,
        event_type=BattleEventType.EFFECT,
        message=message,
        details=(detail,),
    )


def create_turn_start_event(turn: int, side: Side = Side.PLAYER) -> BattleEvent:
    return BattleEvent(
        turn=turn,
        attacker=side,
        event_type=BattleEventType.TURN_START,
        message=f"--- Turn {turn // 2 + 1} ---",
    )


def create_speed_increase_event(turn: int, side: Side, multiplier: float) -> BattleEvent:
    percent = round_half_up(multiplier * 100)
    return BattleEvent(
        turn=turn,
        attacker=side,
        event_type=BattleEventType.SPEED_INCREASE,
        message=f"⚡ Speed increased! Attacks now deal {percent}% damage!",
        details=(BattleEventDetail(effect_description=f"Speed increased to {percent}%"),),
    )


def create_damage_multiplier_event(turn: int, side: Side, multiplier: float) -> BattleEvent:
    percent = round_half_up(multiplier * 100)
    return BattleEvent(
        turn=turn,
        attacker=side,
        event_type=BattleEventType.DAMAGE_MULTIPLIER,
        message=f"💥 Battle intensifies! Damage multiplier increased to {percent}%!",
        details=(BattleEventDetail(effect_description=f"Damage multiplier: {percent}%"),),
    )


def create_draw_event(turn: int) -> BattleEvent:
    return BattleEvent(
        turn=turn,
        attacker=Side.PLAYER,
        event_type=BattleEventType.EFFECT,
        message=DRAW_MESSAGE,
    )


def format_event(event: BattleEvent) -> str:
    """이벤트 1건 → 여러 줄 텍스트."""
    lines = [f"[Turn {event.turn}] {event.message}"]

    for detail in event.details:
        if not detail.item_name:
            continue
        line = f"  {detail.item_emoji} {detail.item_name}"
        if detail.raw_damage:
            line += f": +{detail.raw_damage} dmg"
        if detail.block_amount:
            line += f": +{detail.block_amount} block"
        if detail.heal_amount:
            line += f": +{detail.heal_amount} heal"
        if detail.effect_description:
            line += f" ({detail.effect_description})"
        lines.append(line)

    if event.current_player_hp is not None:
        lines.append(f"  Player HP: {event.current_player_hp}")
    if event.current_opponent_hp is not None:
        lines.append(f"  Opponent HP: {event.current_opponent_hp}")

    return "\n".join(lines)


def format_battle_log(events: Iterable[BattleEvent]) -> str:
    return "\n".join(format_event(e) for e in events)

"""데미지 계산기 — Player 스냅샷에 대한 순수 함수 모음

apply_damage / apply_heal 을 제외하면 입력을 변경하지 않는다.
무작위 요소는 chance 판정 하나뿐이며, 주입된 rng 로만 뽑는다.
"""

from __future__ import annotations

import math
import random
from typing import Optional

from src.core.constants import (
    DAMAGE_MULTIPLIER_START,
    DAMAGE_MULTIPLIER_VALUE,
    MAX_DEFENSE_PERCENT,
    SPEED_INCREASE_INTERVAL,
    SPEED_INCREASE_VALUE,
    round_half_up,
)
from src.core.item.models import EffectTrigger, EffectType, Item, ItemEffect
from src.core.player.models import Player, PlayerCalculatedStats, StatBreakdown
from src.core.skills.manager import get_skill_bonus
from src.core.skills.models import SkillEffectType

from .models import BlockBreakdown, DamageBreakdown, DamageResult, ItemContribution
from .multipliers import MultiplierSource


def _contribution(item: Item, amount: int) -> ItemContribution:
    return ItemContribution(
        item_id=item.id, item_name=item.name, item_emoji=item.emoji, amount=amount
    )


def _roll(effect: ItemEffect, rng: Optional[random.Random]) -> bool:
    """chance 판정. chance 미지정이면 항상 발동."""
    if effect.chance is None:
        return True
    return (rng or random).random() < effect.chance


def _stack_bonus(item: Item) -> int:
    bonus = 0
    for effect in item.active_effects():
        if effect.effect_type == EffectType.STACK and effect.current_stacks > 0:
            bonus += round_half_up(effect.current_stacks * effect.value)
    return bonus


def calculate_player_stats(player: Player) -> PlayerCalculatedStats:
    """공/방 합계 + 배율 + 방어율.

    - base: Player.stats (고정값 스킬은 생성 시 이미 반영됨)
    - items: 아이템 기본 공/방 + 스택 누적 공격력
    - 배율: MultiplierSource (스킬 + passive 아이템, 가산 누적)
    - defense_percent = min(total_defense / 100, 0.9)
    """
    stats = player.stats
    total_attack = stats.base_attack
    total_defense = stats.base_defense

    for item in player.items:
        total_attack += item.base_attack
        total_defense += item.base_defense
        total_attack += _stack_bonus(item)

    source = MultiplierSource(player)
    attack_multiplier = source.attack_multiplier
    defense_multiplier = source.defense_multiplier

    total_attack = round_half_up(total_attack * attack_multiplier)
    total_defense = round_half_up(total_defense * defense_multiplier)
    defense_percent = min(total_defense / 100, MAX_DEFENSE_PERCENT)

    skill_attack = int(get_skill_bonus(player.skills, SkillEffectType.BASE_ATTACK))
    skill_defense = int(get_skill_bonus(player.skills, SkillEffectType.BASE_DEFENSE))

    return PlayerCalculatedStats(
        total_attack=total_attack,
        total_defense=total_defense,
        defense_percent=defense_percent,
        attack_multiplier=attack_multiplier,
        defense_multiplier=defense_multiplier,
        base=StatBreakdown(
            attack=stats.base_attack - skill_attack,
            defense=stats.base_defense - skill_defense,
        ),
        skills=StatBreakdown(attack=skill_attack, defense=skill_defense),
        items=StatBreakdown(
            attack=total_attack - stats.base_attack,
            defense=total_defense - stats.base_defense,
        ),
    )


def get_speed_boost(player: Player) -> float:
    """passive speedBoost 합계 (공격자 속도 배율에 가산)."""
    boost = 0.0
    for item in player.items:
        for effect in item.active_effects(EffectTrigger.PASSIVE):
            if effect.effect_type == EffectType.SPEED_BOOST:
                boost += effect.value
    return boost


def calculate_damage(
    attacker: Player,
    defender: Player,
    speed_multiplier: float = 1.0,
    damage_multiplier: float = 1.0,
    rng: Optional[random.Random] = None,
) -> DamageResult:
    """공격 1회의 원시 데미지 / 블록 / 최종 데미지.

    raw = round((기본 + 아이템 + 효과) × 공격 배율 × 후반 배율)
    block = round((기본 방어 + 아이템 방어 + onDefend block) × 방어 배율)
    final = max(1, raw - round(raw × block_percent))
    """
    speed = speed_multiplier + get_speed_boost(attacker)

    # === 공격 ===
    base_damage = round_half_up(attacker.stats.base_attack * speed)
    breakdown = DamageBreakdown(base_damage=base_damage, multipliers=damage_multiplier)
    damage_sum = base_damage

    for item in attacker.items:
        if item.base_attack > 0:
            item_attack = round_half_up(item.base_attack * speed)
            damage_sum += item_attack
            breakdown.item_damages.append(_contribution(item, item_attack))

    for item in attacker.items:
        for effect in item.active_effects():
            bonus = 0
            if effect.trigger == EffectTrigger.ON_ATTACK and effect.effect_type == EffectType.DAMAGE:
                if _roll(effect, rng):
                    bonus = round_half_up(effect.value)
            elif effect.effect_type == EffectType.TEMP_POWER:
                if effect.duration is not None and effect.duration > 0:
                    bonus = round_half_up(effect.value)
            elif effect.effect_type == EffectType.STACK and effect.current_stacks > 0:
                bonus = round_half_up(effect.current_stacks * effect.value)

            if bonus > 0:
                damage_sum += bonus
                breakdown.effect_damages.append(_contribution(item, bonus))

    attack_multiplier = MultiplierSource(attacker).attack_multiplier
    breakdown.attack_multiplier = attack_multiplier
    raw_damage = round_half_up(damage_sum * attack_multiplier * damage_multiplier)

    # === 방어 ===
    base_block = defender.stats.base_defense
    defense_multiplier = MultiplierSource(defender).defense_multiplier
    block_breakdown = BlockBreakdown(base_block=base_block, multipliers=defense_multiplier)
    block_sum = base_block

    for item in defender.items:
        if item.base_defense > 0:
            block_sum += item.base_defense
            block_breakdown.item_blocks.append(_contribution(item, item.base_defense))

    for item in defender.items:
        for effect in item.active_effects(EffectTrigger.ON_DEFEND):
            if effect.effect_type == EffectType.BLOCK and _roll(effect, rng):
                effect_block = round_half_up(effect.value)
                if effect_block > 0:
                    block_sum += effect_block
                    block_breakdown.item_blocks.append(_contribution(item, effect_block))

    block_amount = round_half_up(block_sum * defense_multiplier)
    block_percent = min(block_amount / 100, MAX_DEFENSE_PERCENT)

    blocked_damage = round_half_up(raw_damage * block_percent)
    final_damage = max(1, raw_damage - blocked_damage)

    return DamageResult(
        raw_damage=raw_damage,
        block_amount=block_amount,
        block_percent=block_percent,
        blocked_damage=max(0, raw_damage - final_damage),
        final_damage=final_damage,
        breakdown=breakdown,
        block_breakdown=block_breakdown,
    )


def calculate_heal(effect: ItemEffect, damage_dealt: Optional[int] = None) -> int:
    """heal: 고정값, vampire: round(damage_dealt × value). 그 외 0."""
    if effect.effect_type == EffectType.HEAL:
        return round_half_up(effect.value)
    if effect.effect_type == EffectType.VAMPIRE and damage_dealt:
        return round_half_up(damage_dealt * effect.value)
    return 0


def apply_heal(player: Player, amount: int) -> int:
    """HP 회복 (max_hp 상한). 반환: 실제 회복량 (최대 HP면 0)."""
    new_hp = min(player.stats.max_hp, player.stats.current_hp + max(0, amount))
    actual = new_hp - player.stats.current_hp
    player.stats.current_hp = new_hp
    return actual


def apply_damage(player: Player, damage: int) -> int:
    """HP 감소 (0 하한). 반환: 실제 감소량."""
    new_hp = max(0, player.stats.current_hp - max(0, damage))
    actual = player.stats.current_hp - new_hp
    player.stats.current_hp = new_hp
    return actual


def calculate_speed_multiplier(attack_count: int) -> float:
    """SPEED_INCREASE_INTERVAL 마다 SPEED_INCREASE_VALUE 씩 계단식 증가."""
    intervals = math.floor(attack_count / SPEED_INCREASE_INTERVAL)
    return 1 + intervals * SPEED_INCREASE_VALUE


def calculate_damage_multiplier(turn: int) -> float:
    """DAMAGE_MULTIPLIER_START 전까지 1.0, 이후 2라운드마다 DAMAGE_MULTIPLIER_VALUE 씩."""
    if turn < DAMAGE_MULTIPLIER_START:
        return 1.0
    rounds = math.floor((turn - DAMAGE_MULTIPLIER_START) / 2)
    return 1 + rounds * DAMAGE_MULTIPLIER_VALUE

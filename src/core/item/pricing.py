"""아이템 가격/파워 산정 + 밸런스 리포트"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from src.core.constants import round_half_up

from .models import EffectType, Item, ItemEffect, ItemRarity

logger = logging.getLogger(__name__)

# === 가격 ===
PRICE_PER_BASE_STAT = 3

PRICE_RARITY_MULTIPLIER: dict[ItemRarity, float] = {
    ItemRarity.COMMON: 1.0,
    ItemRarity.RARE: 1.5,
    ItemRarity.EPIC: 2.5,
    ItemRarity.LEGENDARY: 4.0,
}

# === 파워 (밸런스 검증용) ===
EXPECTED_POWER: dict[ItemRarity, int] = {
    ItemRarity.COMMON: 30,
    ItemRarity.RARE: 60,
    ItemRarity.EPIC: 100,
    ItemRarity.LEGENDARY: 150,
}

RECOMMENDED_RARITY_MULTIPLIER: dict[ItemRarity, float] = {
    ItemRarity.COMMON: 0.8,
    ItemRarity.RARE: 1.2,
    ItemRarity.EPIC: 1.8,
    ItemRarity.LEGENDARY: 2.5,
}

TARGET_CATALOG_SIZE = 90


def _effect_price_value(effect: ItemEffect) -> float:
    chance = effect.chance or 1
    et = effect.effect_type

    if et in (EffectType.DAMAGE, EffectType.BLOCK):
        return effect.value * 5 * chance
    if et == EffectType.HEAL:
        return effect.value * 6
    if et == EffectType.VAMPIRE:
        return effect.value * 100
    if et in (EffectType.ATTACK_MULTIPLY, EffectType.DEFENSE_MULTIPLY):
        return effect.value * 200
    if et == EffectType.STACK:
        return effect.value * effect.stack_cap * 2
    if et == EffectType.TEMP_POWER:
        return effect.value * (effect.base_duration or 5) * 2
    if et == EffectType.PREVENT_LIFE_LOSS:
        return 500
    if et == EffectType.REDUCE_OPPONENT_ATTACK:
        return effect.value * 10
    if et == EffectType.SPEED_BOOST:
        return effect.value * 100
    if et == EffectType.MONEY_BONUS:
        # 라운드당 수입의 3배
        return effect.value * 3
    if et == EffectType.MONEY_MULTIPLIER:
        # 기본 수입 100 기준 기대 추가 수입
        return (effect.value - 1) * 100 * (effect.max_duration or 3) * 4
    if et == EffectType.MAX_HP_BONUS:
        return effect.value * 8
    return 0


def calculate_price(item: Item) -> int:
    """카탈로그 로드 시 1회 계산. 런타임에는 재계산하지 않는다."""
    value = (item.base_attack + item.base_defense) * PRICE_PER_BASE_STAT
    for effect in item.effects:
        value += _effect_price_value(effect)
    return round_half_up(value * PRICE_RARITY_MULTIPLIER[item.rarity])


def _effect_power(effect: ItemEffect) -> float:
    chance = effect.chance or 1
    et = effect.effect_type

    if et in (EffectType.DAMAGE, EffectType.BLOCK):
        return effect.value * 3 * chance
    if et == EffectType.HEAL:
        return effect.value * 4
    if et == EffectType.VAMPIRE:
        return effect.value * 80
    if et in (EffectType.ATTACK_MULTIPLY, EffectType.DEFENSE_MULTIPLY):
        return effect.value * 150
    if et == EffectType.STACK:
        return effect.value * effect.stack_cap * 2
    if et == EffectType.TEMP_POWER:
        return effect.value * (effect.base_duration or 5) * 1.5
    if et == EffectType.PREVENT_LIFE_LOSS:
        return 300
    if et == EffectType.REDUCE_OPPONENT_ATTACK:
        return effect.value * 8
    if et == EffectType.SPEED_BOOST:
        return effect.value * 80
    return 0


def calculate_item_power(item: Item) -> float:
    power = item.base_attack * 1.5 + item.base_defense * 1.2
    for effect in item.effects:
        power += _effect_power(effect)
    return power


def get_recommended_price(item: Item) -> int:
    """파워 1당 2골드 × 희귀도 배율."""
    power = calculate_item_power(item)
    return round_half_up(power * 2 * RECOMMENDED_RARITY_MULTIPLIER[item.rarity])


@dataclass
class BalanceReport:
    is_balanced: bool
    total: int
    average_power: int
    average_price: int
    price_power_correlation: float
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


def _pearson(xs: list[float], ys: list[float]) -> float:
    n = len(xs)
    sum_x = sum(xs)
    sum_y = sum(ys)
    sum_xy = sum(x * y for x, y in zip(xs, ys))
    sum_x2 = sum(x * x for x in xs)
    sum_y2 = sum(y * y for y in ys)

    numerator = n * sum_xy - sum_x * sum_y
    denominator = math.sqrt((n * sum_x2 - sum_x**2) * (n * sum_y2 - sum_y**2))
    if denominator == 0:
        return 0.0
    return numerator / denominator


def validate_balance(items: list[Item]) -> BalanceReport:
    """카탈로그 전체 밸런스 검증.

    - 희귀도 분포 (common >= 25%, legendary <= 20%)
    - 가격/파워 비율 (0.5 ~ 3.0)
    - 희귀도 대비 과도한 파워 (기대치 × 1.5 초과)
    - 가격↔파워 상관계수 0.7 미만이면 제안
    """
    if not items:
        return BalanceReport(
            is_balanced=False,
            total=0,
            average_power=0,
            average_price=0,
            price_power_correlation=0.0,
            warnings=["Catalog is empty."],
        )

    warnings: list[str] = []
    suggestions: list[str] = []

    powers = [calculate_item_power(i) for i in items]
    prices = [float(i.price) for i in items]
    correlation = _pearson(powers, prices)
    total = len(items)

    common_ratio = sum(1 for i in items if i.rarity == ItemRarity.COMMON) / total
    legendary_ratio = sum(1 for i in items if i.rarity == ItemRarity.LEGENDARY) / total
    if common_ratio < 0.25:
        warnings.append("Too few common items. Should be at least 25% of total.")
    if legendary_ratio > 0.20:
        warnings.append("Too many legendary items. Should be less than 20% of total.")

    for item, power in zip(items, powers):
        if power > 0:
            price_per_power = item.price / power
            if price_per_power < 0.5:
                warnings.append(
                    f"{item.name} ({item.emoji}) may be underpriced for its power "
                    f"(recommended {get_recommended_price(item)})."
                )
            elif price_per_power > 3:
                warnings.append(
                    f"{item.name} ({item.emoji}) may be overpriced for its power "
                    f"(recommended {get_recommended_price(item)})."
                )

        if power > EXPECTED_POWER[item.rarity] * 1.5:
            warnings.append(
                f"{item.name} ({item.emoji}) has excessive power "
                f"({round_half_up(power)}) for {item.rarity.value} rarity."
            )

    if correlation < 0.7:
        suggestions.append(
            "Price-to-power correlation is low. "
            "Consider adjusting prices to better reflect item power."
        )
    if total < TARGET_CATALOG_SIZE:
        suggestions.append(
            f"Add {TARGET_CATALOG_SIZE - total} more items to reach the target of "
            f"{TARGET_CATALOG_SIZE}+ items."
        )

    report = BalanceReport(
        is_balanced=not warnings and correlation >= 0.7,
        total=total,
        average_power=round_half_up(sum(powers) / total),
        average_price=round_half_up(sum(prices) / total),
        price_power_correlation=round_half_up(correlation * 100) / 100,
        warnings=warnings,
        suggestions=suggestions,
    )
    logger.debug(
        "Balance report: %d items, %d warnings, correlation=%.2f",
        total,
        len(warnings),
        report.price_power_correlation,
    )
    return report

"""상점 생성 — 라운드별 희귀도 가중치 추첨"""

from __future__ import annotations

import logging
import random
from typing import Optional

from src.core.constants import SHOP_SIZE
from src.core.item.models import Item, ItemRarity
from src.core.item.registry import ItemCatalog

logger = logging.getLogger(__name__)

MIN_RARITY_WEIGHT = 0.01

# (최대 라운드, 가중치). 마지막 항목은 그 이후 전부.
RARITY_WEIGHTS: list[tuple[Optional[int], dict[ItemRarity, float]]] = [
    (5, {ItemRarity.COMMON: 0.70, ItemRarity.RARE: 0.25, ItemRarity.EPIC: 0.05, ItemRarity.LEGENDARY: 0.00}),
    (10, {ItemRarity.COMMON: 0.40, ItemRarity.RARE: 0.40, ItemRarity.EPIC: 0.15, ItemRarity.LEGENDARY: 0.05}),
    (None, {ItemRarity.COMMON: 0.20, ItemRarity.RARE: 0.30, ItemRarity.EPIC: 0.30, ItemRarity.LEGENDARY: 0.20}),
]


def get_rarity_weights(round: int) -> dict[ItemRarity, float]:
    """초반 common 위주 → 후반 epic/legendary 비중 증가."""
    for max_round, weights in RARITY_WEIGHTS:
        if max_round is None or round <= max_round:
            return weights
    return RARITY_WEIGHTS[-1][1]


def _select_weighted(
    pool: list[Item], weights: dict[ItemRarity, float], rng
) -> Item:
    weighted = [(item, weights.get(item.rarity) or MIN_RARITY_WEIGHT) for item in pool]
    roll = rng.random() * sum(w for _, w in weighted)
    for item, weight in weighted:
        roll -= weight
        if roll <= 0:
            return item
    return weighted[-1][0]


def generate_shop(
    owned_items: list[Item],
    round: int,
    catalog: ItemCatalog,
    rng: Optional[random.Random] = None,
    size: int = SHOP_SIZE,
) -> list[Item]:
    """보유하지 않은 아이템 중 최대 size 개. 같은 상점 내 중복 없음."""
    rng = rng or random
    owned_ids = {item.id for item in owned_items}
    pool = [item for item in catalog.get_all() if item.id not in owned_ids]
    weights = get_rarity_weights(round)

    shop: list[Item] = []
    while pool and len(shop) < size:
        picked = _select_weighted(pool, weights, rng)
        shop.append(picked)
        pool.remove(picked)

    logger.debug("Shop generated for round %d: %d items", round, len(shop))
    return shop


def refresh_shop(
    current_shop: list[Item],
    sold_items: list[Item],
    catalog: ItemCatalog,
    rng: Optional[random.Random] = None,
) -> list[Item]:
    """팔린 아이템 자리를 새 아이템으로 채운다. 남은 아이템은 유지."""
    sold_ids = {item.id for item in sold_items}
    kept = [item for item in current_shop if item.id not in sold_ids]
    needed = SHOP_SIZE - len(kept)
    if needed <= 0:
        return kept
    exclude = [item.id for item in kept] + list(sold_ids)
    return kept + catalog.random_items(needed, exclude_ids=exclude, rng=rng)

"""AI 상점 전략 — 인터페이스 + 기본 구현

GreedyShopStrategy: 점수화 후 탐욕 선택 (난이도별로 가끔 좋은 아이템을 건너뜀)
IdleShopStrategy:   아무것도 사지 않음 (테스트 / 폴백)
"""

from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod
from typing import Optional

from src.core.constants import MAX_ITEMS
from src.core.difficulty import Difficulty
from src.core.item.models import EffectType, Item, ItemRarity, ItemType
from src.core.player.models import Player


class ShopStrategy(ABC):
    """AI 구매/판매 결정 인터페이스."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def select_purchases(
        self,
        shop: list[Item],
        ai_player: Player,
        difficulty: Difficulty,
        round: int,
        rng: Optional[random.Random] = None,
    ) -> list[Item]:
        """구매 희망 목록 (우선순위 순)."""
        ...

    @abstractmethod
    def should_sell_item(
        self,
        item_to_sell: Item,
        item_to_buy: Item,
        ai_player: Player,
        difficulty: Difficulty,
        round: int,
    ) -> bool:
        ...

    def score_item(self, item: Item, ai_player: Player, difficulty: Difficulty, round: int) -> float:
        return 0.0


class IdleShopStrategy(ShopStrategy):
    @property
    def name(self) -> str:
        return "idle"

    def select_purchases(self, shop, ai_player, difficulty, round, rng=None) -> list[Item]:
        return []

    def should_sell_item(self, item_to_sell, item_to_buy, ai_player, difficulty, round) -> bool:
        return False


# === Greedy 점수 가중치 ===
EFFECT_SCORE: dict[EffectType, float] = {
    EffectType.DAMAGE: 4,
    EffectType.BLOCK: 3.5,
    EffectType.HEAL: 5,
    EffectType.VAMPIRE: 100,
    EffectType.ATTACK_MULTIPLY: 150,
    EffectType.DEFENSE_MULTIPLY: 150,
    EffectType.REDUCE_OPPONENT_ATTACK: 10,
}
PREVENT_LIFE_LOSS_SCORE = 400
RARITY_SCORE_BONUS: dict[ItemRarity, float] = {
    ItemRarity.COMMON: 1.0,
    ItemRarity.RARE: 1.1,
    ItemRarity.EPIC: 1.2,
    ItemRarity.LEGENDARY: 1.3,
}


def _has_effect(item: Item, *types: EffectType) -> bool:
    return any(e.effect_type in types for e in item.effects)


class GreedyShopStrategy(ShopStrategy):
    """점수 = (스탯 + 효과 + 시너지) × 라운드 보정 × 희귀도 × sqrt(점수/가격)"""

    @property
    def name(self) -> str:
        return "greedy"

    def score_item(self, item: Item, ai_player: Player, difficulty: Difficulty, round: int) -> float:
        score = item.base_attack * 3 + item.base_defense * 2.5

        for effect in item.effects:
            et = effect.effect_type
            if et in (EffectType.DAMAGE, EffectType.BLOCK):
                score += effect.value * EFFECT_SCORE[et] * (effect.chance or 1)
            elif et in EFFECT_SCORE:
                score += effect.value * EFFECT_SCORE[et]
            elif et == EffectType.STACK:
                score += effect.value * effect.stack_cap * 2.5
            elif et == EffectType.PREVENT_LIFE_LOSS:
                score += PREVENT_LIFE_LOSS_SCORE

        score += self._synergy(item, ai_player.items)
        score = self._round_adjust(score, item, round)
        score *= RARITY_SCORE_BONUS[item.rarity]

        efficiency = score / max(item.price, 1)
        return score * math.sqrt(max(efficiency, 0))

    def _synergy(self, item: Item, owned: list[Item]) -> float:
        synergy = 0.0

        if _has_effect(item, EffectType.VAMPIRE):
            synergy += sum(1 for i in owned if _has_effect(i, EffectType.VAMPIRE)) * 20
        if _has_effect(item, EffectType.STACK):
            synergy += sum(1 for i in owned if _has_effect(i, EffectType.STACK)) * 15
        if _has_effect(item, EffectType.ATTACK_MULTIPLY, EffectType.DEFENSE_MULTIPLY):
            total_stats = sum(i.base_attack + i.base_defense for i in owned)
            synergy += math.sqrt(total_stats) * 5
        if _has_effect(item, EffectType.HEAL):
            synergy += sum(1 for i in owned if i.base_defense > 10) * 10

        return synergy

    def _round_adjust(self, score: float, item: Item, round: int) -> float:
        """초반 방어 선호, 후반 공격 선호."""
        if round <= 5:
            if item.item_type == ItemType.DEFENSE:
                return score * 1.3
            if item.item_type == ItemType.ATTACK:
                return score * 0.9
        elif round >= 11:
            if item.item_type == ItemType.ATTACK:
                return score * 1.3
            if item.item_type == ItemType.DEFENSE:
                return score * 0.9
        return score

    def select_purchases(
        self,
        shop: list[Item],
        ai_player: Player,
        difficulty: Difficulty,
        round: int,
        rng: Optional[random.Random] = None,
    ) -> list[Item]:
        rng = rng or random
        budget = ai_player.stats.money
        # 슬롯이 가득 차도 1개는 고른다 (교체 여부는 should_sell_item 이 판단)
        slots = max(MAX_ITEMS - len(ai_player.items), 1)

        affordable = [i for i in shop if i.price <= budget]
        ranked = sorted(
            affordable,
            key=lambda i: self.score_item(i, ai_player, difficulty, round),
            reverse=True,
        )

        selected: list[Item] = []
        spent = 0
        for item in ranked:
            if spent + item.price > budget or len(selected) >= slots:
                break
            # 최적 플레이 확률에 못 미치면 건너뜀 (첫 구매는 항상)
            if not selected or rng.random() < difficulty.ai_optimal_play_percent:
                selected.append(item)
                spent += item.price

        return self._balance(selected, ai_player)

    def _balance(self, picked: list[Item], ai_player: Player) -> list[Item]:
        """공격 35% / 방어 25% 미만 또는 패시브 25% 초과면 우선순위 재배치."""
        if not picked:
            return picked

        everything = ai_player.items + picked
        total = len(everything)

        def ratio(t: ItemType) -> float:
            return sum(1 for i in everything if i.item_type == t) / total

        needs_attack = ratio(ItemType.ATTACK) < 0.35
        needs_defense = ratio(ItemType.DEFENSE) < 0.25
        too_many_passive = ratio(ItemType.PASSIVE) > 0.25
        if not (needs_attack or needs_defense or too_many_passive):
            return picked

        ordered: list[Item] = []
        if needs_attack:
            ordered += [i for i in picked if i.item_type == ItemType.ATTACK]
        if needs_defense:
            ordered += [i for i in picked if i.item_type == ItemType.DEFENSE]
        if not too_many_passive:
            ordered += [i for i in picked if i.item_type == ItemType.PASSIVE]
        ordered += [i for i in picked if not any(i is o for o in ordered)]
        return ordered

    def should_sell_item(
        self,
        item_to_sell: Item,
        item_to_buy: Item,
        ai_player: Player,
        difficulty: Difficulty,
        round: int,
    ) -> bool:
        """새 아이템이 난이도별 임계치만큼 더 좋으면 교체."""
        if not item_to_sell.can_sell:
            return False
        if ai_player.stats.money + item_to_sell.price < item_to_buy.price:
            return False

        sell_score = self.score_item(item_to_sell, ai_player, difficulty, round)
        buy_score = self.score_item(item_to_buy, ai_player, difficulty, round)
        threshold = 1.5 - difficulty.ai_optimal_play_percent * 0.4
        return buy_score > sell_score * threshold

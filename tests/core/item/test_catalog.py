"""아이템 카탈로그 / 가격 / 모델 테스트"""

from __future__ import annotations

import json
import random
from pathlib import Path

import pytest

from src.core.item.models import (
    EffectTrigger,
    EffectType,
    Item,
    ItemEffect,
    ItemRarity,
    ItemType,
)
from src.core.item.pricing import calculate_price, get_recommended_price, validate_balance
from src.core.item.registry import ItemCatalog

ITEMS_PATH = Path("src/data/items.json")


def _make_item(item_id: str = "stick", attack: int = 2, rarity: ItemRarity = ItemRarity.COMMON) -> Item:
    return Item(
        id=item_id,
        name=item_id.title(),
        emoji="🪵",
        rarity=rarity,
        item_type=ItemType.ATTACK,
        base_attack=attack,
    )


# ── Item / ItemEffect ─────────────────────────────────────────


class TestItemModel:
    def test_duration_remembered_as_base(self) -> None:
        effect = ItemEffect(EffectTrigger.ON_TURN_START, EffectType.TEMP_POWER, 5, duration=4)
        assert effect.base_duration == 4

    def test_default_stack_cap(self) -> None:
        effect = ItemEffect(EffectTrigger.ON_HIT, EffectType.STACK, 1)
        assert effect.stack_cap == 10

    def test_mark_broken_is_permanent(self) -> None:
        effect = ItemEffect(EffectTrigger.PASSIVE, EffectType.MAX_HP_BONUS, 10, breakable=True)
        item = _make_item()
        item.effects.append(effect)

        item.mark_broken(effect)

        assert item.is_broken
        assert not item.can_sell
        assert item.active_effects() == []

    def test_active_effects_by_trigger(self) -> None:
        item = _make_item()
        item.effects = [
            ItemEffect(EffectTrigger.ON_HIT, EffectType.STACK, 1),
            ItemEffect(EffectTrigger.PASSIVE, EffectType.MAX_HP_BONUS, 10),
        ]
        assert [e.effect_type for e in item.active_effects(EffectTrigger.PASSIVE)] == [
            EffectType.MAX_HP_BONUS
        ]

    def test_clone_is_independent(self) -> None:
        item = _make_item()
        item.effects.append(ItemEffect(EffectTrigger.ON_HIT, EffectType.STACK, 1))
        copy = item.clone()
        copy.effects[0].current_stacks = 5
        assert item.effects[0].current_stacks == 0


# ── 가격 ──────────────────────────────────────────────────────


class TestPricing:
    def test_stat_price(self) -> None:
        assert calculate_price(_make_item(attack=4)) == 12

    def test_rarity_multiplier(self) -> None:
        assert calculate_price(_make_item(attack=4, rarity=ItemRarity.LEGENDARY)) == 48

    def test_effect_adds_value(self) -> None:
        item = _make_item(attack=0)
        item.effects.append(ItemEffect(EffectTrigger.ON_TURN_END, EffectType.HEAL, 5))
        assert calculate_price(item) == 30

    def test_balance_report_on_empty(self) -> None:
        report = validate_balance([])
        assert not report.is_balanced
        assert report.total == 0

    def test_recommended_price(self) -> None:
        # 파워 2 × 1.5 = 3
        assert get_recommended_price(_make_item(attack=2)) == 5
        assert get_recommended_price(_make_item(attack=2, rarity=ItemRarity.LEGENDARY)) == 15

    def test_overpriced_warning_names_recommended_price(self) -> None:
        item = _make_item(attack=2)
        item.price = 100

        report = validate_balance([item])

        assert "Stick (🪵) may be overpriced for its power (recommended 5)." in report.warnings


# ── 카탈로그 ─────────────────────────────────────────────────


class TestItemCatalog:
    def test_load_real_data(self, catalog: ItemCatalog) -> None:
        assert catalog.count() == 117
        stats = catalog.stats()
        assert sum(stats["by_rarity"].values()) == 117
        assert sum(stats["by_type"].values()) == 117

    def test_prices_computed_on_load(self, catalog: ItemCatalog) -> None:
        assert catalog.get("sword").price == 12
        assert catalog.get("shield").price == 33
        assert all(item.price > 0 for item in catalog.get_all())

    def test_enums_parsed(self, catalog: ItemCatalog) -> None:
        charm = catalog.get("luckycharm")
        assert charm.rarity == ItemRarity.EPIC
        assert charm.item_type == ItemType.PASSIVE
        assert charm.effects[0].effect_type == EffectType.MONEY_MULTIPLIER
        assert charm.effects[0].breakable
        assert charm.effects[0].max_duration == 3

    def test_instantiate_returns_fresh_copy(self, catalog: ItemCatalog) -> None:
        first = catalog.instantiate("guardian_angel")
        first.mark_broken(first.effects[0])
        second = catalog.instantiate("guardian_angel")
        assert not second.is_broken
        assert second.can_sell

    def test_unknown_item(self, catalog: ItemCatalog) -> None:
        assert catalog.get("nope") is None
        with pytest.raises(ValueError):
            catalog.instantiate("nope")

    def test_by_rarity(self, catalog: ItemCatalog) -> None:
        legendary = catalog.by_rarity(ItemRarity.LEGENDARY)
        assert legendary
        assert all(i.rarity == ItemRarity.LEGENDARY for i in legendary)

    def test_random_items_excludes(self, catalog: ItemCatalog) -> None:
        picked = catalog.random_items(5, exclude_ids=["sword"], rng=random.Random(3))
        assert len(picked) == 5
        assert "sword" not in {i.id for i in picked}
        assert len({i.id for i in picked}) == 5

    def test_register_overwrites(self) -> None:
        registry = ItemCatalog()
        registry.register(_make_item(attack=2))
        registry.register(_make_item(attack=5))
        assert registry.count() == 1
        assert registry.get("stick").base_attack == 5

    def test_malformed_entries_skipped(self, tmp_path: Path) -> None:
        path = tmp_path / "items.json"
        path.write_text(
            json.dumps(
                [
                    {"id": "ok", "name": "Ok", "rarity": "common", "type": "attack", "base_attack": 1},
                    {"id": "bad_rarity", "name": "Bad", "rarity": "mythic", "type": "attack"},
                    {"name": "No Id", "rarity": "common", "type": "attack"},
                ]
            ),
            encoding="utf-8",
        )
        registry = ItemCatalog()
        assert registry.load_from_json(path) == 1
        assert registry.get("ok") is not None

"""자금 / 라운드 수입 테스트"""

from __future__ import annotations

from src.core.constants import MAX_ITEMS, MONEY_PER_ROUND
from src.core.economy.money import (
    award_round_money,
    calculate_round_income,
    get_money_multiplier_from_items,
    purchase_item,
    sell_item,
    update_money_item_durations,
)
from src.core.item.models import (
    EffectTrigger,
    EffectType,
    Item,
    ItemEffect,
    ItemRarity,
    ItemType,
)
from src.core.player.factory import create_player, update_player_max_hp
from src.core.skills.models import AppliedSkill


def _make_item(item_id: str = "sword", price: int = 50, *effects: ItemEffect) -> Item:
    return Item(
        id=item_id,
        name=item_id.title(),
        emoji="💰",
        rarity=ItemRarity.COMMON,
        item_type=ItemType.PASSIVE,
        price=price,
        effects=list(effects),
    )


def _passive(effect_type: EffectType, value: float, **kwargs) -> ItemEffect:
    return ItemEffect(EffectTrigger.PASSIVE, effect_type, value, **kwargs)


class TestPurchase:
    def test_purchase_deducts_and_tracks(self):
        player = create_player()
        item = _make_item(price=50)

        assert purchase_item(player, item)
        assert player.stats.money == 150
        assert player.items == [item]
        assert player.stats.total_money_spent == 50
        assert player.stats.total_items_bought == 1

    def test_insufficient_money(self):
        player = create_player()
        assert not purchase_item(player, _make_item(price=500))
        assert player.stats.money == 200
        assert player.items == []

    def test_inventory_full(self):
        player = create_player()
        player.items = [_make_item(f"i{n}", 1) for n in range(MAX_ITEMS)]
        assert not purchase_item(player, _make_item("extra", 1))
        assert len(player.items) == MAX_ITEMS


class TestSell:
    def test_sell_refunds_full_price(self):
        player = create_player()
        item = _make_item(price=80)
        purchase_item(player, item)

        assert sell_item(player, item)
        assert player.stats.money == 200
        assert player.items == []

    def test_sell_by_id_match(self):
        player = create_player()
        purchase_item(player, _make_item("dagger", 30))
        assert sell_item(player, _make_item("dagger", 30))
        assert player.items == []

    def test_cannot_sell_broken(self):
        effect = _passive(EffectType.MAX_HP_BONUS, 10, breakable=True)
        item = _make_item("charm", 40, effect)
        player = create_player()
        purchase_item(player, item)
        item.mark_broken(effect)

        assert not sell_item(player, item)
        assert item in player.items

    def test_not_owned(self):
        assert not sell_item(create_player(), _make_item())


class TestRoundIncome:
    def test_base_income(self):
        assert calculate_round_income(create_player()) == MONEY_PER_ROUND

    def test_skill_and_item_bonus(self):
        player = create_player([AppliedSkill("money_per_round", 1)])
        player.items.append(_make_item("purse", 10, _passive(EffectType.MONEY_BONUS, 15)))
        assert calculate_round_income(player) == 135

    def test_multiplier_applies_to_total(self):
        player = create_player()
        player.items = [
            _make_item("purse", 10, _passive(EffectType.MONEY_BONUS, 20)),
            _make_item("luckycharm", 10, _passive(EffectType.MONEY_MULTIPLIER, 2)),
        ]
        assert calculate_round_income(player) == 240

    def test_broken_multiplier_ignored(self):
        effect = _passive(EffectType.MONEY_MULTIPLIER, 2, breakable=True, is_broken=True)
        player = create_player()
        player.items = [_make_item("luckycharm", 10, effect)]
        assert get_money_multiplier_from_items(player) == 1.0

    def test_award(self):
        player = create_player()
        assert award_round_money(player, 2) == 100
        assert player.stats.money == 300


class TestMoneyItemDurations:
    def test_multiplier_breaks_after_rounds(self):
        effect = _passive(EffectType.MONEY_MULTIPLIER, 2, breakable=True, max_duration=3)
        item = _make_item("luckycharm", 10, effect)
        player = create_player()
        player.items = [item]

        assert update_money_item_durations(player) == []
        assert update_money_item_durations(player) == []
        assert update_money_item_durations(player) == [item]
        assert item.is_broken
        assert calculate_round_income(player) == MONEY_PER_ROUND


class TestMaxHp:
    def test_item_bonus_and_clamp(self):
        player = create_player()
        charm = _make_item("heart", 10, _passive(EffectType.MAX_HP_BONUS, 25))
        player.items.append(charm)
        update_player_max_hp(player)
        assert player.stats.max_hp == 125

        player.stats.current_hp = 125
        player.items.remove(charm)
        update_player_max_hp(player)
        assert player.stats.max_hp == 100
        assert player.stats.current_hp == 100

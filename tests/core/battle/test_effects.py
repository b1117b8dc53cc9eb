"""아이템 효과 엔진 테스트"""

from __future__ import annotations

import random

from src.core.battle.effects import (
    apply_effects,
    consume_life_prevention,
    has_life_prevention_item,
    reset_battle_effects,
    update_breakable_items,
)
from src.core.battle.models import BattleEventType, Side
from src.core.item.models import (
    EffectTrigger,
    EffectType,
    Item,
    ItemEffect,
    ItemRarity,
    ItemType,
)
from src.core.player.models import Player, PlayerStats


class _FixedRng(random.Random):
    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def _make_item(item_id: str, *effects: ItemEffect, item_type: ItemType = ItemType.PASSIVE) -> Item:
    return Item(
        id=item_id,
        name=item_id.title(),
        emoji="✨",
        rarity=ItemRarity.RARE,
        item_type=item_type,
        price=20,
        effects=list(effects),
    )


def _make_player(*items: Item, hp: int = 100, is_ai: bool = False) -> Player:
    return Player(
        stats=PlayerStats(base_attack=10, base_defense=0, current_hp=hp, max_hp=hp),
        items=list(items),
        is_ai=is_ai,
    )


def _opponent() -> Player:
    return _make_player(is_ai=True)


# ── heal ──────────────────────────────────────────────────────


class TestHeal:
    def test_heal_restores_hp(self) -> None:
        player = _make_player(
            _make_item("herb", ItemEffect(EffectTrigger.ON_TURN_END, EffectType.HEAL, 5))
        )
        player.stats.current_hp = 80

        result = apply_effects(EffectTrigger.ON_TURN_END, player, _opponent(), turn=3)

        assert player.stats.current_hp == 85
        assert len(result.events) == 1
        event = result.events[0]
        assert event.event_type == BattleEventType.HEAL
        assert event.details[0].heal_amount == 5
        assert event.current_player_hp == 85
        assert event.current_opponent_hp is None

    def test_heal_at_max_hp_logs_zero(self) -> None:
        player = _make_player(
            _make_item("herb", ItemEffect(EffectTrigger.ON_TURN_END, EffectType.HEAL, 5))
        )
        result = apply_effects(EffectTrigger.ON_TURN_END, player, _opponent(), turn=0)

        detail = result.events[0].details[0]
        assert detail.heal_amount == 0
        assert detail.effect_description == "(at max HP)"
        assert player.stats.current_hp == 100

    def test_heal_chance_miss(self) -> None:
        player = _make_player(
            _make_item(
                "charm", ItemEffect(EffectTrigger.ON_TURN_END, EffectType.HEAL, 5, chance=0.3)
            )
        )
        player.stats.current_hp = 50

        result = apply_effects(
            EffectTrigger.ON_TURN_END, player, _opponent(), turn=0, rng=_FixedRng(0.99)
        )

        assert player.stats.current_hp == 50
        assert result.events[0].details[0].effect_description == "(no proc)"

    def test_other_trigger_ignored(self) -> None:
        player = _make_player(
            _make_item("herb", ItemEffect(EffectTrigger.ON_TURN_END, EffectType.HEAL, 5))
        )
        result = apply_effects(EffectTrigger.ON_TURN_START, player, _opponent(), turn=0)
        assert result.events == []

    def test_ai_heal_snapshot_on_opponent_side(self) -> None:
        ai = _make_player(
            _make_item("herb", ItemEffect(EffectTrigger.ON_TURN_END, EffectType.HEAL, 5)),
            is_ai=True,
        )
        ai.stats.current_hp = 60
        result = apply_effects(EffectTrigger.ON_TURN_END, ai, _make_player(), turn=1)
        event = result.events[0]
        assert event.attacker == Side.OPPONENT
        assert event.current_opponent_hp == 65
        assert event.current_player_hp is None


# ── vampire ───────────────────────────────────────────────────


class TestVampire:
    def test_drain_by_damage_dealt(self) -> None:
        player = _make_player(
            _make_item("fang", ItemEffect(EffectTrigger.ON_HIT, EffectType.VAMPIRE, 0.25))
        )
        player.stats.current_hp = 50

        result = apply_effects(EffectTrigger.ON_HIT, player, _opponent(), turn=0, damage_dealt=10)

        assert player.stats.current_hp == 53
        assert result.events[0].details[0].effect_description == "Vampire (25%)"

    def test_no_damage_no_event(self) -> None:
        player = _make_player(
            _make_item("fang", ItemEffect(EffectTrigger.ON_HIT, EffectType.VAMPIRE, 0.25))
        )
        result = apply_effects(EffectTrigger.ON_HIT, player, _opponent(), turn=0, damage_dealt=0)
        assert result.events == []


# ── stack ─────────────────────────────────────────────────────


class TestStack:
    def test_stack_increments(self) -> None:
        effect = ItemEffect(EffectTrigger.ON_HIT, EffectType.STACK, 2, stackable=True)
        player = _make_player(_make_item("rage", effect, item_type=ItemType.ATTACK))

        result = apply_effects(EffectTrigger.ON_HIT, player, _opponent(), turn=0)

        assert effect.current_stacks == 1
        assert result.events[0].event_type == BattleEventType.EFFECT
        assert "(1/10)" in result.events[0].message

    def test_stack_capped_at_ten(self) -> None:
        effect = ItemEffect(EffectTrigger.ON_HIT, EffectType.STACK, 2, stackable=True)
        player = _make_player(_make_item("rage", effect, item_type=ItemType.ATTACK))

        for turn in range(15):
            apply_effects(EffectTrigger.ON_HIT, player, _opponent(), turn=turn)

        assert effect.current_stacks == 10

    def test_custom_cap(self) -> None:
        effect = ItemEffect(EffectTrigger.ON_HIT, EffectType.STACK, 1, stackable=True, max_stacks=3)
        player = _make_player(_make_item("focus", effect))

        for turn in range(5):
            apply_effects(EffectTrigger.ON_HIT, player, _opponent(), turn=turn)

        assert effect.current_stacks == 3

    def test_full_stack_emits_nothing(self) -> None:
        effect = ItemEffect(
            EffectTrigger.ON_HIT, EffectType.STACK, 2, stackable=True, current_stacks=10
        )
        player = _make_player(_make_item("rage", effect))
        result = apply_effects(EffectTrigger.ON_HIT, player, _opponent(), turn=0)
        assert result.events == []


# ── tempPower ─────────────────────────────────────────────────


class TestTempPower:
    def test_breaks_after_duration(self) -> None:
        effect = ItemEffect(
            EffectTrigger.ON_TURN_START, EffectType.TEMP_POWER, 5, duration=5, breakable=True
        )
        item = _make_item("elixir", effect, item_type=ItemType.ATTACK)
        player = _make_player(item)

        events = []
        for turn in range(5):
            events += apply_effects(EffectTrigger.ON_TURN_START, player, _opponent(), turn).events

        assert effect.duration == 0
        assert item.is_broken
        assert not item.can_sell
        assert [e.details[0].effect_description for e in events] == ["Temporary power expired"]

        # 6번째 발동: 아무 변화 없음
        sixth = apply_effects(EffectTrigger.ON_TURN_START, player, _opponent(), 5)
        assert sixth.events == []
        assert effect.duration == 0

    def test_not_breakable_just_expires(self) -> None:
        effect = ItemEffect(EffectTrigger.ON_TURN_START, EffectType.TEMP_POWER, 5, duration=1)
        item = _make_item("tonic", effect)
        player = _make_player(item)

        result = apply_effects(EffectTrigger.ON_TURN_START, player, _opponent(), 0)

        assert effect.duration == 0
        assert not item.is_broken
        assert result.events == []


# ── 파괴된 아이템 ─────────────────────────────────────────────


class TestBrokenItems:
    def test_broken_item_has_no_effects(self) -> None:
        herb = _make_item(
            "herb",
            ItemEffect(EffectTrigger.ON_TURN_END, EffectType.HEAL, 5),
            ItemEffect(EffectTrigger.PASSIVE, EffectType.MAX_HP_BONUS, 10, breakable=True, is_broken=True),
        )
        player = _make_player(herb)
        player.stats.current_hp = 50

        result = apply_effects(EffectTrigger.ON_TURN_END, player, _opponent(), 0)

        assert result.events == []
        assert player.stats.current_hp == 50

    def test_inert_effects_do_nothing(self) -> None:
        player = _make_player(
            _make_item("clover", ItemEffect(EffectTrigger.ON_ATTACK, EffectType.LUCK, 0.2)),
            _make_item(
                "hex", ItemEffect(EffectTrigger.ON_ATTACK, EffectType.REDUCE_OPPONENT_ATTACK, 3)
            ),
        )
        result = apply_effects(EffectTrigger.ON_ATTACK, player, _opponent(), 0, damage_dealt=5)
        assert result.events == []


# ── 배틀 시작 / 종료 ──────────────────────────────────────────


class TestBattleLifecycle:
    def test_reset_clears_stacks_and_restores_duration(self) -> None:
        stack = ItemEffect(EffectTrigger.ON_HIT, EffectType.STACK, 2, stackable=True, current_stacks=7)
        temp = ItemEffect(EffectTrigger.ON_TURN_START, EffectType.TEMP_POWER, 3, duration=4)
        temp.duration = 1
        player = _make_player(_make_item("rage", stack), _make_item("tonic", temp))

        reset_battle_effects(player)

        assert stack.current_stacks == 0
        assert temp.duration == 4

    def test_reset_keeps_broken_state(self) -> None:
        effect = ItemEffect(
            EffectTrigger.ON_TURN_START, EffectType.TEMP_POWER, 5, duration=5, breakable=True
        )
        item = _make_item("elixir", effect)
        item.mark_broken(effect)
        effect.duration = 0

        reset_battle_effects(_make_player(item))

        assert item.is_broken
        assert effect.duration == 0

    def test_breakable_wears_out(self) -> None:
        effect = ItemEffect(
            EffectTrigger.PASSIVE, EffectType.MAX_HP_BONUS, 20, breakable=True, max_duration=3
        )
        item = _make_item("glass_heart", effect)
        player = _make_player(item)

        assert update_breakable_items(player) == []
        assert update_breakable_items(player) == []
        assert update_breakable_items(player) == [item]
        assert item.is_broken
        assert not item.can_sell

        # 파괴 후에는 더 세지 않는다
        update_breakable_items(player)
        assert effect.current_duration == 3

    def test_money_multiplier_not_counted_per_battle(self) -> None:
        effect = ItemEffect(
            EffectTrigger.PASSIVE, EffectType.MONEY_MULTIPLIER, 1.5, breakable=True, max_duration=1
        )
        item = _make_item("ledger", effect)
        assert update_breakable_items(_make_player(item)) == []
        assert effect.current_duration == 0


# ── 생명 보호 ─────────────────────────────────────────────────


class TestLifePrevention:
    def _guardian(self) -> Item:
        return _make_item(
            "guardian", ItemEffect(EffectTrigger.ON_BATTLE_END, EffectType.PREVENT_LIFE_LOSS, 1)
        )

    def test_consume_breaks_item(self) -> None:
        item = self._guardian()
        player = _make_player(item)
        assert has_life_prevention_item(player)

        event = consume_life_prevention(player, turn=12)

        assert event is not None
        assert event.details[0].effect_description == "Life saved!"
        assert item.is_broken
        assert not has_life_prevention_item(player)
        assert consume_life_prevention(player) is None

    def test_only_first_item_consumed(self) -> None:
        first, second = self._guardian(), self._guardian()
        player = _make_player(first, second)

        consume_life_prevention(player)

        assert first.is_broken
        assert not second.is_broken

    def test_trigger_reports_prevention(self) -> None:
        item = self._guardian()
        result = apply_effects(EffectTrigger.ON_BATTLE_END, _make_player(item), _opponent(), 10)
        assert result.prevent_life_loss
        assert item.is_broken

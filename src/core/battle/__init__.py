"""배틀 시스템 Core — 계산기 / 효과 엔진 / 턴 루프 / 로그"""

from .battle_log import create_attack_event, format_battle_log, format_event
from .calculator import (
    apply_damage,
    apply_heal,
    calculate_damage,
    calculate_damage_multiplier,
    calculate_heal,
    calculate_player_stats,
    calculate_speed_multiplier,
)
from .effects import (
    apply_effects,
    consume_life_prevention,
    has_life_prevention_item,
    reset_battle_effects,
    update_breakable_items,
)
from .engine import execute_attack, execute_battle
from .models import (
    BattleEvent,
    BattleEventDetail,
    BattleEventType,
    BattleState,
    BattleStatus,
    DamageResult,
    EffectApplicationResult,
    Side,
    Winner,
)
from .multipliers import MultiplierSource

__all__ = [
    "BattleEvent",
    "BattleEventDetail",
    "BattleEventType",
    "BattleState",
    "BattleStatus",
    "DamageResult",
    "EffectApplicationResult",
    "Side",
    "Winner",
    "MultiplierSource",
    "apply_damage",
    "apply_heal",
    "calculate_damage",
    "calculate_damage_multiplier",
    "calculate_heal",
    "calculate_player_stats",
    "calculate_speed_multiplier",
    "apply_effects",
    "consume_life_prevention",
    "has_life_prevention_item",
    "reset_battle_effects",
    "update_breakable_items",
    "execute_attack",
    "execute_battle",
    "create_attack_event",
    "format_battle_log",
    "format_event",
]

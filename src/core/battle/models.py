"""배틀 도메인 모델 (DB 무관)"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from src.core.player.models import Player


class Side(str, Enum):
    PLAYER = "player"
    OPPONENT = "opponent"

    @property
    def other(self) -> Side:
        return Side.OPPONENT if self == Side.PLAYER else Side.PLAYER


class Winner(str, Enum):
    PLAYER = "player"
    OPPONENT = "opponent"
    DRAW = "draw"
    UNDETERMINED = "undetermined"


class BattleStatus(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETE = "complete"


class BattleEventType(str, Enum):
    ATTACK = "attack"
    BLOCK = "block"
    EFFECT = "effect"
    HEAL = "heal"
    SPEED_INCREASE = "speedIncrease"
    DAMAGE_MULTIPLIER = "damageMultiplier"
    TURN_START = "turnStart"
    TURN_END = "turnEnd"


@dataclass(frozen=True)
class BattleEventDetail:
    """이벤트 세부 항목 — 아이템 귀속 + 수치 기여"""

    item_id: Optional[str] = None
    item_name: Optional[str] = None
    item_emoji: Optional[str] = None
    raw_damage: Optional[int] = None
    block_amount: Optional[int] = None
    block_percent: Optional[float] = None
    final_damage: Optional[int] = None
    heal_amount: Optional[int] = None
    healer: Optional[Side] = None
    effect_description: Optional[str] = None


@dataclass(frozen=True)
class BattleEvent:
    """생성 후 변경되지 않는 배틀 로그 레코드"""

    turn: int
    attacker: Side
    event_type: BattleEventType
    message: str
    details: tuple[BattleEventDetail, ...] = ()
    current_player_hp: Optional[int] = None
    current_opponent_hp: Optional[int] = None


@dataclass(frozen=True)
class ItemContribution:
    """데미지/블록 계산에 기여한 아이템 1건"""

    item_id: str
    item_name: str
    item_emoji: str
    amount: int


@dataclass
class DamageBreakdown:
    base_damage: int = 0
    item_damages: list[ItemContribution] = field(default_factory=list)
    effect_damages: list[ItemContribution] = field(default_factory=list)
    attack_multiplier: float = 1.0
    multipliers: float = 1.0  # 후반 데미지 배율


@dataclass
class BlockBreakdown:
    base_block: int = 0
    item_blocks: list[ItemContribution] = field(default_factory=list)
    multipliers: float = 1.0  # 방어 배율


@dataclass
class DamageResult:
    raw_damage: int
    block_amount: int
    block_percent: float
    blocked_damage: int
    final_damage: int
    breakdown: DamageBreakdown = field(default_factory=DamageBreakdown)
    block_breakdown: BlockBreakdown = field(default_factory=BlockBreakdown)


@dataclass
class EffectApplicationResult:
    events: list[BattleEvent] = field(default_factory=list)
    prevent_life_loss: bool = False


@dataclass
class BattleStatDeltas:
    """배틀 1회분 누적치 — 호출자가 영구 Player 통계에 합산"""

    damage_dealt: int = 0
    damage_received: int = 0
    damage_blocked: int = 0


@dataclass
class BattleState:
    """배틀 1회분 상태. 배틀 시작 시 생성, 종료 후 요약용으로만 보관."""

    round: int
    player: Player
    opponent: Player
    turn: int = 0
    status: BattleStatus = BattleStatus.NOT_STARTED
    winner: Winner = Winner.UNDETERMINED
    events: list[BattleEvent] = field(default_factory=list)
    player_hp_history: list[int] = field(default_factory=list)
    opponent_hp_history: list[int] = field(default_factory=list)
    speed_multiplier: float = 1.0
    damage_multiplier: float = 1.0
    player_deltas: BattleStatDeltas = field(default_factory=BattleStatDeltas)
    opponent_deltas: BattleStatDeltas = field(default_factory=BattleStatDeltas)

    @property
    def is_complete(self) -> bool:
        return self.status == BattleStatus.COMPLETE

    def participant(self, side: Side) -> Player:
        return self.player if side == Side.PLAYER else self.opponent

    def deltas(self, side: Side) -> BattleStatDeltas:
        return self.player_deltas if side == Side.PLAYER else self.opponent_deltas

    def record(self, *events: BattleEvent) -> None:
        """append-only 로그 추가"""
        self.events.extend(events)

    def record_hp(self) -> None:
        self.player_hp_history.append(self.player.stats.current_hp)
        self.opponent_hp_history.append(self.opponent.stats.current_hp)

"""공격/방어 배율 누산 — 스킬과 아이템을 한 번에 합산

배율은 가산 누적: 최종 배율 = 1 + Σ(스킬 기여) + Σ(아이템 기여).
곱셈 누적이 아님에 주의.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.item.models import EffectTrigger, EffectType
from src.core.player.models import Player
from src.core.skills.manager import get_skill_bonus
from src.core.skills.models import SkillEffectType


@dataclass(frozen=True)
class MultiplierContribution:
    source_id: str  # 스킬 id 또는 아이템 id
    attack: float = 0.0
    defense: float = 0.0


class MultiplierSource:
    """Player 한 명의 배율 기여 목록. 계산기가 공격/방어 배율을 조회할 때 사용."""

    def __init__(self, player: Player) -> None:
        self._contributions: list[MultiplierContribution] = []
        self._collect_skills(player)
        self._collect_items(player)

    def _collect_skills(self, player: Player) -> None:
        for applied in player.skills:
            attack = get_skill_bonus([applied], SkillEffectType.ATTACK_MULTIPLIER)
            defense = get_skill_bonus([applied], SkillEffectType.DEFENSE_MULTIPLIER)
            if attack or defense:
                self._contributions.append(
                    MultiplierContribution(applied.skill_id, attack, defense)
                )

    def _collect_items(self, player: Player) -> None:
        for item in player.items:
            for effect in item.active_effects(EffectTrigger.PASSIVE):
                if effect.effect_type == EffectType.ATTACK_MULTIPLY:
                    self._contributions.append(
                        MultiplierContribution(item.id, attack=effect.value)
                    )
                elif effect.effect_type == EffectType.DEFENSE_MULTIPLY:
                    self._contributions.append(
                        MultiplierContribution(item.id, defense=effect.value)
                    )

    @property
    def attack_bonus(self) -> float:
        return sum(c.attack for c in self._contributions)

    @property
    def defense_bonus(self) -> float:
        return sum(c.defense for c in self._contributions)

    @property
    def attack_multiplier(self) -> float:
        return 1.0 + self.attack_bonus

    @property
    def defense_multiplier(self) -> float:
        return 1.0 + self.defense_bonus

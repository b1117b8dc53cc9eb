"""참가자 생성 + 최대 HP 재계산"""

import logging
from typing import Optional

from src.core.constants import (
    MAX_LIVES,
    STARTING_ATTACK,
    STARTING_DEFENSE,
    STARTING_HP,
    STARTING_MONEY,
    round_half_up,
)
from src.core.difficulty import Difficulty
from src.core.item.models import EffectTrigger, EffectType
from src.core.skills.manager import apply_skills, get_max_hp_bonus, get_starting_money_bonus
from src.core.skills.models import AppliedSkill

from .models import Player, PlayerStats

logger = logging.getLogger(__name__)


def create_player(permanent_skills: Optional[list[AppliedSkill]] = None) -> Player:
    """인간 측 참가자. 영구 스킬(고정값)과 시작 자금 보너스를 반영."""
    skills = list(permanent_skills or [])
    player = Player(
        stats=PlayerStats(
            base_attack=STARTING_ATTACK,
            base_defense=STARTING_DEFENSE,
            current_hp=STARTING_HP,
            max_hp=STARTING_HP,
            lives=MAX_LIVES,
            money=STARTING_MONEY,
        ),
        skills=skills,
        is_ai=False,
    )
    apply_skills(player, skills)
    player.stats.money += get_starting_money_bonus(skills)
    return player


def create_ai_opponent(difficulty: Difficulty) -> Player:
    """AI 측 참가자. 기본 공/방에 난이도 배율, 자금에 난이도 보너스."""
    opponent = Player(
        stats=PlayerStats(
            base_attack=round_half_up(STARTING_ATTACK * difficulty.ai_stat_multiplier),
            base_defense=round_half_up(STARTING_DEFENSE * difficulty.ai_stat_multiplier),
            current_hp=STARTING_HP,
            max_hp=STARTING_HP,
            lives=MAX_LIVES,
            money=STARTING_MONEY + difficulty.ai_money_bonus,
        ),
        is_ai=True,
        difficulty=difficulty,
    )
    logger.debug(
        "AI opponent created (%s): atk=%d def=%d money=%d",
        difficulty.level.value,
        opponent.stats.base_attack,
        opponent.stats.base_defense,
        opponent.stats.money,
    )
    return opponent


def get_max_hp_bonus_from_items(player: Player) -> int:
    """passive maxHPBonus 합계. 파괴된 아이템은 제외."""
    bonus = 0
    for item in player.items:
        for effect in item.active_effects(EffectTrigger.PASSIVE):
            if effect.effect_type == EffectType.MAX_HP_BONUS:
                bonus += int(effect.value)
    return bonus


def update_player_max_hp(player: Player) -> None:
    """최대 HP = 시작 HP + 스킬 + 아이템. 현재 HP는 새 최대치로 clamp."""
    player.stats.max_hp = (
        STARTING_HP + get_max_hp_bonus(player.skills) + get_max_hp_bonus_from_items(player)
    )
    if player.stats.current_hp > player.stats.max_hp:
        player.stats.current_hp = player.stats.max_hp

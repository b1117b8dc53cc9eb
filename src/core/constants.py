"""게임 밸런스 상수 — 순수 Python, 외부 의존 없음"""

import math

# === 게임 진행 ===
MAX_ROUNDS = 15
MAX_ITEMS = 15
MAX_LIVES = 5

# === 배틀 ===
MAX_BATTLE_TURNS = 75  # 단일 공격 기준 턴 상한
MAX_DEFENSE_PERCENT = 0.9
SPEED_INCREASE_INTERVAL = 5  # 라운드(공격 2회) 단위
SPEED_INCREASE_VALUE = 0.1
DAMAGE_MULTIPLIER_START = 20  # 라운드 단위
DAMAGE_MULTIPLIER_VALUE = 0.2

# === 시작 스탯 ===
STARTING_HP = 100
STARTING_MONEY = 200
STARTING_ATTACK = 10
STARTING_DEFENSE = 5
MONEY_PER_ROUND = 100

# === 상점 ===
SHOP_SIZE = 9  # 3x3

# === 세이브 ===
SAVE_VERSION = "1.0.0"


def round_half_up(value: float) -> int:
    """0.5는 항상 올림. 내장 round()의 은행가 반올림과 다르다."""
    return math.floor(value + 0.5)

"""Application configuration loaded from environment variables and .env file."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    Gameplay balance values live in src/core/constants.py, not here.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DATABASE_URL: str = "sqlite:///./battler.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # 아이템 카탈로그
    ITEM_DATA_PATH: str = "src/data/items.json"

    # 재현 가능한 게임용 시드 (None = 매번 다른 게임)
    RNG_SEED: Optional[int] = None

    # AI 상점 전략: "greedy" | "idle"
    AI_SHOP_STRATEGY: str = "greedy"


settings = Settings()

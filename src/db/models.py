"""SQLAlchemy declarative base for all ORM models."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import JSON


class Base(DeclarativeBase):
    """Base class for all database models."""


class ProfileModel(Base):
    """ORM model for the cross-playthrough profile (skill points + progress)."""

    __tablename__ = "profiles"

    profile_id: Mapped[str] = mapped_column(String, primary_key=True)
    total_skill_points: Mapped[int] = mapped_column(Integer, default=0)
    # [{"skill_id": str, "level": int}, ...]
    permanent_skills: Mapped[list] = mapped_column(JSON, default=list)
    # DifficultyProgress.to_dict()
    difficulty_progress: Mapped[dict] = mapped_column(JSON, default=dict)
    games_played: Mapped[int] = mapped_column(Integer, default=0)
    games_won: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)


class SaveGameModel(Base):
    """ORM model for a saved in-progress game (one row per slot)."""

    __tablename__ = "save_games"

    slot: Mapped[str] = mapped_column(String, primary_key=True)
    version: Mapped[str] = mapped_column(String, nullable=False)
    # SaveGame.model_dump(mode="json")["game_state"]
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
    saved_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

"""Shared test fixtures."""

import random
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.event_bus import EventBus
from src.core.item.registry import ItemCatalog
from src.db.models import Base

ITEMS_PATH = Path("src/data/items.json")


@pytest.fixture()
def db_session() -> Session:
    """In-memory SQLite session with all tables created."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture()
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture(scope="session")
def catalog() -> ItemCatalog:
    """실제 items.json 카탈로그 (템플릿은 get/instantiate 로만 복제되므로 공유 가능)"""
    registry = ItemCatalog()
    registry.load_from_json(ITEMS_PATH)
    return registry


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)

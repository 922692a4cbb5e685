"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from pathlib import Path
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.api.app import create_app
from src.core.config import Settings
from src.core.models import LeaderboardEntryModel
from src.db.json_repository import JSONLeaderboardRepository
from src.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

EntryFactory = Callable[..., LeaderboardEntryModel]


class InMemoryRepository:
    """Mock the LeaderboardRepository using a plain list."""

    def __init__(self) -> None:
        self.entries: list[LeaderboardEntryModel] = []

    def append(self, entry: LeaderboardEntryModel) -> LeaderboardEntryModel:
        self.entries.append(entry)
        return entry

    def list_entries(self) -> list[LeaderboardEntryModel]:
        return list(self.entries)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def memory_repository() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture
def leaderboard_file(tmp_path: Path) -> Path:
    return tmp_path / "leaderboard.json"


@pytest.fixture
def json_repository(leaderboard_file: Path) -> JSONLeaderboardRepository:
    return JSONLeaderboardRepository(leaderboard_file)


@pytest.fixture
def make_entry() -> EntryFactory:
    """Build leaderboard entries with sensible defaults and increasing ids."""
    counter = iter(range(1, 10_000))

    def _make(player_name: str = "Player", score: int = 0, **overrides) -> LeaderboardEntryModel:
        values = {
            "id": next(counter),
            "player_name": player_name,
            "score": score,
            "foods_eaten": score // 10,
            "level": 1,
            "timestamp": "10/19/2026, 10:00:00 AM",
            "duration": 30,
        }
        values.update(overrides)
        return LeaderboardEntryModel(**values)

    return _make


@pytest.fixture
def slow_settings(leaderboard_file: Path) -> Settings:
    """Settings for API tests: JSON file in a temp dir, and a tick interval far too long to ever fire during a test."""
    return Settings(leaderboard_file=leaderboard_file, base_speed_ms=60_000)


@pytest.fixture
def client(slow_settings: Settings) -> Generator[TestClient, None, None]:
    with TestClient(create_app(slow_settings)) as test_client:
        yield test_client

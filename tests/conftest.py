"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

import logging
from typing import Generator
from uuid import uuid4

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.models import GameId, GameModel
from src.core.shared_types import Mark, Status
from src.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


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
def test_logger() -> logging.Logger:
    """Handed to every component under test (pytest's caplog captures it through propagation)."""
    return logging.getLogger("tictactoe.test")


class InMemoryRepository:
    """Fake GameRepository using a dictionary of game models."""

    def __init__(self) -> None:
        self._games: dict[GameId, GameModel] = {}

    def list_games(self) -> list[GameModel]:
        return list(self._games.values())

    def get_game(self, game_id: GameId) -> GameModel | None:
        """Get game by ID, if record exists."""
        return self._games.get(game_id)

    def insert_game(self, computer_mark: Mark, board: str) -> GameId:
        game_id = str(uuid4())
        self._games[game_id] = GameModel(
            id=game_id,
            board=board,
            status=Status.RUNNING,
            computer_mark=computer_mark,
        )
        return game_id

    def update_game(self, game: GameModel) -> int:
        if game.id not in self._games:
            return 0
        self._games[game.id] = game
        return 1

    def delete_game(self, game_id: GameId) -> int:
        return 1 if self._games.pop(game_id, None) is not None else 0

    # -- test helpers --
    def put(self, game: GameModel) -> None:
        """Place a game in any state directly, bypassing the game rules."""
        self._games[game.id] = game

    def clear(self) -> None:
        """Clear the repository (useful in between tests)"""
        self._games.clear()


@pytest.fixture
def memory_repository() -> Generator[InMemoryRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = InMemoryRepository()
    try:
        yield repo
    finally:
        repo.clear()

"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from typing import Any, Callable, TypeVar
from uuid import uuid4

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import StoreError
from src.core.models import GameId, GameModel
from src.core.shared_types import Mark, Status
from src.db.schema import DBGame

T = TypeVar("T")


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session, logger: logging.Logger) -> None:
        self.db = db_session
        self.logger = logger

    def list_games(self) -> list[GameModel]:
        def _list() -> list[GameModel]:
            games_db = self.db.scalars(select(DBGame))
            return [self._to_model(game_db) for game_db in games_db]

        return self._run("list games", _list)

    def get_game(self, game_id: GameId) -> GameModel | None:
        """Get game by ID, if record exists."""

        def _get() -> GameModel | None:
            game_db = self.db.get(DBGame, game_id)
            if game_db is None:
                self.logger.info("game not found: id=%s", game_id)
                return None
            return self._to_model(game_db)

        return self._run("get game", _get, id=game_id)

    def insert_game(self, computer_mark: Mark, board: str) -> GameId:
        """Store new game and return the newly created game ID."""

        def _insert() -> GameId:
            new_id = str(uuid4())
            self.db.add(
                DBGame(
                    id=new_id,
                    board=board,
                    status=Status.RUNNING.value,
                    computer_mark=computer_mark.value,
                )
            )
            self.db.commit()
            return new_id

        return self._run(
            "create game", _insert, computer_mark=computer_mark, board=board
        )

    def update_game(self, game: GameModel) -> int:
        """Only board and status can change, the computer's mark is fixed at creation."""

        def _update() -> int:
            query = (
                update(DBGame)
                .where(DBGame.id == game.id)
                .values(board=game.board, status=game.status.value)
            )
            result = self.db.execute(query)
            self.db.commit()
            return result.rowcount

        return self._run("update game", _update, id=game.id)

    def delete_game(self, game_id: GameId) -> int:
        def _delete() -> int:
            result = self.db.execute(delete(DBGame).where(DBGame.id == game_id))
            self.db.commit()
            return result.rowcount

        return self._run("delete game", _delete, id=game_id)

    def _run(self, action: str, operation: Callable[[], T], **context: Any) -> T:
        """Execute a database operation; driver errors are rolled back, logged and re-raised as StoreError."""
        try:
            return operation()
        except SQLAlchemyError as exc:
            self.db.rollback()
            self.logger.exception("failed to %s: %s", action, context)
            raise StoreError(f"failed to {action}") from exc

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            id=game_db.id,
            board=game_db.board,
            status=Status(game_db.status),
            computer_mark=Mark(game_db.computer_mark),
        )

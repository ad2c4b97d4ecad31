"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
import random
from typing import Optional

from src.core.exceptions import (
    GameNotFoundError,
    GameOverError,
    InvalidBoardError,
    NoMoveMadeError,
    StateMismatchError,
)
from src.core.models import GameId, GameModel
from src.core.shared_types import MoveCheck, Status
from src.db.repository import GameRepository
from src.tictactoe.board import (
    complement,
    compute_status,
    diff_moves,
    pick_random_move,
    validate_board,
    validate_new_board,
)


class GameService:
    """Orchestration of layers for a game against the computer."""

    def __init__(
        self,
        repository: GameRepository,
        logger: logging.Logger,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.repo = repository
        self.logger = logger
        # None: a fresh random source for every computer move
        self.rng = rng

    # -- API routes logic ---
    def create_game(self, board: str) -> GameId:
        """The human starts a game, either on a blank board or after placing their first mark."""

        computer_mark, ok = validate_new_board(board)
        if not ok or computer_mark is None:
            self.logger.error("invalid new board: board=%r", board)
            raise InvalidBoardError(
                f"Cannot start a game from {board!r}", reason="invalid new board"
            )

        # Computer replies straight away, then the game gets stored
        after_move = pick_random_move(board, computer_mark, self.rng)
        game_id = self.repo.insert_game(computer_mark, after_move)
        self.logger.info(
            "created game: id=%s computer_mark=%s board=%s",
            game_id,
            computer_mark,
            after_move,
        )
        return game_id

    def get_game(self, game_id: GameId) -> GameModel:
        return self._fetch_game(game_id)

    def list_games(self) -> list[GameModel]:
        """Show all recorded games."""
        return self.repo.list_games()

    def apply_move(self, game_id: GameId, board: str) -> GameModel:
        """
        The human submits the board after their move. If the game is not over by then, the computer replies.

        ---
        The read-modify-write below is not protected by a transaction: two concurrent updates of the same game can race.
        """
        if not validate_board(board):
            self.logger.error("invalid board: id=%s board=%r", game_id, board)
            raise InvalidBoardError(f"Invalid board {board!r}")

        stored = self._fetch_game(game_id)
        if stored.status != Status.RUNNING:
            self.logger.error(
                "game already over: id=%s status=%s", game_id, stored.status
            )
            raise GameOverError(f"Game {game_id} already ended with {stored.status}")

        human_mark = complement(stored.computer_mark)
        move_check = diff_moves(board, stored.board, human_mark)
        if move_check == MoveCheck.NONE:
            self.logger.error("no move made by opponent: id=%s", game_id)
            raise NoMoveMadeError(f"Board of game {game_id} did not change")
        if move_check == MoveCheck.INVALID:
            self.logger.error(
                "game state mismatch: id=%s stored=%s submitted=%s",
                game_id,
                stored.board,
                board,
            )
            raise StateMismatchError(
                f"{board!r} is not one {human_mark} move away from {stored.board!r}"
            )

        # No reply from the computer once the human has won or filled the board
        status = compute_status(board)
        if status == Status.RUNNING:
            board = pick_random_move(board, stored.computer_mark, self.rng)
            status = compute_status(board)

        updated = GameModel(
            id=game_id,
            board=board,
            status=status,
            computer_mark=stored.computer_mark,
        )
        self._store_update(updated)
        return updated

    def delete_game(self, game_id: GameId) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(game_id) == 0:
            self.logger.error("game not found: id=%s", game_id)
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        self.logger.info("deleted game: id=%s", game_id)

    # -- Internal helpers --
    def _fetch_game(self, game_id: GameId) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            self.logger.error("game not found: id=%s", game_id)
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return game_model

    def _store_update(self, game: GameModel) -> None:
        """Zero rows affected: the game got deleted while this move was being computed."""
        if self.repo.update_game(game) == 0:
            self.logger.error("game vanished during update: id=%s", game.id)
            raise GameNotFoundError(f"Game with id={game.id!r} not found.")
        self.logger.info(
            "updated game: id=%s board=%s status=%s", game.id, game.board, game.status
        )

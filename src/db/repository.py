"""Protocol repository: the store contract the service layer relies on."""

from typing import Protocol

from src.core.models import GameId, GameModel
from src.core.shared_types import Mark


class GameRepository(Protocol):
    """Persistence layer orchestration. The store owns durability and id generation."""

    def list_games(self) -> list[GameModel]:
        """All recorded games (no paging)."""
        ...

    def get_game(self, game_id: GameId) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def insert_game(self, computer_mark: Mark, board: str) -> GameId:
        """Store a new RUNNING game and return the newly created game ID."""
        ...

    def update_game(self, game: GameModel) -> int:
        """Overwrite board and status of an existing record. Returns the number of rows affected."""
        ...

    def delete_game(self, game_id: GameId) -> int:
        """Remove a game's record. Returns the number of rows affected."""
        ...

"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Both the API layer (higher) and the db layer (lower) send to / receive from the Service using the model defined here,
which decouples the SQLAlchemy rows and the pydantic payloads from each other.
"""

from dataclasses import dataclass

from src.core.shared_types import Mark, Status

# Type alias to make GameModel easier to read
GameId = str


@dataclass
class GameModel:
    """Transport-safe representation of a tic-tac-toe game used between API, Service and DB layers."""

    id: GameId
    board: str
    status: Status
    computer_mark: Mark

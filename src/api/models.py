"""Requests and Response models"""

from typing import Self

from pydantic import BaseModel, Field

from src.core.models import GameModel
from src.core.shared_types import Status


# --- REQUEST MODELS ---
class BoardRequest(BaseModel):
    """
    Used both to start a game and to submit a move.

    ---
    NOTE: The board is only checked to be a string here. Game rules (length, marks, number of moves) are up to the board engine,
    so that the client gets the same reasons back whether the board is new or mid-game.
    """

    board: str = Field(..., description="9 characters, row by row: 'X', 'O' or '-'.")


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    id: str
    board: str
    status: Status

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """The computer's mark stays internal."""
        return cls(id=model.id, board=model.board, status=model.status)


class LocationResponse(BaseModel):
    location: str


class ErrorResponse(BaseModel):
    reason: str

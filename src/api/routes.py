"""REST endpoints, mounted under /api/v1"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Request, Response, status
from sqlalchemy.orm import Session

from src.api.models import BoardRequest, ErrorResponse, GameResponse, LocationResponse
from src.core.log import child_logger
from src.db.database import get_db
from src.db.repository import GameRepository
from src.db.sql_repository import SQLGameRepository
from src.services.game_service import GameService

# Only ids that look like a (version 4) UUID are routed to a game
UUID_PATTERN = (
    "[a-fA-F0-9]{8}-?[a-fA-F0-9]{4}-?4[a-fA-F0-9]{3}-?[89abAB][a-fA-F0-9]{3}"
    "-?[a-fA-F0-9]{12}"
)


def canonical_game_id(
    game_id: Annotated[str, Path(pattern=f"^{UUID_PATTERN}$")],
) -> str:
    """Upper case or hyphen-less ids name the same game: the store keys on the lower case, hyphenated form."""
    return str(UUID(game_id))


GameIdPath = Annotated[str, Depends(canonical_game_id)]

ERROR_RESPONSES = {
    code: {"model": ErrorResponse}
    for code in (
        status.HTTP_400_BAD_REQUEST,
        status.HTTP_404_NOT_FOUND,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
}

router = APIRouter(prefix="/api/v1/games", tags=["Game"], responses=ERROR_RESPONSES)


# --- Dependencies ---
def get_logger(request: Request) -> logging.Logger:
    return request.app.state.logger


def get_repository(
    db: Annotated[Session, Depends(get_db)],
    logger: Annotated[logging.Logger, Depends(get_logger)],
) -> GameRepository:
    return SQLGameRepository(db, child_logger(logger, "repository"))


def get_service(
    repository: Annotated[GameRepository, Depends(get_repository)],
    logger: Annotated[logging.Logger, Depends(get_logger)],
) -> GameService:
    return GameService(repository, child_logger(logger, "service"))


Service = Annotated[GameService, Depends(get_service)]


# --- Endpoints ---
@router.get("", response_model=list[GameResponse], summary="List all games")
def list_games(service: Service) -> list[GameResponse]:
    return [GameResponse.from_model(game) for game in service.list_games()]


@router.post(
    "",
    response_model=LocationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start a new game",
)
def create_game(
    payload: BoardRequest, request: Request, response: Response, service: Service
) -> LocationResponse:
    """The computer places its mark right away. The response points to the new game."""
    game_id = service.create_game(payload.board)
    location = f"{request.app.state.settings.host_address}{router.prefix}/{game_id}"
    response.headers["Location"] = location
    return LocationResponse(location=location)


@router.get("/{game_id}", response_model=GameResponse, summary="Get game state")
def get_game(game_id: GameIdPath, service: Service) -> GameResponse:
    return GameResponse.from_model(service.get_game(game_id))


@router.put("/{game_id}", response_model=GameResponse, summary="Make a move")
def make_move(
    game_id: GameIdPath, payload: BoardRequest, service: Service
) -> GameResponse:
    """Submit the board with exactly one new mark. Unless that move ends the game, the computer answers."""
    return GameResponse.from_model(service.apply_move(game_id, payload.board))


@router.delete("/{game_id}", summary="Delete a game")
def delete_game(game_id: GameIdPath, service: Service) -> Response:
    service.delete_game(game_id)
    return Response(status_code=status.HTTP_200_OK)

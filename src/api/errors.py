"""Translate exceptions into `{"reason": ...}` JSON responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.core.exceptions import (
    GameError,
    GameNotFoundError,
    GameOverError,
    InvalidBoardError,
    InvalidRequestError,
    NoMoveMadeError,
    StateMismatchError,
    StoreError,
)

STATUS_CODES: dict[type[GameError], int] = {
    InvalidRequestError: status.HTTP_400_BAD_REQUEST,
    InvalidBoardError: status.HTTP_400_BAD_REQUEST,
    GameOverError: status.HTTP_400_BAD_REQUEST,
    NoMoveMadeError: status.HTTP_400_BAD_REQUEST,
    StateMismatchError: status.HTTP_400_BAD_REQUEST,
    GameNotFoundError: status.HTTP_404_NOT_FOUND,
    StoreError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}
RESOURCE_NOT_FOUND = "resource not found"


def status_code_for(exc: GameError) -> int:
    """Walk up the class hierarchy, so that subclasses map like their parent. Unknown errors are server errors."""
    for cls in type(exc).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, reason: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"reason": reason})


def register_exception_handlers(app: FastAPI, logger: logging.Logger) -> None:
    async def handle_game_error(request: Request, exc: GameError) -> JSONResponse:
        status_code = status_code_for(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            # details stay in the log
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
            return error_response(status_code, StoreError.reason)
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
        return error_response(status_code, exc.reason)

    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """A path that does not match the id pattern is 'not found'; anything wrong in the body is a bad request."""
        if any(error["loc"][:1] == ("path",) for error in exc.errors()):
            logger.info("no route for %s %s", request.method, request.url.path)
            return error_response(
                status.HTTP_404_NOT_FOUND, GameNotFoundError.reason
            )
        logger.info(
            "invalid request body for %s %s: %s",
            request.method,
            request.url.path,
            exc.errors(),
        )
        return error_response(
            status.HTTP_400_BAD_REQUEST, InvalidRequestError.reason
        )

    async def handle_http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Errors raised by routing itself (unknown path, wrong method)."""
        reason = (
            RESOURCE_NOT_FOUND
            if exc.status_code == status.HTTP_404_NOT_FOUND
            else str(exc.detail).lower()
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"reason": reason},
            headers=getattr(exc, "headers", None),
        )

    async def handle_unexpected_error(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception("unexpected error on %s %s", request.method, request.url.path)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, StoreError.reason
        )

    app.add_exception_handler(GameError, handle_game_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

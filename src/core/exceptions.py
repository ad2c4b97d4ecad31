"""
Custom exceptions.

Every exception carries a `reason`: the short message that is safe to hand back to a client.
"""


class GameError(Exception):
    """Top-level exception for anything raised by this application."""

    reason = "internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.reason)


# --- Request / board validation ---
class InvalidRequestError(GameError):
    reason = "invalid request body"


class InvalidBoardError(GameError):
    reason = "invalid board"

    def __init__(self, message: str | None = None, reason: str | None = None) -> None:
        if reason is not None:
            self.reason = reason
        super().__init__(message)


# --- Game state ---
class GameNotFoundError(GameError):
    reason = "game not found"


class GameOverError(GameError):
    reason = "game already over"


class NoMoveMadeError(GameError):
    reason = "no move made"


class StateMismatchError(GameError):
    reason = "game state mismatch"


# --- Persistence / configuration ---
class StoreError(GameError):
    """Underlying persistence failure. The message is logged, never sent to the client."""

    reason = "internal server error"


class ConfigError(GameError):
    reason = "invalid configuration"

"""
Type definitions used across layers
"""

from enum import Enum, StrEnum, auto

# A blank cell on the board (not a Mark: nobody owns it)
BLANK = "-"


class Mark(StrEnum):
    X = "X"
    O = "O"  # noqa: E741


class Status(StrEnum):
    RUNNING = "RUNNING"
    X_WON = "X_WON"
    O_WON = "O_WON"
    DRAW = "DRAW"


class MoveCheck(Enum):
    """Outcome of comparing a submitted board with the stored one."""

    NONE = auto()
    ONE_VALID = auto()
    INVALID = auto()


# Winning status per mark
WIN_STATUS = {Mark.X: Status.X_WON, Mark.O: Status.O_WON}

"""
The board engine implements all rules of tic-tac-toe that only depend on the board itself.

A board is a 9 character string, read row by row:
    "XO-" + "-X-" + "--O"  ->  X | O | -
                               - | X | -
                               - | - | O
So index = row * 3 + col. Blank cells are written as "-".
"""

import random
from typing import Optional

from src.core.shared_types import BLANK, WIN_STATUS, Mark, MoveCheck, Status

BOARD_SIZE = 9
LEGAL_CELLS = frozenset({Mark.X.value, Mark.O.value, BLANK})

# Scan order matters: first line found with three identical marks decides the winner.
# Row 0, column 0, row 1, column 1, row 2, column 2, then the two diagonals.
LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2),
    (0, 3, 6),
    (3, 4, 5),
    (1, 4, 7),
    (6, 7, 8),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


def complement(mark: Mark) -> Mark:
    """The mark of the other player."""
    return Mark.O if mark == Mark.X else Mark.X


def validate_board(board: str) -> bool:
    """Length and character-set check only. Used for boards submitted during a game."""
    return len(board) == BOARD_SIZE and all(cell in LEGAL_CELLS for cell in board)


def validate_new_board(board: str) -> tuple[Optional[Mark], bool]:
    """
    A new game may start blank, or with the human's first mark already placed.

    Returns the computer's mark (the one NOT on the board, X for a blank board) and whether the board is acceptable.
    """
    if not validate_board(board):
        return None, False

    placed = [cell for cell in board if cell != BLANK]
    if len(placed) > 1:
        return None, False
    if not placed:
        return Mark.X, True
    return complement(Mark(placed[0])), True


def diff_moves(current: str, previous: str, expected_mark: Mark) -> MoveCheck:
    """
    Compare a submitted board with the previous one.

    Every changed cell must now hold `expected_mark`, and at most one cell may change.
    ---
    NOTE: Only the new content of a cell is checked. Erasing a mark is never valid, but overwriting the other player's mark
    with `expected_mark` counts as a move.
    """
    if len(current) != len(previous):
        return MoveCheck.INVALID

    changes = 0
    for new_cell, old_cell in zip(current, previous):
        if new_cell == old_cell:
            continue
        if new_cell != expected_mark or changes == 1:
            return MoveCheck.INVALID
        changes += 1

    return MoveCheck.ONE_VALID if changes == 1 else MoveCheck.NONE


def compute_status(board: str) -> Status:
    """Win on the first line with three identical marks, draw when the board is full, otherwise still running."""
    for a, b, c in LINES:
        if board[a] != BLANK and board[a] == board[b] == board[c]:
            return WIN_STATUS[Mark(board[a])]

    if not blank_positions(board):
        return Status.DRAW
    return Status.RUNNING


def blank_positions(board: str) -> list[int]:
    return [index for index, cell in enumerate(board) if cell == BLANK]


def pick_random_move(
    board: str, mark: Mark, rng: Optional[random.Random] = None
) -> str:
    """
    Place `mark` on a blank cell chosen uniformly at random. A full board is returned unchanged.

    ---
    Without an explicit `rng`, every call gets its own freshly seeded random source (no shared RNG state between requests).
    """
    candidates = blank_positions(board)
    if not candidates:
        return board

    rng = rng if rng is not None else random.Random()
    index = rng.choice(candidates)
    return place_mark(board, index, mark)


def place_mark(board: str, index: int, mark: Mark) -> str:
    return board[:index] + mark.value + board[index + 1 :]

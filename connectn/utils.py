"""
utils.py - Shared constants, enumerations and helpers for the connect-N engine

This module provides the default game settings, the outcome and direction
enumerations, column-label helpers and the exception hierarchy used
throughout the package.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional, Tuple

# Game defaults
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win

PLAYER_PIECE = "😎"
COMPUTER_PIECE = "💻"

# Columns are addressed by single letters A..Z
MAX_LABELLED_COLS = 26

# Value held by a cell with no piece in it
EMPTY = None

Coordinate = Tuple[int, int]  # (row, col)
Piece = Any


class ConnectNError(Exception):
    """Base class for engine errors."""


class OutOfBounds(ConnectNError, IndexError):
    """A coordinate lies outside the board."""


class IllegalMove(ConnectNError, ValueError):
    """A piece cannot be placed in the requested column."""


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    WIN = auto()
    TIE = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS


@dataclass(frozen=True)
class Outcome:
    """Game status after a placement; ``winner`` is only set for a win."""
    result: GameResult = GameResult.IN_PROGRESS
    winner: Optional[Piece] = None

    @classmethod
    def in_progress(cls) -> 'Outcome':
        return cls(GameResult.IN_PROGRESS)

    @classmethod
    def win(cls, piece: Piece) -> 'Outcome':
        return cls(GameResult.WIN, piece)

    @classmethod
    def tie(cls) -> 'Outcome':
        return cls(GameResult.TIE)

    def is_game_over(self) -> bool:
        return self.result.is_game_over()

    def __str__(self) -> str:
        if self.result == GameResult.WIN:
            return f"Winner({self.winner})"
        if self.result == GameResult.TIE:
            return "Tie"
        return "InProgress"


class Direction(Enum):
    """Enumeration representing directions for win checking."""
    VERTICAL = auto()
    HORIZONTAL = auto()
    DIAGONAL_UP = auto()  # Diagonal from bottom-left to top-right
    DIAGONAL_DOWN = auto()  # Diagonal from top-left to bottom-right


# Direction vectors (row, col) for each direction; the opposite walk negates them
DIRECTION_VECTORS = {
    Direction.VERTICAL: (1, 0),
    Direction.HORIZONTAL: (0, 1),
    Direction.DIAGONAL_UP: (-1, 1),
    Direction.DIAGONAL_DOWN: (1, 1),
}


def index_to_label(col: int) -> str:
    """
    Get the column letter for a column index.

    Args:
        col: Column index (0-indexed, at most 25)

    Returns:
        Uppercase letter naming the column
    """
    if not 0 <= col < MAX_LABELLED_COLS:
        raise OutOfBounds(f"Column {col} has no letter label")
    return chr(ord('A') + col)


def other_piece(pieces: Tuple[Piece, Piece], piece: Piece) -> Piece:
    """Return the member of ``pieces`` that is not ``piece``."""
    return pieces[1] if piece == pieces[0] else pieces[0]

"""
players.py - Move sources for connect-N

A user move is an already-validated column choice; a computer move picks a
playable column at random from an injected numpy Generator so games can be
replayed from a seed.
"""

from typing import Optional, Tuple

import numpy as np

from connectn.debug import debug
from connectn.game.board import Board
from connectn.game.moves import apply_move, available_columns
from connectn.utils import Coordinate, IllegalMove, Piece


def user_move(board: Board, letter: str, piece: Piece) -> Tuple[Board, Coordinate]:
    """
    Play a column chosen by the user.

    The caller is expected to have checked ``letter`` against
    ``available_columns(board)``.

    Returns:
        The new board and the (row, col) where the piece landed
    """
    debug.debug(f"User plays {piece!r} in column {letter}", "players")
    return apply_move(board, letter, piece)


def choose_column(board: Board, rng: Optional[np.random.Generator] = None,
                  legacy_range: bool = False) -> str:
    """
    Pick a random playable column.

    Args:
        board: The board to play on
        rng: Random generator; a fresh unseeded one is used when omitted
        legacy_range: Sample from all but the last available column, as
            older releases did (the only column is still chosen when just
            one remains)

    Returns:
        The chosen column letter

    Raises:
        IllegalMove: if every column is full
    """
    columns = available_columns(board)
    if not columns:
        raise IllegalMove("No columns available")

    if rng is None:
        rng = np.random.default_rng()

    if legacy_range:
        index = int(rng.random() * (len(columns) - 1))
    else:
        index = int(rng.integers(len(columns)))
    return columns[index]


def computer_move(board: Board, piece: Piece, rng: Optional[np.random.Generator] = None,
                  legacy_range: bool = False) -> Tuple[Board, Coordinate]:
    """
    Play a uniformly random playable column for the computer.

    Returns:
        The new board and the (row, col) where the piece landed
    """
    letter = choose_column(board, rng, legacy_range)
    debug.debug(f"Computer plays {piece!r} in column {letter}", "players")
    return apply_move(board, letter, piece)

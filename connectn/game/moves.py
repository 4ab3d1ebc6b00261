"""
moves.py - Column-drop placement and scripted move replay

This module provides the move engine: translating column letters, finding
where a dropped piece lands, listing playable columns, applying a move, and
replaying a whole move script ("autoplay") while reporting where it fails.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from connectn.debug import debug
from connectn.game.board import Board
from connectn.game.win import has_win
from connectn.utils import (EMPTY, MAX_LABELLED_COLS, Coordinate, IllegalMove, Piece,
                            index_to_label)

ScriptedMove = Tuple[Piece, str]  # (piece, column letter)

# Starting depth for each kind of autoplay failure, before unwinding
ILLEGAL_COLUMN_DEPTH = 1
PREMATURE_WIN_DEPTH = 2


@dataclass(frozen=True)
class AutoplayError:
    """
    Where a move script went wrong.

    Attributes:
        num: Depth counter; the failing move's base depth plus one per
            move successfully played before it
        val: The piece reported as offending
        col: The column letter of the offending move
    """
    num: int
    val: Piece
    col: str


@dataclass(frozen=True)
class AutoplayResult:
    """Final state of a replayed move script."""
    board: Optional[Board]
    pieces: Tuple[Piece, Piece]
    last_piece_moved: Piece
    winner: Optional[Piece] = None
    error: Optional[AutoplayError] = None
    last_move: Optional[Coordinate] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def column_label_to_index(letter: str, cols: int = MAX_LABELLED_COLS) -> Optional[int]:
    """
    Translate a column letter to a column number.

    Args:
        letter: A single uppercase letter
        cols: Board width; letters past it are rejected

    Returns:
        The column index, or None if the label is not a valid column
    """
    if not isinstance(letter, str) or len(letter) != 1:
        return None

    col = ord(letter) - ord('A')
    if not 0 <= col < min(cols, MAX_LABELLED_COLS):
        return None
    return col


def lowest_empty_cell(board: Board, letter: str) -> Optional[Coordinate]:
    """
    Find the cell a piece dropped into column ``letter`` would land in.

    The column is scanned from the top; the landing cell is the one just
    above the first occupied cell, or the bottom row for an empty column.

    Args:
        board: The board to examine
        letter: The column letter

    Returns:
        (row, col) of the landing cell, or None if the label is invalid or
        the column is full
    """
    col = column_label_to_index(letter, board.cols)
    if col is None:
        debug.trace(f"Invalid column label {letter!r}", "moves")
        return None

    row = 0
    for cell in board.column(col):
        if cell is not EMPTY:
            break
        row += 1

    if row == 0:
        return None
    return row - 1, col


def available_columns(board: Board) -> List[str]:
    """
    Get every column that can still take a piece.

    Returns:
        Column letters in ascending order
    """
    labels = [index_to_label(col) for col in range(min(board.cols, MAX_LABELLED_COLS))]
    return [label for label in labels if lowest_empty_cell(board, label) is not None]


def apply_move(board: Board, letter: str, piece: Piece) -> Tuple[Board, Coordinate]:
    """
    Drop a piece into a column.

    Args:
        board: The board to play on
        letter: The column letter
        piece: The piece to drop

    Returns:
        The new board and the (row, col) where the piece landed

    Raises:
        IllegalMove: if the label is invalid or the column is full
    """
    cell = lowest_empty_cell(board, letter)
    if cell is None:
        debug.debug(f"Illegal move: {piece!r} into column {letter!r}", "moves")
        raise IllegalMove(f"Cannot drop a piece into column {letter!r}")

    row, col = cell
    debug.trace(f"{piece!r} lands at ({row}, {col})", "moves")
    return board.with_cell(row, col, piece), cell


def parse_move_script(script: str) -> Tuple[Tuple[Piece, Piece], List[ScriptedMove]]:
    """
    Split a move script into its piece pairing and its moves.

    A script is two piece symbols followed by column letters, e.g. "PCAABCD":
    pieces P and C, with moves A, A, B, C, D alternating starting with P.

    Returns:
        ((first piece, second piece), [(piece, column letter), ...])

    Raises:
        ValueError: if the script does not name two pieces
    """
    symbols = list(script)
    if len(symbols) < 2:
        raise ValueError(f"Move script must start with two pieces, got {script!r}")

    pieces = (symbols[0], symbols[1])
    moves = [(pieces[i % 2], letter) for i, letter in enumerate(symbols[2:])]
    return pieces, moves


def autoplay(board: Board, script: str, n: int) -> AutoplayResult:
    """
    Replay a move script on a board.

    Each move is dropped in turn and checked for a win. A win must land on
    the very last move of the script; winning earlier is an error, as is
    playing into a full or invalid column.

    Error depth is reported as the failure's base depth (1 for an
    unplayable column, 2 for a premature win) plus one for every move played
    successfully before the failing one.

    Args:
        board: Starting board
        script: Move script, see ``parse_move_script``
        n: Number of consecutive pieces needed for a win

    Returns:
        AutoplayResult describing the final board, the winner or the error
    """
    pieces, moves = parse_move_script(script)
    debug.debug(f"Autoplay of {len(moves)} moves with pieces {pieces}", "autoplay")

    last_piece_moved = pieces[0]
    last_move = None
    for played, (piece, letter) in enumerate(moves):
        opponent = pieces[(played + 1) % 2]

        cell = lowest_empty_cell(board, letter)
        if cell is None:
            error = AutoplayError(ILLEGAL_COLUMN_DEPTH + played, piece, letter)
            debug.info(f"Autoplay stopped: {error}", "autoplay")
            return AutoplayResult(None, pieces, piece, error=error)

        row, col = cell
        board = board.with_cell(row, col, piece)
        last_piece_moved = piece
        last_move = cell

        if has_win(board, row, col, n):
            if played < len(moves) - 1:
                error = AutoplayError(PREMATURE_WIN_DEPTH + played, opponent, letter)
                debug.info(f"Autoplay stopped: {error}", "autoplay")
                return AutoplayResult(None, pieces, opponent, error=error)

            debug.info(f"Autoplay finished with winner {piece!r}", "autoplay")
            return AutoplayResult(board, pieces, piece, winner=piece, last_move=cell)

    return AutoplayResult(board, pieces, last_piece_moved, last_move=last_move)

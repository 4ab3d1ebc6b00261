"""
win.py - Win detection for connect-N

Wins are only ever checked from the most recently placed piece (the pivot):
a run counts if and only if it passes through the pivot, so a win is reported
on exactly the move that completes it.
"""

from typing import List

from connectn.debug import debug
from connectn.game.board import Board
from connectn.utils import DIRECTION_VECTORS, Coordinate, Direction, Outcome


def _walk(board: Board, row: int, col: int, dr: int, dc: int) -> List[Coordinate]:
    """Cells past the pivot in one sub-direction that match the pivot's value."""
    value = board.get(row, col)
    found = []
    r, c = row + dr, col + dc
    while board.in_bounds(r, c) and board.get(r, c) == value:
        found.append((r, c))
        r += dr
        c += dc
    return found


def line_through(board: Board, row: int, col: int, direction: Direction) -> List[Coordinate]:
    """
    Get the run of matching cells through the pivot along one direction.

    Args:
        board: The board to examine
        row: Row of the pivot cell
        col: Column of the pivot cell
        direction: Which of the four lines to follow

    Returns:
        Coordinates of the run ordered from one end to the other,
        including the pivot exactly once
    """
    dr, dc = DIRECTION_VECTORS[direction]
    backward = _walk(board, row, col, -dr, -dc)
    forward = _walk(board, row, col, dr, dc)
    return list(reversed(backward)) + [(row, col)] + forward


def run_length(board: Board, row: int, col: int, direction: Direction) -> int:
    """Length of the run through the pivot along ``direction``."""
    return len(line_through(board, row, col, direction))


def has_win(board: Board, row: int, col: int, n: int) -> bool:
    """
    Check whether the piece at (row, col) is part of n or more in a row.

    The pivot should be the cell that was just filled; an empty pivot would
    match runs of empty cells.

    Args:
        board: The board to examine
        row: Row of the pivot cell
        col: Column of the pivot cell
        n: Number of consecutive pieces needed for a win

    Returns:
        True if any of the vertical, horizontal or two diagonal lines
        through the pivot holds a run of at least n
    """
    for direction in Direction:
        length = run_length(board, row, col, direction)
        if length >= n:
            debug.debug(f"{direction.name.lower()} run of {length} through ({row}, {col})", "win")
            return True
    return False


def winning_line(board: Board, row: int, col: int, n: int) -> List[Coordinate]:
    """
    Get the positions of a winning line through the pivot.

    Returns:
        Coordinates of the first direction reaching n, or an empty list
    """
    for direction in Direction:
        line = line_through(board, row, col, direction)
        if len(line) >= n:
            return line
    return []


def outcome_after(board: Board, row: int, col: int, n: int) -> Outcome:
    """Derive the game outcome right after a piece landed at (row, col)."""
    if has_win(board, row, col, n):
        return Outcome.win(board.get(row, col))
    if board.is_full():
        return Outcome.tie()
    return Outcome.in_progress()

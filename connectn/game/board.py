"""
board.py - Immutable board representation for connect-N

This module implements the Board value type. A Board is a row-major tuple of
cells plus its dimensions; every change produces a new Board so callers can
hold on to any Board as a snapshot.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

import numpy as np

from connectn.debug import debug
from connectn.game.render import render
from connectn.utils import EMPTY, Coordinate, OutOfBounds, Piece

CellUpdate = Tuple[int, int, Piece]  # (row, col, value)


@dataclass(frozen=True)
class Board:
    """
    Represents a connect-N game board.

    Row 0 is the top of the board. Cells hold ``EMPTY`` or a piece symbol.
    """

    rows: int
    cols: int
    cells: Tuple[Piece, ...]

    def __post_init__(self):
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Board dimensions must be positive, got {self.rows}x{self.cols}")

        # Accept any sequence but always store a tuple
        if not isinstance(self.cells, tuple):
            object.__setattr__(self, 'cells', tuple(self.cells))

        if len(self.cells) != self.rows * self.cols:
            raise ValueError(
                f"Expected {self.rows * self.cols} cells for a {self.rows}x{self.cols} board, "
                f"got {len(self.cells)}")

    @classmethod
    def create(cls, rows: int, cols: int, fill: Piece = EMPTY) -> 'Board':
        """
        Create a board with every cell set to ``fill``.

        Args:
            rows: Number of rows (positive)
            cols: Number of columns (positive)
            fill: Initial value of each cell

        Returns:
            A new Board

        Raises:
            ValueError: if either dimension is not positive
        """
        debug.debug(f"Creating {rows}x{cols} board", "board")
        return cls(rows, cols, (fill,) * (rows * cols))

    def coord_to_index(self, row: int, col: int) -> int:
        """Translate a row and column into an index into ``cells``."""
        return self.cols * row + col

    def index_to_coord(self, index: int) -> Coordinate:
        """Translate an index into ``cells`` back into (row, col)."""
        return index // self.cols, index % self.cols

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if a position is within the board boundaries."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfBounds(
                f"({row}, {col}) is outside a {self.rows}x{self.cols} board")

    def get(self, row: int, col: int) -> Piece:
        """
        Get the value of a cell.

        Raises:
            OutOfBounds: if the coordinate is not on the board
        """
        self._check_bounds(row, col)
        return self.cells[self.coord_to_index(row, col)]

    def with_cell(self, row: int, col: int, value: Piece) -> 'Board':
        """
        Get a copy of this board with one cell replaced.

        Args:
            row: Row of the cell to set
            col: Column of the cell to set
            value: The new cell value

        Returns:
            A new Board; this board is left untouched

        Raises:
            OutOfBounds: if the coordinate is not on the board
        """
        self._check_bounds(row, col)
        debug.trace(f"Setting ({row}, {col}) to {value!r}", "board")

        cells = list(self.cells)
        cells[self.coord_to_index(row, col)] = value
        return Board(self.rows, self.cols, tuple(cells))

    def with_cells(self, updates: Iterable[CellUpdate]) -> 'Board':
        """
        Apply a sequence of (row, col, value) updates left to right.

        Equivalent to chaining ``with_cell`` calls.
        """
        board = self
        for row, col, value in updates:
            board = board.with_cell(row, col, value)
        return board

    def column(self, col: int) -> Tuple[Piece, ...]:
        """Get the cells of one column, top to bottom."""
        self._check_bounds(0, col)
        return self.cells[col::self.cols]

    def iter_rows(self) -> Iterator[Tuple[Piece, ...]]:
        """Yield the board one row at a time, top to bottom."""
        for row in range(self.rows):
            start = self.coord_to_index(row, 0)
            yield self.cells[start:start + self.cols]

    def is_full(self) -> bool:
        """Check if no empty cell remains."""
        return all(cell is not EMPTY for cell in self.cells)

    def count_empty(self) -> int:
        return sum(1 for cell in self.cells if cell is EMPTY)

    def to_array(self) -> np.ndarray:
        """
        Get the board as a 2D numpy object array.

        Returns:
            A fresh (rows, cols) array; editing it does not affect the board
        """
        grid = np.empty((self.rows, self.cols), dtype=object)
        for index, cell in enumerate(self.cells):
            grid[self.index_to_coord(index)] = cell
        return grid

    def render(self) -> str:
        """Render the board as a text grid."""
        return render(self)

    def __str__(self) -> str:
        return self.render()

"""
render.py - Text rendering for connect-N boards

Pieces may be any printable symbol, including emoji that take two terminal
columns, so every cell is padded to the widest symbol's display width.
"""

from typing import TYPE_CHECKING

from wcwidth import wcswidth

from connectn.utils import EMPTY, MAX_LABELLED_COLS, Piece, index_to_label

if TYPE_CHECKING:
    from connectn.game.board import Board


def display_width(symbol: Piece) -> int:
    """
    Get the number of terminal columns a symbol occupies.

    Args:
        symbol: A piece; non-string pieces are measured by their ``str()``

    Returns:
        Display width, falling back to the character count for
        symbols wcwidth cannot measure
    """
    if symbol is EMPTY:
        return 0
    text = str(symbol)
    width = wcswidth(text)
    return width if width >= 0 else len(text)


def cell_width(board: 'Board') -> int:
    """Widest piece on the board; 0 when every cell is empty."""
    return max([0] + [display_width(cell) for cell in board.cells if cell is not EMPTY])


def render(board: 'Board') -> str:
    """
    Render the board as a text grid with a separator and column labels.

    Example for a 2x3 board with one piece:

        |   |   |   |
        | X |   |   |
        |---+---+---|
        | A | B | C |

    Args:
        board: The board to draw

    Returns:
        The grid; the final label row has no trailing newline
    """
    width = cell_width(board)
    lines = []

    for row in board.iter_rows():
        line = ""
        for cell in row:
            if cell is EMPTY:
                line += "| " + " " * width + " "
            else:
                line += "| " + str(cell) + " " * (width - display_width(cell)) + " "
        lines.append(line + "|\n")

    segment = "-" * (width + 2)
    lines.append("|" + (segment + "+") * (board.cols - 1) + segment + "|\n")

    labels = ""
    for col in range(board.cols):
        label = index_to_label(col) if col < MAX_LABELLED_COLS else "?"
        labels += "| " + label + " " * (width - display_width(label) + 1)
    lines.append(labels + "|")

    return "".join(lines)

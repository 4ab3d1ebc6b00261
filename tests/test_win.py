"""
Tests for win detection from the last-placed cell.
"""

import pytest

from connectn.game.board import Board
from connectn.game.win import has_win, line_through, outcome_after, run_length, winning_line
from connectn.utils import Direction, GameResult


def place_in_sequence(board, cells, piece="X", n=4):
    """Place ``piece`` at each cell in turn, recording has_win after each."""
    results = []
    for row, col in cells:
        board = board.with_cell(row, col, piece)
        results.append(has_win(board, row, col, n))
    return board, results


class TestDirections:
    """Test each of the four win directions."""

    def test_horizontal_win_on_fourth_piece(self):
        _, results = place_in_sequence(Board.create(6, 7), [(5, 0), (5, 1), (5, 2), (5, 3)])
        assert results == [False, False, False, True]

    def test_vertical(self):
        _, results = place_in_sequence(Board.create(6, 7), [(5, 3), (4, 3), (3, 3), (2, 3)])
        assert results == [False, False, False, True]

    def test_diagonal_up(self):
        _, results = place_in_sequence(Board.create(6, 7), [(5, 0), (4, 1), (3, 2), (2, 3)])
        assert results == [False, False, False, True]

    def test_diagonal_down(self):
        _, results = place_in_sequence(Board.create(6, 7), [(2, 0), (3, 1), (4, 2), (5, 3)])
        assert results == [False, False, False, True]

    def test_pivot_in_middle_of_run(self):
        board, _ = place_in_sequence(Board.create(6, 7), [(5, 0), (5, 1), (5, 3), (5, 2)])
        assert has_win(board, 5, 1, 4)
        assert has_win(board, 5, 2, 4)

    def test_longer_run_than_needed(self):
        board, _ = place_in_sequence(Board.create(6, 7), [(5, c) for c in range(6)])
        assert has_win(board, 5, 2, 4)
        assert run_length(board, 5, 2, Direction.HORIZONTAL) == 6


class TestNoWin:
    """Test runs that must not count."""

    def test_broken_sequence(self):
        board, results = place_in_sequence(Board.create(6, 7), [(5, 0), (5, 1), (5, 3), (5, 4)])
        assert not any(results)

    def test_other_piece_breaks_run(self):
        board = Board.create(6, 7).with_cells(
            [(5, 0, "X"), (5, 1, "X"), (5, 2, "O"), (5, 3, "X"), (5, 4, "X")])
        assert not has_win(board, 5, 3, 4)
        assert run_length(board, 5, 3, Direction.HORIZONTAL) == 2

    def test_runs_do_not_wrap_across_rows(self):
        # (0, 6) and (1, 0..2) are adjacent in row-major order only
        board = Board.create(6, 7).with_cells(
            [(0, 6, "X"), (1, 0, "X"), (1, 1, "X"), (1, 2, "X")])
        assert not has_win(board, 1, 0, 4)
        assert not has_win(board, 0, 6, 4)

    def test_three_in_a_row_is_not_four(self):
        board, results = place_in_sequence(Board.create(6, 7), [(5, 0), (4, 1), (3, 2)])
        assert results == [False, False, False]

    def test_only_runs_through_pivot_count(self):
        board = Board.create(6, 7).with_cells([(5, c, "X") for c in range(4)])
        board = board.with_cell(0, 6, "O")
        assert not has_win(board, 0, 6, 4)


class TestLines:
    """Test the run and line helpers."""

    def test_line_through_is_ordered(self):
        board = Board.create(6, 7).with_cells([(5, 0, "X"), (4, 1, "X"), (3, 2, "X")])
        assert line_through(board, 4, 1, Direction.DIAGONAL_UP) == [(5, 0), (4, 1), (3, 2)]

    def test_single_piece_run_is_one(self):
        board = Board.create(3, 3).with_cell(2, 1, "X")
        for direction in Direction:
            assert run_length(board, 2, 1, direction) == 1

    def test_winning_line(self):
        board = Board.create(6, 7).with_cells([(r, 2, "O") for r in range(2, 6)])
        assert winning_line(board, 2, 2, 4) == [(2, 2), (3, 2), (4, 2), (5, 2)]

    def test_no_winning_line(self):
        board = Board.create(6, 7).with_cell(5, 0, "O")
        assert winning_line(board, 5, 0, 4) == []

    @pytest.mark.parametrize("n", [1, 2])
    def test_small_n(self, n):
        board = Board.create(3, 3).with_cells([(2, 0, "X"), (2, 1, "X")])
        assert has_win(board, 2, 1, n)


class TestOutcome:
    """Test deriving the game outcome after a placement."""

    def test_in_progress(self):
        board = Board.create(6, 7).with_cell(5, 0, "X")
        outcome = outcome_after(board, 5, 0, 4)
        assert outcome.result == GameResult.IN_PROGRESS
        assert outcome.winner is None
        assert not outcome.is_game_over()

    def test_win(self):
        board = Board.create(6, 7).with_cells([(5, c, "X") for c in range(4)])
        outcome = outcome_after(board, 5, 3, 4)
        assert outcome.result == GameResult.WIN
        assert outcome.winner == "X"
        assert str(outcome) == "Winner(X)"

    def test_tie(self):
        board = Board.create(1, 2).with_cells([(0, 0, "X"), (0, 1, "O")])
        outcome = outcome_after(board, 0, 1, 2)
        assert outcome.result == GameResult.TIE
        assert outcome.is_game_over()
        assert str(outcome) == "Tie"

    def test_win_on_last_cell_beats_tie(self):
        board = Board.create(1, 2).with_cells([(0, 0, "X"), (0, 1, "X")])
        assert outcome_after(board, 0, 1, 2).result == GameResult.WIN

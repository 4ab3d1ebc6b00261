"""
Tests for the move engine: column labels, column drops and autoplay.
"""

import pytest

from connectn.game.board import Board
from connectn.game.moves import (AutoplayError, apply_move, autoplay, available_columns,
                                 column_label_to_index, lowest_empty_cell, parse_move_script)
from connectn.utils import EMPTY, IllegalMove


def fill_column(board, col, pieces=("X", "O")):
    return board.with_cells(
        [(row, col, pieces[row % 2]) for row in range(board.rows)])


class TestColumnLabels:
    """Test column letter translation."""

    @pytest.mark.parametrize("letter,expected", [("A", 0), ("C", 2), ("Z", 25)])
    def test_valid(self, letter, expected):
        assert column_label_to_index(letter) == expected

    @pytest.mark.parametrize("letter", ["a", "AB", "", "1", "@", "[", " ", None, 3])
    def test_invalid(self, letter):
        assert column_label_to_index(letter) is None

    def test_out_of_range_for_board(self):
        assert column_label_to_index("G", cols=7) == 6
        assert column_label_to_index("H", cols=7) is None


class TestLowestEmptyCell:
    """Test where a dropped piece lands."""

    def test_empty_column_lands_on_bottom(self):
        assert lowest_empty_cell(Board.create(6, 7), "A") == (5, 0)

    def test_lands_above_existing_piece(self):
        board = Board.create(6, 7).with_cell(5, 3, "X")
        assert lowest_empty_cell(board, "D") == (4, 3)

    def test_full_column(self):
        board = fill_column(Board.create(6, 7), 2)
        assert lowest_empty_cell(board, "C") is None

    def test_invalid_labels(self):
        board = Board.create(6, 7)
        assert lowest_empty_cell(board, "H") is None
        assert lowest_empty_cell(board, "a") is None
        assert lowest_empty_cell(board, "AA") is None

    def test_scans_from_the_top(self):
        board = Board.create(6, 7).with_cell(3, 2, "X")
        assert lowest_empty_cell(board, "C") == (2, 2)


class TestAvailableColumns:
    """Test listing of playable columns."""

    def test_all_columns_on_empty_board(self):
        assert available_columns(Board.create(6, 7)) == list("ABCDEFG")

    def test_excludes_full_columns(self):
        board = fill_column(fill_column(Board.create(6, 7), 1), 4)
        assert available_columns(board) == list("ACDFG")

    def test_excludes_column_with_top_cell_occupied(self):
        board = Board.create(6, 7).with_cell(0, 6, "X")
        assert available_columns(board) == list("ABCDEF")

    def test_full_board(self):
        assert available_columns(Board.create(2, 2, fill="X")) == []


class TestApplyMove:
    """Test applying a single move."""

    def test_gravity_fill(self):
        board = Board.create(6, 7)
        landed = []
        for _ in range(3):
            board, cell = apply_move(board, "A", "X")
            landed.append(cell)
        assert landed == [(5, 0), (4, 0), (3, 0)]
        assert board.column(0) == (EMPTY, EMPTY, EMPTY, "X", "X", "X")

    def test_input_board_untouched(self):
        board = Board.create(6, 7)
        new_board, _ = apply_move(board, "B", "O")
        assert board.get(5, 1) is EMPTY
        assert new_board.get(5, 1) == "O"

    def test_full_column_is_illegal(self):
        board = fill_column(Board.create(6, 7), 0)
        with pytest.raises(IllegalMove):
            apply_move(board, "A", "X")

    def test_invalid_label_is_illegal(self):
        with pytest.raises(IllegalMove):
            apply_move(Board.create(6, 7), "Q", "X")

    def test_illegal_move_is_a_value_error(self):
        with pytest.raises(ValueError):
            apply_move(Board.create(6, 7), "a", "X")


class TestParseMoveScript:
    """Test move script parsing."""

    def test_alternating_pieces(self):
        pieces, moves = parse_move_script("PCAABCD")
        assert pieces == ("P", "C")
        assert moves == [("P", "A"), ("C", "A"), ("P", "B"), ("C", "C"), ("P", "D")]

    def test_no_moves(self):
        assert parse_move_script("PC") == (("P", "C"), [])

    def test_emoji_pieces(self):
        pieces, moves = parse_move_script("😎💻AB")
        assert pieces == ("😎", "💻")
        assert moves == [("😎", "A"), ("💻", "B")]

    @pytest.mark.parametrize("script", ["", "P"])
    def test_too_short(self, script):
        with pytest.raises(ValueError):
            parse_move_script(script)


class TestAutoplay:
    """Test scripted replay of moves."""

    def test_script_without_win(self):
        result = autoplay(Board.create(6, 7), "PCAABBC", 4)
        expected = Board.create(6, 7).with_cells([
            (5, 0, "P"), (4, 0, "C"), (5, 1, "P"), (4, 1, "C"), (5, 2, "P")])

        assert result.board == expected
        assert result.pieces == ("P", "C")
        assert result.last_piece_moved == "P"
        assert result.winner is None
        assert result.error is None
        assert result.ok
        assert result.last_move == (5, 2)

    def test_last_piece_moved_alternates(self):
        assert autoplay(Board.create(6, 7), "PCAAB", 4).last_piece_moved == "P"
        assert autoplay(Board.create(6, 7), "PCAABB", 4).last_piece_moved == "C"

    def test_empty_script(self):
        board = Board.create(6, 7)
        result = autoplay(board, "PC", 4)
        assert result.board == board
        assert result.last_piece_moved == "P"
        assert result.winner is None
        assert result.error is None

    def test_win_on_last_move(self):
        result = autoplay(Board.create(6, 7), "PCABABABA", 4)
        assert result.winner == "P"
        assert result.last_piece_moved == "P"
        assert result.error is None
        assert result.board.column(0) == (EMPTY, EMPTY, "P", "P", "P", "P")

    def test_win_for_second_piece(self):
        result = autoplay(Board.create(6, 7), "PCGAGAGAFA", 4)
        assert result.winner == "C"
        assert result.pieces == ("P", "C")

    def test_full_column_error(self):
        # Six moves fill column A, the seventh has nowhere to go
        result = autoplay(Board.create(6, 7), "PCAAAAAAA", 4)
        assert result.error == AutoplayError(num=7, val="P", col="A")
        assert result.board is None
        assert result.pieces == ("P", "C")
        assert result.last_piece_moved == "P"
        assert not result.ok

    def test_error_on_first_move(self):
        result = autoplay(Board.create(6, 7), "PCH", 4)
        assert result.error == AutoplayError(num=1, val="P", col="H")

    def test_error_depth_counts_prior_moves(self):
        result = autoplay(Board.create(6, 7), "PCABz", 4)
        assert result.error == AutoplayError(num=3, val="P", col="z")

        result = autoplay(Board.create(6, 7), "PCAz", 4)
        assert result.error == AutoplayError(num=2, val="C", col="z")

    def test_premature_win_is_an_error(self):
        # P completes column A on the seventh move but the script continues
        result = autoplay(Board.create(6, 7), "PCABABABAC", 4)
        assert result.winner is None
        assert result.board is None
        assert result.error == AutoplayError(num=8, val="C", col="A")
        assert result.last_piece_moved == "C"

    def test_premature_win_on_first_move(self):
        result = autoplay(Board.create(6, 7), "XOAB", 1)
        assert result.error == AutoplayError(num=2, val="O", col="A")

    def test_input_board_untouched(self):
        board = Board.create(6, 7)
        autoplay(board, "PCAABBC", 4)
        assert board == Board.create(6, 7)

    def test_continues_from_given_board(self):
        board = Board.create(2, 2).with_cells([(1, 0, "P"), (0, 0, "C")])
        result = autoplay(board, "PCA", 4)
        assert result.error == AutoplayError(num=1, val="P", col="A")

    def test_emoji_script(self):
        result = autoplay(Board.create(6, 7), "😎💻DD", 4)
        assert result.board.get(5, 3) == "😎"
        assert result.board.get(4, 3) == "💻"
        assert result.last_piece_moved == "💻"

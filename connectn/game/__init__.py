"""
connectn.game - Core game mechanics for connect-N

This package contains the immutable board, text rendering, win detection,
the move engine with scripted replay, the move sources, and game state
management.
"""

from connectn.game.board import Board
from connectn.game.moves import (AutoplayError, AutoplayResult, apply_move, autoplay,
                                 available_columns, column_label_to_index, lowest_empty_cell)
from connectn.game.players import computer_move, user_move
from connectn.game.render import render
from connectn.game.rules import ConnectNEnv, ConnectNGame
from connectn.game.win import has_win

__all__ = ['Board', 'render', 'has_win', 'column_label_to_index', 'lowest_empty_cell',
           'available_columns', 'apply_move', 'autoplay', 'AutoplayResult', 'AutoplayError',
           'user_move', 'computer_move', 'ConnectNGame', 'ConnectNEnv']

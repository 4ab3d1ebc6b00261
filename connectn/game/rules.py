"""
rules.py - Game state management and Gymnasium environment for connect-N

This module provides:
1. ConnectNGame, a session object driving a player against the computer
2. ConnectNEnv, a gymnasium-compatible environment over the same engine
"""

from typing import Dict, List, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connectn.debug import debug
from connectn.game.board import Board
from connectn.game.moves import AutoplayResult, autoplay, available_columns, column_label_to_index
from connectn.game.players import computer_move, user_move
from connectn.game.win import outcome_after, winning_line
from connectn.utils import (COLS, COMPUTER_PIECE, CONNECT_N, EMPTY, MAX_LABELLED_COLS,
                            PLAYER_PIECE, ROWS, Coordinate, GameResult, IllegalMove, Outcome, Piece,
                            index_to_label, other_piece)


class ConnectNGame:
    """
    High-level connect-N game manager.

    Holds the current board snapshot for a player-versus-computer game and
    keeps every earlier snapshot in ``history``.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS, n: int = CONNECT_N,
                 player_piece: Piece = PLAYER_PIECE, computer_piece: Piece = COMPUTER_PIECE,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize a new game.

        Args:
            rows: Number of rows
            cols: Number of columns
            n: Number of consecutive pieces needed for a win
            player_piece: Symbol dropped by the human player
            computer_piece: Symbol dropped by the computer
            rng: Random generator for computer moves
        """
        if n <= 0:
            raise ValueError(f"Win length must be positive, got {n}")

        debug.debug(f"Initializing {rows}x{cols} connect-{n} game", "game")
        self.n = n
        self.player_piece = player_piece
        self.computer_piece = computer_piece
        self.rng = rng if rng is not None else np.random.default_rng()
        self.board = Board.create(rows, cols)
        self.last_move: Optional[Coordinate] = None
        self.last_piece_moved: Optional[Piece] = None
        self.outcome = Outcome.in_progress()
        self.history: List[Board] = []

    @property
    def pieces(self) -> Tuple[Piece, Piece]:
        return self.player_piece, self.computer_piece

    def _place(self, board: Board, cell: Coordinate, piece: Piece) -> Outcome:
        self.history.append(self.board)
        self.board = board
        self.last_move = cell
        self.last_piece_moved = piece
        self.outcome = outcome_after(board, cell[0], cell[1], self.n)
        if self.outcome.is_game_over():
            debug.info(f"Game over: {self.outcome}", "game")
        return self.outcome

    def _check_not_over(self) -> None:
        if self.outcome.is_game_over():
            raise IllegalMove(f"Game is already over ({self.outcome})")

    def play(self, letter: str) -> Outcome:
        """
        Drop the player's piece into a column.

        Raises:
            IllegalMove: if the game is over or the column cannot take a piece
        """
        self._check_not_over()
        if letter not in self.available_columns():
            raise IllegalMove(f"Column {letter!r} is not available")

        board, cell = user_move(self.board, letter, self.player_piece)
        return self._place(board, cell, self.player_piece)

    def play_computer(self) -> Outcome:
        """Let the computer drop its piece into a random playable column."""
        self._check_not_over()
        board, cell = computer_move(self.board, self.computer_piece, self.rng)
        return self._place(board, cell, self.computer_piece)

    def load_autoplay(self, script: str) -> AutoplayResult:
        """
        Replay a move script from the current board and adopt its result.

        The first piece in the script becomes the player's piece when it
        matches neither current piece; the other script piece becomes the
        computer's. An erroring script leaves the game untouched.
        """
        self._check_not_over()
        result = autoplay(self.board, script, self.n)
        if result.error is not None:
            debug.warning(f"Move script rejected: {result.error}", "game")
            return result

        if self.player_piece not in result.pieces:
            self.player_piece = result.pieces[0]
        self.computer_piece = other_piece(result.pieces, self.player_piece)

        self.history.append(self.board)
        self.board = result.board
        self.last_move = result.last_move
        self.last_piece_moved = result.last_piece_moved
        if result.winner is not None:
            self.outcome = Outcome.win(result.winner)
        elif self.board.is_full():
            self.outcome = Outcome.tie()
        return result

    def available_columns(self) -> List[str]:
        if self.outcome.is_game_over():
            return []
        return available_columns(self.board)

    def is_game_over(self) -> bool:
        return self.outcome.is_game_over()

    def get_winner(self) -> Optional[Piece]:
        """
        Get the winner of the game.

        Returns:
            The winning piece, or None if no winner yet or a tie
        """
        return self.outcome.winner

    def get_winning_line(self) -> List[Coordinate]:
        if self.outcome.result != GameResult.WIN or self.last_move is None:
            return []
        row, col = self.last_move
        return winning_line(self.board, row, col, self.n)

    def render(self) -> str:
        return self.board.render()


class ConnectNEnv(gym.Env):
    """
    connect-N environment following the Gymnasium interface.

    The agent plays piece 1; after each legal agent move the random computer
    replies with piece 2 using the environment's seeded ``np_random``.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    AGENT = 1
    OPPONENT = 2

    def __init__(self, rows: int = ROWS, cols: int = COLS, n: int = CONNECT_N,
                 render_mode: Optional[str] = None):
        """
        Initialize the environment.

        Args:
            rows: Number of rows
            cols: Number of columns (at most 26)
            n: Number of consecutive pieces needed for a win
            render_mode: Mode for rendering the environment
        """
        debug.debug("Initializing ConnectNEnv", "env")

        if not 0 < cols <= MAX_LABELLED_COLS:
            raise ValueError(f"Columns must be labelled A-Z, got {cols} columns")

        self.rows = rows
        self.cols = cols
        self.n = n
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(cols)
        # 0 empty, 1 agent, 2 opponent
        self.observation_space = spaces.Box(low=0, high=2, shape=(rows, cols), dtype=np.int8)

        self.board = Board.create(rows, cols)
        self.outcome = Outcome.in_progress()

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01  # Small negative reward to encourage faster solutions

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to an empty board.

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)

        self.board = Board.create(self.rows, self.cols)
        self.outcome = Outcome.in_progress()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Drop the agent's piece into column ``action`` and let the opponent reply.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action}", "env")

        letter = index_to_label(int(action)) if 0 <= int(action) < self.cols else ""
        if self.outcome.is_game_over() or letter not in available_columns(self.board):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        self.board, (row, col) = user_move(self.board, letter, self.AGENT)
        self.outcome = outcome_after(self.board, row, col, self.n)

        if not self.outcome.is_game_over():
            self.board, (row, col) = computer_move(self.board, self.OPPONENT, self.np_random)
            self.outcome = outcome_after(self.board, row, col, self.n)

        terminated = self.outcome.is_game_over()
        if self.outcome.winner == self.AGENT:
            reward = self.reward_win
        elif self.outcome.winner == self.OPPONENT:
            reward = self.reward_lose
        elif self.outcome.result == GameResult.TIE:
            reward = self.reward_draw

        if terminated:
            debug.info(f"Game over: {self.outcome}", "env")

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        """
        Render the current board.

        Returns:
            The text grid for "ascii", None otherwise
        """
        if self.render_mode is None:
            return None

        text = self.board.render()
        if self.render_mode == "human":
            print(text)
            return None
        return text

    def _get_observation(self) -> np.ndarray:
        grid = self.board.to_array()
        observation = np.zeros((self.rows, self.cols), dtype=np.int8)
        for position, cell in np.ndenumerate(grid):
            if cell is not EMPTY:
                observation[position] = cell
        return observation

    def _get_info(self) -> Dict:
        valid_moves = [column_label_to_index(letter, self.cols)
                       for letter in available_columns(self.board)]
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'game_result': self.outcome.result.name,
            'winner': self.outcome.winner,
            'empty_cells': self.board.count_empty(),
        }

"""
cli.py - Command-line interface for connect-N

This module provides a terminal driver: an interactive game against the
random computer, replay of a move script followed by interactive play, and
a small benchmark of the engine.
"""

import argparse
import sys
from typing import Callable, List, Optional, Tuple

import numpy as np

from connectn.debug import debug, DebugLevel
from connectn.game.board import Board
from connectn.game.moves import available_columns
from connectn.game.players import computer_move
from connectn.game.rules import ConnectNGame
from connectn.game.win import has_win
from connectn.utils import (COLS, COMPUTER_PIECE, CONNECT_N, PLAYER_PIECE, ROWS, GameResult,
                            IllegalMove, Outcome)

CLEAR_SCREEN = "\033[2J\033[H"


def parse_pieces(text: str) -> Tuple[str, str]:
    """Parse "P,C" into the player and computer symbols."""
    parts = [part.strip() for part in text.split(',')]
    if len(parts) != 2 or not all(parts):
        raise argparse.ArgumentTypeError(f"Expected two comma-separated pieces, got {text!r}")
    return parts[0], parts[1]


def positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"Expected a positive number, got {text!r}")
    return value


class SimpleCLI:
    """Simple command-line interface for connect-N."""

    def __init__(self, input_fn: Callable[[str], str] = input):
        """
        Initialize the CLI.

        Args:
            input_fn: Function used to prompt the user, swapped out in tests
        """
        self.input_fn = input_fn
        self.args: Optional[argparse.Namespace] = None
        self.game: Optional[ConnectNGame] = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='connect-N CLI')
        parser.add_argument('--debug', action='store_true', help='Enable debug logging')
        parser.add_argument('--debug-level', default=None,
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Set the logging level explicitly')
        parser.add_argument('--log-file', default=None, help='Also write log messages to a file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        board_options = argparse.ArgumentParser(add_help=False)
        board_options.add_argument('--rows', type=positive_int, default=ROWS, help='Number of rows')
        board_options.add_argument('--cols', type=positive_int, default=COLS, help='Number of columns')
        board_options.add_argument('--connect', type=positive_int, default=CONNECT_N,
                                   help='Pieces in a row needed to win')
        board_options.add_argument('--seed', type=int, default=None,
                                   help='Seed for the computer player')
        board_options.add_argument('--no-clear', action='store_true',
                                   help='Do not clear the screen between moves')

        play_parser = subparsers.add_parser('play', parents=[board_options],
                                            help='Play a game against the computer')
        play_parser.add_argument('--pieces', type=parse_pieces,
                                 default=(PLAYER_PIECE, COMPUTER_PIECE),
                                 help='Player and computer symbols, e.g. "P,C"')
        play_parser.add_argument('--first', choices=['P', 'C'], default='P',
                                 help='Who goes first, (P)layer or (C)omputer')

        autoplay_parser = subparsers.add_parser('autoplay', parents=[board_options],
                                                help='Replay a move script, then keep playing')
        autoplay_parser.add_argument('script', help='Move script, e.g. "PCAABCD"')
        autoplay_parser.add_argument('--player', default=None,
                                     help='Which script piece is yours (default: the first)')
        autoplay_parser.add_argument('--no-continue', action='store_true',
                                     help='Stop after the replay instead of playing on')

        benchmark_parser = subparsers.add_parser('benchmark', parents=[board_options],
                                                 help='Benchmark engine performance')
        benchmark_parser.add_argument('--iterations', type=positive_int, default=1000,
                                      help='Number of iterations for benchmarking')

        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments and configure logging."""
        self.args = self.build_parser().parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        elif self.args.debug_level:
            debug.set_from_string(self.args.debug_level)

        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

        return self.args

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI; returns the process exit status."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            return self.play_game()
        elif self.args.command == 'autoplay':
            return self.autoplay_game()
        elif self.args.command == 'benchmark':
            return self.benchmark()

        print("Please specify a command. Use --help for options.")
        return 1

    def _rng(self) -> np.random.Generator:
        return np.random.default_rng(self.args.seed)

    def clear(self) -> None:
        if not self.args.no_clear:
            print(CLEAR_SCREEN, end="")

    def show(self) -> None:
        print(self.game.render())

    def play_game(self) -> int:
        """Play a game interactively against the computer."""
        player, computer = self.args.pieces
        self.game = ConnectNGame(self.args.rows, self.args.cols, self.args.connect,
                                 player, computer, rng=self._rng())

        print(f"Using {self.args.rows} rows, {self.args.cols} columns, "
              f"{self.args.connect} in a row to win")
        print(f"Player: {player}  Computer: {computer}")

        if self.args.first == 'C':
            print("Computer goes first")
            self.computer_turn()
        else:
            print("Player goes first")
            self.show()

        return self.play_loop()

    def autoplay_game(self) -> int:
        """Replay a move script, then continue the game interactively."""
        self.game = ConnectNGame(self.args.rows, self.args.cols, self.args.connect, rng=self._rng())
        player = self.args.player or self.args.script[:1]
        self.game.player_piece = player

        result = self.game.load_autoplay(self.args.script)
        if result.error is not None:
            error = result.error
            print(f"Move script failed at depth {error.num} "
                  f"(piece {error.val}, column {error.col})")
            return 1

        self.show()

        if self.game.is_game_over() or self.args.no_continue:
            self.announce()
            return 0

        if self.game.last_piece_moved == self.game.player_piece:
            self.input_fn("Press ENTER to see computer move")
            self.computer_turn()

        return self.play_loop()

    def play_loop(self) -> int:
        """Alternate player and computer turns until the game ends."""
        while not self.game.is_game_over():
            column = self.get_human_move()
            if column is None:
                print("Quitting game.")
                return 0

            self.clear()
            print(f"...dropping in column {column}")
            self.game.play(column)
            self.show()

            if not self.game.is_game_over():
                self.input_fn("Press ENTER to see computer move")
                self.computer_turn()

        self.announce()
        return 0

    def computer_turn(self) -> Outcome:
        outcome = self.game.play_computer()
        self.clear()
        self.show()
        return outcome

    def get_human_move(self) -> Optional[str]:
        """
        Prompt until the player picks an available column.

        Returns:
            The column letter, or None if the player quit
        """
        columns = self.game.available_columns()
        while True:
            choice = self.input_fn("Choose a column letter to drop your piece in (q to quit): ").strip()
            if choice.lower() == 'q':
                return None
            if choice in columns:
                return choice
            print("Oops, that is not a valid move, try again!")

    def announce(self) -> None:
        outcome = self.game.outcome
        if outcome.result == GameResult.WIN:
            print(f"The winner is {outcome.winner}")
        elif outcome.result == GameResult.TIE:
            print("No winner.")

    def benchmark(self) -> int:
        """Benchmark the core engine operations."""
        iterations = self.args.iterations
        rows, cols, n = self.args.rows, self.args.cols, self.args.connect
        rng = self._rng()
        print(f"Running benchmark with {iterations} iterations on a {rows}x{cols} board...")

        with debug.timed("board_init", "cli") as timer:
            for _ in range(iterations):
                Board.create(rows, cols)
        print(f"Board creation: {timer['elapsed']:.6f} seconds total, "
              f"{timer['elapsed'] / iterations * 1000:.6f} ms per board")

        games = moves = 0
        with debug.timed("random_games", "cli") as timer:
            for _ in range(max(1, iterations // 10)):
                board = Board.create(rows, cols)
                pieces = ("X", "O")
                while available_columns(board):
                    piece = pieces[moves % 2]
                    board, (row, col) = computer_move(board, piece, rng)
                    moves += 1
                    if has_win(board, row, col, n):
                        break
                games += 1
        print(f"Played {games} random games with {moves} moves: {timer['elapsed']:.6f} seconds total, "
              f"{timer['elapsed'] / max(1, moves) * 1000:.6f} ms per move")

        with debug.timed("rendering", "cli") as timer:
            for _ in range(iterations):
                board.render()
        print(f"Rendering board {iterations} times: {timer['elapsed']:.6f} seconds total, "
              f"{timer['elapsed'] / iterations * 1000:.6f} ms per render")

        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    try:
        return cli.run(argv)
    except (IllegalMove, ValueError) as e:
        debug.error(str(e), "cli")
        print(f"Error: {e}")
        return 1
    except (KeyboardInterrupt, EOFError):
        print("\nQuitting game.")
        return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Console front end for the TicTacToe engine.

This script ties together:
- The turn controller (board, rules, computer strategy)
- A text UI that renders snapshots and reads moves from stdin

Run this script to play TicTacToe against the computer!
"""

import argparse
import logging
import sys
from typing import Callable, Optional

from tictactoe import (
    Board,
    Difficulty,
    GameConfig,
    InvalidIndexError,
    Phase,
    StateSnapshot,
    TurnController,
    create_strategy,
)


def render(snapshot: StateSnapshot) -> str:
    """Text picture of a snapshot: the board, then the status line."""
    return f"\n{Board(snapshot.board)}\n\n{snapshot.message}"


class ConsoleGame:
    """
    Plays one or more games in the terminal.

    Cells are typed as 1-9 (left to right, top to bottom),
    'r' restarts and 'q' quits.
    """

    def __init__(
        self,
        controller: TurnController,
        read: Optional[Callable[[str], str]] = None,
        write: Optional[Callable[[str], None]] = None
    ):
        self.controller = controller
        # Looked up per instance so a patched builtin is picked up
        self.read = read if read is not None else input
        self.write = write if write is not None else print
        self.is_running = False

        self._last_board = None
        self.controller.subscribe(self._on_change)

    def _on_change(self, snapshot: StateSnapshot):
        if snapshot.board != self._last_board:
            self.write(render(snapshot))
            self._last_board = snapshot.board

    def run(self):
        """Main game loop."""
        self.is_running = True
        self.write("Index map:\n 1 | 2 | 3\n 4 | 5 | 6\n 7 | 8 | 9")
        self.write(render(self.controller.get_snapshot()))

        while self.is_running:
            snapshot = self.controller.get_snapshot()
            prompt = "Your move [1-9], r=restart, q=quit: "
            if snapshot.phase == Phase.FINISHED:
                prompt = "Game over. r=restart, q=quit: "

            try:
                command = self.read(prompt).strip().lower()
            except EOFError:
                break

            self.handle(command)

    def handle(self, command: str):
        """Apply one line of user input."""
        if command == "q":
            self.write("Goodbye!")
            self.is_running = False
            return
        if command == "r":
            self._last_board = None
            self.controller.on_reset()
            return

        try:
            index = int(command) - 1
        except ValueError:
            self.write("Please type a number 1..9.")
            return

        try:
            before = self.controller.get_snapshot()
            after = self.controller.on_player_move(index)
        except InvalidIndexError:
            self.write("Please type a number 1..9.")
            return

        if after == before and after.phase != Phase.FINISHED:
            self.write("That cell is taken. Try again.")


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="TicTacToe against the computer")
    parser.add_argument(
        "--difficulty",
        choices=[d.name.lower() for d in Difficulty],
        default=GameConfig.DEFAULT_DIFFICULTY.lower(),
        help="easy = random, medium = win/block rules, hard = unbeatable"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the easy/medium strategies"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log engine decisions to stderr"
    )
    return parser.parse_args(argv)


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else GameConfig.LOG_LEVEL,
        format=GameConfig.LOG_FORMAT,
    )

    controller = TurnController(create_strategy(args.difficulty, seed=args.seed))
    game = ConsoleGame(controller)

    try:
        game.run()
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

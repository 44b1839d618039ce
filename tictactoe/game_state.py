"""
Game state for the TicTacToe engine.
Tracks whose turn it is, whether the game is active, and the snapshot
handed to the UI.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .board import Board, Mark
from .win_checker import MoveOutcome


class Phase(Enum):
    """Where the turn controller is in a game."""
    AWAITING_PLAYER_MOVE = "awaiting_player_move"
    AWAITING_COMPUTER_MOVE = "awaiting_computer_move"
    FINISHED = "finished"


@dataclass
class GameState:
    """
    Turn bookkeeping owned by the turn controller.

    The board is held next to it by the controller, not in here.
    """

    # Mark of the side to move
    current_mark: Mark = Mark.X

    # False once someone has won or the board is full
    active: bool = True

    def switch_turn(self):
        """Hand the move to the other mark."""
        self.current_mark = self.current_mark.opposite()

    def finish(self):
        self.active = False

    def reset(self, first_mark: Mark = Mark.X):
        self.current_mark = first_mark
        self.active = True


@dataclass(frozen=True)
class StateSnapshot:
    """
    Everything the UI needs to render the game.

    Immutable copy: later moves never change a snapshot already handed out.
    """
    board: Tuple[Mark, ...]
    current_mark: Mark
    active: bool
    outcome: MoveOutcome
    phase: Phase
    winning_line: Optional[Tuple[int, int, int]] = None
    message: str = ""

    @classmethod
    def capture(
        cls,
        board: Board,
        state: GameState,
        outcome: MoveOutcome,
        phase: Phase,
        winning_line: Optional[Tuple[int, int, int]] = None,
        message: str = ""
    ) -> "StateSnapshot":
        return cls(
            board=board.to_tuple(),
            current_mark=state.current_mark,
            active=state.active,
            outcome=outcome,
            phase=phase,
            winning_line=winning_line,
            message=message,
        )

    def symbols(self) -> Tuple[str, ...]:
        """Board as "X" / "O" / "" strings."""
        return tuple(mark.symbol for mark in self.board)

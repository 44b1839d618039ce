"""
Win checker for the TicTacToe engine.
Checks if a mark has won or if the game is a draw.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

import numpy as np

from .board import Board, Mark


class OutcomeKind(Enum):
    """How things stand on a board."""
    ONGOING = "ongoing"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class MoveOutcome:
    """
    Result of evaluating a board.

    Derived from the board every time it is needed, never stored on it.
    `winner` is only set when kind is WIN.
    """
    kind: OutcomeKind
    winner: Optional[Mark] = None

    @classmethod
    def ongoing(cls) -> "MoveOutcome":
        return cls(OutcomeKind.ONGOING)

    @classmethod
    def win(cls, mark: Mark) -> "MoveOutcome":
        return cls(OutcomeKind.WIN, mark)

    @classmethod
    def draw(cls) -> "MoveOutcome":
        return cls(OutcomeKind.DRAW)

    @property
    def is_terminal(self) -> bool:
        return self.kind != OutcomeKind.ONGOING

    def __str__(self):
        if self.kind == OutcomeKind.WIN:
            return f"Win({self.winner.symbol})"
        return self.kind.value.capitalize()


class WinChecker:
    """
    Checks for win conditions in TicTacToe.

    Win condition: 3 cells holding the same mark in a row
    (horizontally, vertically, or diagonally). EMPTY never matches.
    """

    # All possible winning lines (board indices)
    WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
        # Rows
        (0, 1, 2),
        (3, 4, 5),
        (6, 7, 8),
        # Columns
        (0, 3, 6),
        (1, 4, 7),
        (2, 5, 8),
        # Diagonals
        (0, 4, 8),
        (2, 4, 6),
    )

    # Same lines as an (8, 3) index array for vectorised lookups
    _LINE_INDEX = np.array(WINNING_LINES, dtype=np.intp)

    # Broadcasts against the (8, 3) line gather to test X and O at once
    _MARK_COLUMNS = np.array([Mark.X, Mark.O], dtype=np.int8).reshape(2, 1, 1)

    def _lines(self, board: Board) -> np.ndarray:
        """The board's cells gathered line by line, shape (8, 3)."""
        return board.cells[self._LINE_INDEX]

    def has_won(self, board: Board, mark: Mark) -> bool:
        """
        Check if a mark holds any complete line.

        Args:
            board: The board to inspect.
            mark: X or O.

        Returns:
            True if all three cells of some line equal `mark`.
        """
        if mark == Mark.EMPTY:
            return False
        return bool(np.any(np.all(self._lines(board) == mark, axis=1)))

    def check_winner(self, board: Board) -> Optional[Mark]:
        """Return the winning mark (X checked first), or None."""
        complete = np.all(self._lines(board) == self._MARK_COLUMNS, axis=2)
        for row, mark in enumerate((Mark.X, Mark.O)):
            if complete[row].any():
                return mark
        return None

    @classmethod
    def line_winner(cls, cells: Sequence[int]) -> Mark:
        """
        Winner of a plain sequence of cell codes, without numpy.

        Used inside the minimax loop where the per-call numpy overhead
        dominates. X is checked before O, like check_winner.

        Returns:
            Mark.X, Mark.O, or Mark.EMPTY when nobody has a line.
        """
        for mark in (Mark.X, Mark.O):
            for a, b, c in cls.WINNING_LINES:
                if cells[a] == mark and cells[b] == mark and cells[c] == mark:
                    return mark
        return Mark.EMPTY

    def check_draw(self, board: Board) -> bool:
        """A draw is a full board with no winner."""
        return board.is_full() and self.check_winner(board) is None

    def status(self, board: Board) -> MoveOutcome:
        """
        Evaluate a board: Win(X), else Win(O), else Draw if full, else Ongoing.

        Args:
            board: The board to evaluate. It is not modified.

        Returns:
            The MoveOutcome for the board.
        """
        winner = self.check_winner(board)
        if winner is not None:
            return MoveOutcome.win(winner)
        if board.is_full():
            return MoveOutcome.draw()
        return MoveOutcome.ongoing()

    def get_winning_line(self, board: Board) -> Optional[Tuple[int, int, int]]:
        """
        Get the winning line if there is one.

        Returns:
            The first complete line as a tuple of indices, or None.
        """
        lines = self._lines(board)
        complete = np.all(lines == lines[:, :1], axis=1) & (lines[:, 0] != Mark.EMPTY)
        hits = np.flatnonzero(complete)
        if hits.size == 0:
            return None
        return self.WINNING_LINES[int(hits[0])]

    def find_completing_cell(self, board: Board, mark: Mark) -> Optional[int]:
        """
        Find a cell that would give `mark` three in a row.

        Lines are scanned in WINNING_LINES order and the first line holding
        two `mark` cells and one empty cell wins.

        Returns:
            Index of the empty cell, or None.
        """
        lines = self._lines(board)
        own = np.count_nonzero(lines == mark, axis=1)
        empty = np.count_nonzero(lines == Mark.EMPTY, axis=1)
        for line_number in np.flatnonzero((own == 2) & (empty == 1)):
            line = self.WINNING_LINES[int(line_number)]
            for index in line:
                if board[index] == Mark.EMPTY:
                    return index
        return None

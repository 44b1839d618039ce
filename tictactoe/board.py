"""
Board model for the TicTacToe engine.
Holds the 9 cells and the primitives to place, undo and query marks.
"""

from contextlib import contextmanager
from enum import IntEnum
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np


class Mark(IntEnum):
    """What a cell can hold."""
    EMPTY = 0
    X = 1
    O = 2

    def opposite(self) -> "Mark":
        """Get the other player's mark."""
        if self == Mark.EMPTY:
            raise ValueError("EMPTY has no opposite")
        return Mark.O if self == Mark.X else Mark.X

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> "Mark":
        """Parse 'X', 'O' or an empty/blank string."""
        symbol = symbol.strip().upper()
        if symbol == "":
            return cls.EMPTY
        if symbol in ("X", "O"):
            return cls[symbol]
        raise ValueError(f"Unknown mark symbol: {symbol!r}")


_SYMBOLS = {Mark.EMPTY: "", Mark.X: "X", Mark.O: "O"}


class TicTacToeError(Exception):
    """Base class for engine errors."""


class InvalidIndexError(TicTacToeError, IndexError):
    """Board index outside 0..8."""

    def __init__(self, index):
        self.index = index
        super().__init__(f"Invalid board index {index!r}. Must be 0-8.")


class CellOccupiedError(TicTacToeError):
    """Tried to place a mark on a cell that is not empty."""

    def __init__(self, index: int, occupant: Mark):
        self.index = index
        self.occupant = occupant
        super().__init__(f"Cell {index} is already occupied by {occupant.symbol}")


class Board:
    """
    The 3x3 TicTacToe board.

    Cells are addressed 0..8 in row-major order:

        0 | 1 | 2
        3 | 4 | 5
        6 | 7 | 8

    Marks are stored as a numpy int8 vector so win lines can be read
    with a single fancy-index (see WinChecker).
    """

    SIZE = 9
    ROW_LENGTH = 3

    def __init__(self, cells: Optional[Iterable[int]] = None):
        if cells is None:
            self.cells = np.zeros(self.SIZE, dtype=np.int8)
        else:
            self.cells = np.array([int(Mark(int(c))) for c in cells], dtype=np.int8)
            if self.cells.shape != (self.SIZE,):
                raise ValueError(f"A board needs exactly {self.SIZE} cells")

    @classmethod
    def from_symbols(cls, symbols: Iterable[str]) -> "Board":
        """
        Build a board from symbols, e.g. ["O", "O", "", "", ...].

        Args:
            symbols: 9 strings, each "X", "O" or "" (a space also means empty).

        Returns:
            The new Board.
        """
        return cls(Mark.from_symbol(s) for s in symbols)

    @staticmethod
    def check_index(index) -> int:
        """Return index as an int, or raise InvalidIndexError."""
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            raise InvalidIndexError(index)
        if not (0 <= index < Board.SIZE):
            raise InvalidIndexError(index)
        return int(index)

    def __getitem__(self, index) -> Mark:
        return Mark(int(self.cells[self.check_index(index)]))

    def __len__(self) -> int:
        return self.SIZE

    def __iter__(self) -> Iterator[Mark]:
        return (Mark(int(c)) for c in self.cells)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.cells, other.cells))

    def is_empty(self, index) -> bool:
        return self[index] == Mark.EMPTY

    def place(self, index, mark: Mark):
        """
        Put a mark on an empty cell.

        Raises:
            InvalidIndexError: index is not in 0..8.
            CellOccupiedError: the cell already holds a mark.
            ValueError: mark is EMPTY (use undo to clear a cell).
        """
        index = self.check_index(index)
        mark = Mark(mark)
        if mark == Mark.EMPTY:
            raise ValueError("Cannot place EMPTY, use undo()")

        occupant = Mark(int(self.cells[index]))
        if occupant != Mark.EMPTY:
            raise CellOccupiedError(index, occupant)

        self.cells[index] = int(mark)

    def undo(self, index):
        """Clear a cell. Only the search uses this; real moves are never taken back."""
        self.cells[self.check_index(index)] = int(Mark.EMPTY)

    @contextmanager
    def hypothetical(self, index, mark: Mark):
        """
        Place a mark for the duration of a with-block.

        The cell is cleared again when the block exits, even if it raises,
        so a search can explore a move without leaking it.
        """
        self.place(index, mark)
        try:
            yield self
        finally:
            self.undo(index)

    def is_full(self) -> bool:
        return not bool(np.any(self.cells == Mark.EMPTY))

    def empty_indices(self) -> Iterator[int]:
        """Yield the empty cells in ascending order. Recomputed on every call."""
        for index in range(self.SIZE):
            if self.cells[index] == Mark.EMPTY:
                yield index

    def count(self, mark: Mark) -> int:
        return int(np.count_nonzero(self.cells == Mark(mark)))

    def clone(self) -> "Board":
        """Create an independent copy of the board."""
        new_board = Board()
        new_board.cells = self.cells.copy()
        return new_board

    def reset(self):
        """Clear every cell."""
        self.cells[:] = int(Mark.EMPTY)

    def to_tuple(self) -> Tuple[Mark, ...]:
        return tuple(self)

    def to_list(self) -> List[int]:
        """Plain int codes, for code that reads cells in a tight loop."""
        return self.cells.tolist()

    def symbols(self) -> List[str]:
        return [mark.symbol for mark in self]

    def __repr__(self):
        return f"Board({self.symbols()!r})"

    def __str__(self):
        rows = []
        for start in range(0, self.SIZE, self.ROW_LENGTH):
            row = [
                self[i].symbol or str(i + 1)
                for i in range(start, start + self.ROW_LENGTH)
            ]
            rows.append(" " + " | ".join(row))
        return "\n---+---+---\n".join(rows)

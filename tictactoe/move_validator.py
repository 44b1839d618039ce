"""
Move validator for the TicTacToe engine.
Validates that moves follow the rules.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .board import Board, InvalidIndexError


class Rejection(Enum):
    """Why a move was refused."""
    INVALID_INDEX = "invalid_index"
    GAME_OVER = "game_over"
    CELL_OCCUPIED = "cell_occupied"


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None
    reason: Optional[Rejection] = None


class MoveValidator:
    """
    Validates TicTacToe moves.

    Rules:
    1. Index must be on the board (0-8)
    2. Game must not be over
    3. Can only place on empty cells
    """

    def validate_move(
        self,
        board: Board,
        index,
        game_active: bool = True
    ) -> ValidationResult:
        """
        Validate a move.

        Args:
            board: Current board.
            index: Cell to place a mark on (0-8).
            game_active: False once the game has finished.

        Returns:
            ValidationResult with is_valid, error_message and the reason.
        """
        # Check if index is on the board
        try:
            index = Board.check_index(index)
        except InvalidIndexError as e:
            return ValidationResult(
                is_valid=False,
                error_message=str(e),
                reason=Rejection.INVALID_INDEX
            )

        # Check if game is over
        if not game_active:
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!",
                reason=Rejection.GAME_OVER
            )

        # Check if cell is empty
        if not board.is_empty(index):
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already occupied by {board[index].symbol}",
                reason=Rejection.CELL_OCCUPIED
            )

        return ValidationResult(is_valid=True)

    def get_valid_moves(self, board: Board, game_active: bool = True) -> List[int]:
        """
        Get all valid moves.

        Returns:
            List of empty indices, or an empty list once the game is over.
        """
        if not game_active:
            return []
        return list(board.empty_indices())

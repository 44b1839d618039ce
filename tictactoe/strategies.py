"""
Move strategies for the computer player.

Three interchangeable strategies share one interface, `select_move(board, mark)`:

- OptimalStrategy: full minimax search, never loses.
- HeuristicStrategy: win, else block, else random. Beatable.
- RandomStrategy: any empty cell.
"""

import logging
import random
from enum import Enum
from typing import List, Optional, Protocol

from .board import Board, Mark
from .config import GameConfig
from .win_checker import WinChecker

logger = logging.getLogger(__name__)


class MoveStrategy(Protocol):
    """Anything that can pick a move for a mark."""

    def select_move(self, board: Board, mark: Mark) -> int:
        ...


def _require_moves(board: Board) -> List[int]:
    moves = list(board.empty_indices())
    if not moves:
        raise ValueError("No empty cell left to play")
    return moves


class OptimalStrategy:
    """
    Plays TicTacToe using the Minimax algorithm.

    The strategy will always play optimally - it will win if possible,
    block the opponent if needed, and never lose (at worst, draw).

    Every root move is searched with a full window so ties are broken by
    the lowest index. Alpha-beta pruning is used below the root.
    """

    def __init__(self, config=GameConfig, prefer_faster_wins: Optional[bool] = None):
        """
        Initialize the strategy.

        Args:
            config: Settings for scores (default: GameConfig).
            prefer_faster_wins: Discount scores by depth. Defaults to
                config.PREFER_FASTER_WINS.
        """
        self.win_score = config.WIN_SCORE
        self.draw_score = config.DRAW_SCORE
        if prefer_faster_wins is None:
            prefer_faster_wins = config.PREFER_FASTER_WINS
        self.prefer_faster_wins = prefer_faster_wins
        self.win_checker = WinChecker()

        # Keep track of how many positions we've evaluated (for debugging)
        self.positions_evaluated = 0

    def select_move(self, board: Board, mark: Mark) -> int:
        """
        Get the best move for `mark`.

        Args:
            board: Current board. It is not modified.
            mark: The mark to play.

        Returns:
            Index of the best move.

        Raises:
            ValueError: the board has no empty cell.
        """
        self.positions_evaluated = 0
        valid_moves = _require_moves(board)

        # Only one move, just take it
        if len(valid_moves) == 1:
            return valid_moves[0]

        scratch = board.clone()

        # Take an immediate win outright, whatever the scoring mode
        for index in valid_moves:
            with scratch.hypothetical(index, mark):
                if self.win_checker.has_won(scratch, mark):
                    return index

        best_score = float('-inf')
        best_move = valid_moves[0]

        for index in valid_moves:
            with scratch.hypothetical(index, mark):
                score = self.score_position(
                    scratch.to_list(), mark, mark.opposite(), depth=1
                )

            # Strict comparison keeps the first (lowest) index on ties
            if score > best_score:
                best_score = score
                best_move = index

        logger.debug(
            "Minimax evaluated %d positions for %s. Best move: %d (score: %s)",
            self.positions_evaluated, mark.symbol, best_move, best_score
        )
        return best_move

    def score_position(
        self,
        cells: List[int],
        me: Mark,
        to_move: Mark,
        depth: int = 0,
        alpha: float = float('-inf'),
        beta: float = float('inf')
    ) -> float:
        """
        Minimax algorithm with alpha-beta pruning.

        Args:
            cells: Position as plain cell codes (see Board.to_list).
                Restored before returning.
            me: The mark the score is seen from (the maximizer).
            to_move: The mark whose turn it is in this position.
            depth: Plies played since the root.
            alpha: Alpha value for pruning.
            beta: Beta value for pruning.

        Returns:
            The score of the position for `me`.
        """
        self.positions_evaluated += 1

        winner = WinChecker.line_winner(cells)
        if winner != Mark.EMPTY:
            discount = depth if self.prefer_faster_wins else 0
            if winner == me:
                return self.win_score - discount
            return discount - self.win_score
        if Mark.EMPTY not in cells:
            return self.draw_score

        is_maximizing = to_move == me
        best = float('-inf') if is_maximizing else float('inf')

        for index, cell in enumerate(cells):
            if cell != Mark.EMPTY:
                continue

            cells[index] = to_move
            try:
                score = self.score_position(
                    cells, me, to_move.opposite(), depth + 1, alpha, beta
                )
            finally:
                cells[index] = Mark.EMPTY

            if is_maximizing:
                best = max(best, score)
                alpha = max(alpha, score)
            else:
                best = min(best, score)
                beta = min(beta, score)
            if beta <= alpha:
                break  # Prune

        return best


class HeuristicStrategy:
    """
    Rule-based strategy, in priority order:

    1. Complete one of our own lines (immediate win).
    2. Block a line where the opponent has two.
    3. Otherwise pick a random empty cell.

    It only looks one move ahead, so it can be beaten (a fork wins against it).
    Lines are scanned in WinChecker.WINNING_LINES order.
    """

    def __init__(self, rng: Optional[random.Random] = None, config=GameConfig):
        self.rng = rng if rng is not None else random.Random(config.RANDOM_SEED)
        self.win_checker = WinChecker()

    def select_move(self, board: Board, mark: Mark) -> int:
        valid_moves = _require_moves(board)

        winning = self.win_checker.find_completing_cell(board, mark)
        if winning is not None:
            return winning

        blocking = self.win_checker.find_completing_cell(board, mark.opposite())
        if blocking is not None:
            return blocking

        return self.rng.choice(valid_moves)


class RandomStrategy:
    """Pick any empty cell, uniformly at random."""

    def __init__(self, rng: Optional[random.Random] = None, config=GameConfig):
        self.rng = rng if rng is not None else random.Random(config.RANDOM_SEED)

    def select_move(self, board: Board, mark: Mark) -> int:
        return self.rng.choice(_require_moves(board))


class Difficulty(Enum):
    """AI difficulty levels."""
    EASY = 1      # Random moves
    MEDIUM = 2    # Win/block rules
    HARD = 3      # Full minimax


def create_strategy(difficulty, seed=None, config=GameConfig) -> MoveStrategy:
    """
    Build the strategy for a difficulty level.

    Args:
        difficulty: A Difficulty, or its name ("easy", "HARD", ...).
        seed: Seed for the randomised strategies (default: config.RANDOM_SEED).
        config: Game settings.

    Returns:
        A new strategy instance.
    """
    if isinstance(difficulty, str):
        difficulty = Difficulty[difficulty.upper()]
    if seed is None:
        seed = config.RANDOM_SEED

    if difficulty == Difficulty.EASY:
        return RandomStrategy(random.Random(seed), config)
    if difficulty == Difficulty.MEDIUM:
        return HeuristicStrategy(random.Random(seed), config)
    return OptimalStrategy(config)

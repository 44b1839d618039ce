"""
Turn controller for the TicTacToe engine.

Game flow:
1. Human (X) picks a cell
2. Controller places the mark and evaluates the board
3. Computer (O) picks a reply through the configured strategy
4. Controller places it and evaluates again
5. Repeat until someone wins or the board is full; reset starts over
"""

import logging
from typing import Callable, List, Optional

from .board import Board, InvalidIndexError, TicTacToeError
from .config import GameConfig
from .game_state import GameState, Phase, StateSnapshot
from .move_validator import MoveValidator, Rejection
from .strategies import MoveStrategy, create_strategy
from .win_checker import MoveOutcome, OutcomeKind, WinChecker

logger = logging.getLogger(__name__)

Listener = Callable[[StateSnapshot], None]


class TurnController:
    """
    Owns the board and the game state and sequences the moves.

    The UI calls on_player_move / on_reset / get_snapshot and renders the
    snapshots it gets back (or subscribes to be told about every change).
    It never touches the board directly.
    """

    def __init__(self, strategy: Optional[MoveStrategy] = None, config=GameConfig):
        """
        Initialize the controller.

        Args:
            strategy: How the computer picks moves. Defaults to the
                strategy for config.DEFAULT_DIFFICULTY.
            config: Game settings (default: GameConfig).
        """
        self.config = config
        self.human_mark = config.HUMAN_MARK
        self.computer_mark = config.COMPUTER_MARK
        self.strategy = strategy if strategy is not None else create_strategy(
            config.DEFAULT_DIFFICULTY, config=config
        )

        self.board = Board()
        self.state = GameState(current_mark=self.human_mark)
        self.phase = Phase.AWAITING_PLAYER_MOVE

        self.validator = MoveValidator()
        self.win_checker = WinChecker()
        self._listeners: List[Listener] = []

    # ==================== UI ENTRY POINTS ====================

    def on_player_move(self, index: int) -> StateSnapshot:
        """
        Apply a human move and, if the game goes on, the computer's reply.

        Moves on an occupied cell, or while it is not the human's turn, are
        ignored (stale or duplicate clicks) and the current snapshot is
        returned unchanged.

        Args:
            index: Board index 0-8.

        Returns:
            Snapshot after the move(s).

        Raises:
            InvalidIndexError: index is outside 0-8. Nothing is changed.
        """
        result = self.validator.validate_move(self.board, index, self.state.active)

        if result.reason == Rejection.INVALID_INDEX:
            raise InvalidIndexError(index)

        if self.phase != Phase.AWAITING_PLAYER_MOVE or not result.is_valid:
            logger.debug("Ignoring player move at %r: %s", index,
                         result.error_message or f"phase is {self.phase.value}")
            return self.get_snapshot()

        changes = [self._apply_move(index, self.human_mark)]

        if self.phase == Phase.AWAITING_COMPUTER_MOVE:
            try:
                changes.append(self._computer_move())
            except Exception:
                # Take the human move back so the turn can be played again
                self._take_back(index)
                raise

        # Listeners only ever see a settled turn
        for snapshot in changes:
            self._notify(snapshot)

        return self.get_snapshot()

    def on_reset(self) -> StateSnapshot:
        """Start a new game from any phase."""
        self.board.reset()
        self.state.reset(self.human_mark)
        self.phase = Phase.AWAITING_PLAYER_MOVE
        logger.debug("Game reset")

        snapshot = self.get_snapshot()
        self._notify(snapshot)
        return snapshot

    def get_snapshot(self) -> StateSnapshot:
        """Current board, mark, active flag and outcome."""
        outcome = self.win_checker.status(self.board)
        return StateSnapshot.capture(
            self.board,
            self.state,
            outcome,
            self.phase,
            winning_line=self.win_checker.get_winning_line(self.board),
            message=self._status_message(outcome),
        )

    # ==================== CONFIGURATION ====================

    def set_strategy(self, strategy: MoveStrategy):
        """Change how the computer plays. Takes effect from its next move."""
        self.strategy = strategy

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Be told about every state change.

        Args:
            listener: Called with a StateSnapshot after each move and reset.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ==================== INTERNALS ====================

    def _computer_move(self) -> StateSnapshot:
        """Ask the strategy for a move and play it."""
        index = self.strategy.select_move(self.board.clone(), self.computer_mark)

        result = self.validator.validate_move(self.board, index)
        if not result.is_valid:
            raise TicTacToeError(f"Strategy chose an illegal move: {result.error_message}")

        logger.debug("Computer plays %s at %d", self.computer_mark.symbol, index)
        return self._apply_move(index, self.computer_mark)

    def _take_back(self, index: int):
        """Undo a human move whose reply failed, back to awaiting the player."""
        logger.warning("Computer move failed, taking back player move at %d", index)
        self.board.undo(index)
        self.state.reset(self.human_mark)
        self.phase = Phase.AWAITING_PLAYER_MOVE

    def _apply_move(self, index: int, mark) -> StateSnapshot:
        """Place a mark, evaluate, and move to the next phase."""
        self.board.place(index, mark)
        outcome = self.win_checker.status(self.board)

        if outcome.is_terminal:
            self.state.finish()
            self.phase = Phase.FINISHED
            logger.info("Game over: %s", outcome)
        else:
            self.state.switch_turn()
            if self.state.current_mark == self.computer_mark:
                self.phase = Phase.AWAITING_COMPUTER_MOVE
            else:
                self.phase = Phase.AWAITING_PLAYER_MOVE

        return self.get_snapshot()

    def _notify(self, snapshot: StateSnapshot):
        for listener in list(self._listeners):
            listener(snapshot)

    def _status_message(self, outcome: MoveOutcome) -> str:
        if outcome.kind == OutcomeKind.DRAW:
            return self.config.DRAW_MESSAGE
        if outcome.kind == OutcomeKind.WIN:
            if outcome.winner == self.human_mark:
                return self.config.PLAYER_WIN_MESSAGE
            return self.config.COMPUTER_WIN_MESSAGE
        if self.state.current_mark == self.human_mark:
            return self.config.PLAYER_TURN_MESSAGE
        return self.config.COMPUTER_TURN_MESSAGE

"""
TicTacToe Engine
================
The decision engine behind a human-vs-computer TicTacToe game:
board model, win/draw detection, computer strategies and the turn
controller. Rendering is left to whatever UI drives the controller.

The human plays X and moves first; the computer plays O.
"""

from .board import Board, Mark, TicTacToeError, InvalidIndexError, CellOccupiedError
from .config import GameConfig
from .win_checker import WinChecker, MoveOutcome, OutcomeKind
from .move_validator import MoveValidator, ValidationResult, Rejection
from .strategies import (
    MoveStrategy,
    OptimalStrategy,
    HeuristicStrategy,
    RandomStrategy,
    Difficulty,
    create_strategy,
)
from .game_state import GameState, Phase, StateSnapshot
from .controller import TurnController

__version__ = "1.0.0"

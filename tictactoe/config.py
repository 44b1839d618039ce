"""
Game configuration for the TicTacToe engine.
All the settings for players, search scoring, difficulty and messages.
"""

import logging

from .board import Mark


class GameConfig:
    """
    Configuration class for game settings.
    Subclass it (or pass an instance with overridden attributes) to change them.
    """

    # ==================== PLAYERS ====================
    # The human always moves first
    HUMAN_MARK = Mark.X
    COMPUTER_MARK = Mark.O

    # ==================== SEARCH SCORING ====================
    # Terminal scores seen from the side the search is playing for
    WIN_SCORE = 10
    DRAW_SCORE = 0

    # Discount scores by ply depth so the search takes the quickest win
    # and holds out longest when losing
    PREFER_FASTER_WINS = True

    # ==================== DIFFICULTY ====================
    # "EASY" (random), "MEDIUM" (heuristic) or "HARD" (optimal)
    DEFAULT_DIFFICULTY = "HARD"

    # Seed for the randomised strategies (None = nondeterministic)
    RANDOM_SEED = None

    # ==================== STATUS MESSAGES ====================
    PLAYER_TURN_MESSAGE = "Your Turn (X)"
    COMPUTER_TURN_MESSAGE = "Computer's Turn (O)"
    PLAYER_WIN_MESSAGE = "You're the Winner!"
    COMPUTER_WIN_MESSAGE = "AI Wins!"
    DRAW_MESSAGE = "Match Drawn!"

    # ==================== LOGGING ====================
    LOG_LEVEL = logging.WARNING
    LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

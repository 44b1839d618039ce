"""
Tests for the board model, the win checker and the move validator.
"""

import random

import pytest

from tictactoe.board import Board, CellOccupiedError, InvalidIndexError, Mark
from tictactoe.move_validator import MoveValidator, Rejection
from tictactoe.win_checker import MoveOutcome, OutcomeKind, WinChecker

E = ""


def test_new_board_is_empty():
    board = Board()
    assert list(board.empty_indices()) == list(range(9))
    assert not board.is_full()
    assert board.count(Mark.X) == 0


def test_place_sets_cell():
    board = Board()
    board.place(4, Mark.X)
    assert board[4] == Mark.X
    assert 4 not in list(board.empty_indices())


def test_place_never_overwrites():
    board = Board()
    board.place(0, Mark.X)
    with pytest.raises(CellOccupiedError) as excinfo:
        board.place(0, Mark.O)
    assert excinfo.value.index == 0
    assert board[0] == Mark.X


@pytest.mark.parametrize("index", [-1, 9, 42, "3", 1.0, None, True])
def test_place_rejects_bad_index(index):
    board = Board()
    with pytest.raises(InvalidIndexError):
        board.place(index, Mark.X)
    assert list(board.empty_indices()) == list(range(9))


def test_invalid_index_is_an_index_error():
    with pytest.raises(IndexError):
        Board()[9]


def test_place_empty_mark_rejected():
    with pytest.raises(ValueError):
        Board().place(0, Mark.EMPTY)


def test_empty_indices_is_recomputed():
    board = Board()
    first = list(board.empty_indices())
    board.place(0, Mark.X)
    assert list(board.empty_indices()) == first[1:]


def test_clone_is_independent():
    board = Board.from_symbols(["X", E, E, E, "O", E, E, E, E])
    copy = board.clone()
    copy.place(1, Mark.X)
    assert board[1] == Mark.EMPTY
    assert copy == Board.from_symbols(["X", "X", E, E, "O", E, E, E, E])


def test_undo_clears_cell():
    board = Board()
    board.place(3, Mark.O)
    board.undo(3)
    assert board.is_empty(3)


def test_hypothetical_restores_after_exception():
    board = Board()
    with pytest.raises(RuntimeError):
        with board.hypothetical(5, Mark.X):
            assert board[5] == Mark.X
            raise RuntimeError("boom")
    assert board.is_empty(5)


def test_reset_and_full():
    board = Board.from_symbols(["X", "O", "X", "X", "O", "O", "O", "X", "X"])
    assert board.is_full()
    board.reset()
    assert board == Board()


def test_from_symbols_accepts_blanks():
    board = Board.from_symbols(["x", " ", "", "o", E, E, E, E, E])
    assert board.symbols() == ["X", "", "", "O", "", "", "", "", ""]


def test_from_symbols_wrong_length():
    with pytest.raises(ValueError):
        Board.from_symbols(["X", "O"])


def test_mark_opposite():
    assert Mark.X.opposite() == Mark.O
    assert Mark.O.opposite() == Mark.X
    with pytest.raises(ValueError):
        Mark.EMPTY.opposite()


# ==================== WIN CHECKER ====================

@pytest.mark.parametrize("line", WinChecker.WINNING_LINES)
def test_every_line_wins(line):
    checker = WinChecker()
    board = Board()
    for index in line:
        board.place(index, Mark.O)
    assert checker.has_won(board, Mark.O)
    assert not checker.has_won(board, Mark.X)
    assert checker.status(board) == MoveOutcome.win(Mark.O)
    assert checker.get_winning_line(board) == line
    assert WinChecker.line_winner(board.to_list()) == Mark.O


def test_empty_never_wins():
    checker = WinChecker()
    board = Board()
    assert not checker.has_won(board, Mark.EMPTY)
    assert checker.status(board) == MoveOutcome.ongoing()
    assert checker.get_winning_line(board) is None
    assert WinChecker.line_winner(board.to_list()) == Mark.EMPTY


def test_draw_detected():
    checker = WinChecker()
    board = Board.from_symbols(["X", "O", "X", "X", "O", "O", "O", "X", "X"])
    assert checker.check_draw(board)
    assert checker.status(board).kind == OutcomeKind.DRAW


def test_full_board_with_winner_is_not_draw():
    checker = WinChecker()
    board = Board.from_symbols(["X", "X", "X", "O", "O", "X", "X", "O", "O"])
    assert not checker.check_draw(board)
    assert checker.status(board) == MoveOutcome.win(Mark.X)


def test_status_does_not_modify_board():
    checker = WinChecker()
    board = Board.from_symbols(["X", "X", E, "O", "O", E, E, E, E])
    before = board.clone()
    checker.status(board)
    assert board == before


def test_find_completing_cell():
    checker = WinChecker()
    board = Board.from_symbols([E, E, E, "O", E, E, "O", "X", "X"])
    # column 0 (0, 3, 6) needs index 0
    assert checker.find_completing_cell(board, Mark.O) == 0
    assert checker.find_completing_cell(board, Mark.X) is None


def test_outcome_str():
    assert str(MoveOutcome.win(Mark.X)) == "Win(X)"
    assert str(MoveOutcome.draw()) == "Draw"
    assert str(MoveOutcome.ongoing()) == "Ongoing"


# ==================== PROPERTIES ON RANDOM PLAY ====================

@pytest.mark.parametrize("seed", range(25))
def test_random_games_keep_invariants(seed):
    """X moves first, so X leads O by 0 or 1 and only one side can have won."""
    rng = random.Random(seed)
    checker = WinChecker()
    board = Board()
    mark = Mark.X

    while not checker.status(board).is_terminal:
        board.place(rng.choice(list(board.empty_indices())), mark)
        mark = mark.opposite()

        assert board.count(Mark.X) - board.count(Mark.O) in (0, 1)
        assert not (checker.has_won(board, Mark.X) and checker.has_won(board, Mark.O))
        winner = checker.check_winner(board)
        assert WinChecker.line_winner(board.to_list()) == (winner or Mark.EMPTY)


# ==================== MOVE VALIDATOR ====================

def test_validator_accepts_empty_cell():
    result = MoveValidator().validate_move(Board(), 4)
    assert result.is_valid
    assert result.reason is None


def test_validator_reports_each_rule():
    validator = MoveValidator()
    board = Board.from_symbols(["X", E, E, E, E, E, E, E, E])

    assert validator.validate_move(board, 9).reason == Rejection.INVALID_INDEX
    assert validator.validate_move(board, 0).reason == Rejection.CELL_OCCUPIED
    assert validator.validate_move(board, 1, game_active=False).reason == Rejection.GAME_OVER
    # An off-board index is reported first, even after the game ended
    assert validator.validate_move(board, -1, game_active=False).reason == Rejection.INVALID_INDEX
    assert "occupied" in validator.validate_move(board, 0).error_message


def test_validator_valid_moves():
    validator = MoveValidator()
    board = Board.from_symbols(["X", "O", E, E, E, E, E, E, "X"])
    assert validator.get_valid_moves(board) == [2, 3, 4, 5, 6, 7]
    assert validator.get_valid_moves(board, game_active=False) == []

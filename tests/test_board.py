import pytest

from tictactoe.board import check_win, is_full, new_board


def _board(*rows):
    return [[" XO".index(ch) and ch or "" for ch in row] for row in rows]


def test_new_board_is_empty():
    board = new_board()
    assert board == [["", "", ""], ["", "", ""], ["", "", ""]]
    board[0][0] = "X"
    assert new_board()[0][0] == ""


@pytest.mark.parametrize(
    "rows, cell",
    [
        (("XXX", "   ", "   "), (0, 1)),
        (("O  ", "O  ", "O  "), (2, 0)),
        (("X  ", " X ", "  X"), (1, 1)),
        (("  O", " O ", "O  "), (0, 2)),
    ],
)
def test_lines_win(rows, cell):
    assert check_win(_board(*rows), *cell)


def test_no_win_for_partial_line():
    board = _board("XX ", "   ", "   ")
    assert not check_win(board, 0, 0)


def test_diagonal_not_checked_off_diagonal():
    board = _board("X  ", " X ", "  X")
    board[0][1] = "X"
    assert not check_win(board, 0, 1)


def test_mixed_line_is_not_a_win():
    board = _board("XOX", "   ", "   ")
    assert not check_win(board, 0, 0)


def test_is_full():
    assert not is_full(new_board())
    board = _board("XOX", "XOO", "OXX")
    assert is_full(board)
    board[2][2] = ""
    assert not is_full(board)
"""The 3x3 noughts-and-crosses grid; empty cells hold ``""``."""

from __future__ import annotations

Board = list[list[str]]
SIZE = 3


def new_board() -> Board:
    return [[""] * SIZE for _ in range(SIZE)]


def check_win(board: Board, row: int, col: int) -> bool:
    """Whether the symbol at (row, col) completes a line through that cell."""
    symbol = board[row][col]
    if all(cell == symbol for cell in board[row]):
        return True
    if all(line[col] == symbol for line in board):
        return True
    if row == col and all(board[i][i] == symbol for i in range(SIZE)):
        return True
    if row + col == SIZE - 1 and all(board[i][SIZE - 1 - i] == symbol for i in range(SIZE)):
        return True
    return False


def is_full(board: Board) -> bool:
    return all(cell for line in board for cell in line)
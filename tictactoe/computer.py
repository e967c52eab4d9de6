"""A single player against a simple computer opponent."""

from __future__ import annotations

import random
import threading

from tictactoe.board import SIZE, Board, check_win, is_full, new_board
from tictactoe.models import ComputerStats


def _check_cell(row: int, col: int) -> None:
    if not (0 <= row < SIZE and 0 <= col < SIZE):
        raise IndexError(f"cell ({row}, {col}) is off the board")


def _lines() -> list[list[tuple[int, int]]]:
    rows = [[(r, c) for c in range(SIZE)] for r in range(SIZE)]
    cols = [[(r, c) for r in range(SIZE)] for c in range(SIZE)]
    diagonal = [(i, i) for i in range(SIZE)]
    anti_diagonal = [(i, SIZE - 1 - i) for i in range(SIZE)]
    return rows + cols + [diagonal, anti_diagonal]


_LINES = _lines()


class ComputerGame:
    """X always starts; the computer wins if it can, blocks if it must, else plays randomly."""

    def __init__(self, player_symbol: str = "X", rng: random.Random | None = None) -> None:
        self.player = player_symbol
        self.computer = "X" if player_symbol == "O" else "O"
        self.board: Board = new_board()
        self.current = "X"
        self.game_over = False
        self.winner = ""
        self.stats = ComputerStats()
        self._rng = rng or random.Random()
        self._lock = threading.Lock()

    def start(self) -> None:
        self.board = new_board()
        self.game_over = False
        self.winner = ""
        self.current = "X"
        if self.current == self.computer:
            self._computer_move()

    def make_player_move(self, row: int, col: int) -> bool:
        """Play the player's move, then the computer's reply; False if not allowed."""
        _check_cell(row, col)
        if self.game_over or self.current != self.player or self.board[row][col]:
            return False

        self.board[row][col] = self.player

        if check_win(self.board, row, col):
            self.game_over = True
            self.winner = self.player
            self._update_stats(player_won=True)
            return True

        if is_full(self.board):
            self.game_over = True
            self._update_stats(player_won=False)
            return True

        self.current = self.computer
        self._computer_move()
        return True

    def find_winning_move(self, symbol: str) -> tuple[int, int] | None:
        """A cell that completes a line for ``symbol``, or None."""
        for line in _LINES:
            cells = [self.board[r][c] for r, c in line]
            empty = [pos for pos, cell in zip(line, cells) if cell == ""]
            if cells.count(symbol) == 2 and empty:
                return empty[-1]
        return None

    def _computer_move(self) -> None:
        if self.game_over:
            return

        move = self.find_winning_move(self.computer) or self.find_winning_move(self.player)
        if move is None:
            empty = [(r, c) for r, line in enumerate(self.board) for c, cell in enumerate(line)
                     if cell == ""]
            if not empty:
                return
            move = self._rng.choice(empty)

        row, col = move
        self.board[row][col] = self.computer

        if check_win(self.board, row, col):
            self.game_over = True
            self.winner = self.computer
            self._update_stats(player_won=False)
            return

        if is_full(self.board):
            self.game_over = True
            self._update_stats(player_won=False)
            return

        self.current = self.player

    def _update_stats(self, player_won: bool) -> None:
        with self._lock:
            if player_won:
                self.stats.player_win += 1
            else:
                self.stats.computer_win += 1
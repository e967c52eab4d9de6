"""Two players sharing one screen."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from tictactoe.board import SIZE, Board, check_win, is_full, new_board
from tictactoe.models import OfflineStats


def _check_cell(row: int, col: int) -> None:
    if not (0 <= row < SIZE and 0 <= col < SIZE):
        raise IndexError(f"cell ({row}, {col}) is off the board")


@dataclass
class OfflineGame:
    """A local game; X always starts and the stats count from X's side."""

    board: Board = field(default_factory=new_board)
    current: str = "X"
    game_over: bool = False
    winner: str = ""
    stats: OfflineStats = field(default_factory=OfflineStats)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def start(self) -> None:
        self.board = new_board()
        self.current = "X"
        self.game_over = False
        self.winner = ""

    def make_move(self, row: int, col: int) -> bool:
        """Place the current symbol; False if the game is over or the cell is taken."""
        _check_cell(row, col)
        if self.game_over or self.board[row][col]:
            return False

        self.board[row][col] = self.current

        if check_win(self.board, row, col):
            self.game_over = True
            self.winner = self.current
            self._update_stats(self.winner)
            return True

        if is_full(self.board):
            self.game_over = True
            self._update_stats("")
            return True

        self.current = "O" if self.current == "X" else "X"
        return True

    def _update_stats(self, winner: str) -> None:
        with self._lock:
            self.stats.total_games += 1
            if winner == "X":
                self.stats.wins += 1
                self.stats.current_streak += 1
            elif winner == "O":
                self.stats.losses += 1
                self.stats.current_streak = 0
            else:
                self.stats.draws += 1
                self.stats.current_streak = 0
"""Online games between two matched players."""

from __future__ import annotations

import random
import threading

from tictactoe.board import SIZE, Board, check_win, is_full, new_board
from tictactoe.models import QuickGameStats, User


def _check_cell(row: int, col: int) -> None:
    if not (0 <= row < SIZE and 0 <= col < SIZE):
        raise IndexError(f"cell ({row}, {col}) is off the board")


class QuickGame:
    """A game between two users; symbols and the first turn are drawn at random."""

    def __init__(
        self,
        players: list[User | None] | None = None,
        stats: QuickGameStats | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.players: list[User | None] = list(players) if players else [None, None]
        self.board: Board = new_board()
        self.current = 0
        self.game_over = False
        self.winner = ""
        self.symbols: dict[str, str] = {}
        self.stats = stats if stats is not None else QuickGameStats()
        self._rng = rng or random.Random()
        self._lock = threading.Lock()

    def get_opponent(self, player_id: str) -> User | None:
        """The first seated player other than ``player_id``."""
        return next(
            (player for player in self.players if player is not None and player.id != player_id),
            None,
        )

    def current_player(self) -> User | None:
        """The player whose turn it is."""
        if not 0 <= self.current < len(self.players):
            return None
        return self.players[self.current]

    def start(self) -> None:
        """Assign random symbols, pick who moves first and count the game."""
        first, second = self.players
        if first is None or second is None:
            raise ValueError("a quick game needs two players")
        symbols = ["X", "O"]
        self._rng.shuffle(symbols)
        self.symbols[first.id] = symbols[0]
        self.symbols[second.id] = symbols[1]
        self.current = self._rng.randrange(2)
        self._update_stats(new_game=True)

    def make_move(self, player_id: str, row: int, col: int) -> bool:
        """Place the player's symbol; False if it is not their turn or the cell is taken."""
        _check_cell(row, col)
        mover = self.current_player()
        if self.game_over or mover is None or mover.id != player_id or self.board[row][col]:
            return False

        self.board[row][col] = self.symbols[player_id]

        if check_win(self.board, row, col):
            self.game_over = True
            self.winner = player_id
            self._update_stats(new_game=False)
            return True

        if is_full(self.board):
            self.game_over = True
            self._update_stats(new_game=False)
            return True

        self.current = (self.current + 1) % 2
        return True

    def _update_stats(self, new_game: bool) -> None:
        with self._lock:
            if new_game:
                self.stats.total_games += 1
                self.stats.active_games += 1
            else:
                self.stats.active_games -= 1


class Matchmaker:
    """Pairs players: the first waits, the second gets a game with the first."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._searching: User | None = None
        self._lock = threading.Lock()
        self._rng = rng

    @property
    def searching(self) -> User | None:
        return self._searching

    def find_opponent(self, user: User) -> QuickGame | None:
        """Return a new game if someone was waiting, else queue ``user`` and return None."""
        with self._lock:
            if self._searching is not None:
                game = QuickGame(
                    players=[self._searching, user],
                    stats=QuickGameStats(),
                    rng=self._rng,
                )
                self._searching = None
                return game
            self._searching = user
            return None

    def cancel_search(self, user: User) -> None:
        """Stop waiting if ``user`` is the one waiting."""
        with self._lock:
            if self._searching is not None and self._searching.id == user.id:
                self._searching = None
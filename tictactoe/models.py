"""Data records exchanged between the game server, its clients and its statistics."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

ERR_USER_NOT_FOUND = "user not found"
ERR_GAME_NOT_FOUND = "game not found"
ERR_INVALID_MOVE = "invalid move"
ERR_NOT_YOUR_TURN = "not your turn"
ERR_GAME_FINISHED = "game already finished"

WS_GAME_START = "game_start"
WS_MOVE_MADE = "move_made"
WS_GAME_OVER = "game_over"
WS_OPPONENT_LEFT = "opponent_left"
WS_ERROR = "error"


def _empty_grid(size: int) -> list[list[str]]:
    return [[""] * size for _ in range(size)]


def _copy_grid(grid: list[list[str]]) -> list[list[str]]:
    return [list(row) for row in grid]


@dataclass
class ErrorResponse:
    error: str
    message: str
    code: int

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error, "message": self.message, "code": self.code}


@dataclass
class GameStatePayload:
    board: list[list[str]] = field(default_factory=lambda: _empty_grid(3))
    current: str = ""
    player_symbol: str = ""
    game_over: bool = False
    winner: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "board": _copy_grid(self.board),
            "current": self.current,
            "playerSymbol": self.player_symbol,
            "gameOver": self.game_over,
            "winner": self.winner,
        }


@dataclass
class QuickGameStats:
    total_games: int = 0
    active_games: int = 0
    online_users: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalgames": self.total_games,
            "activegames": self.active_games,
            "onlineusers": self.online_users,
        }


@dataclass
class PlayerStats:
    wins: int = 0
    losses: int = 0
    draws: int = 0
    total_games: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
            "totalgames": self.total_games,
        }


@dataclass
class OfflineStats(PlayerStats):
    current_streak: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "currentstreak": self.current_streak}


@dataclass
class ComputerStats:
    player_win: int = 0
    computer_win: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"playerwin": self.player_win, "computerwin": self.computer_win}


@dataclass
class User:
    id: str
    nickname: str
    online: bool = False
    in_game: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "nickname": self.nickname,
            "online": self.online,
            "ingame": self.in_game,
        }


@dataclass
class UserSession:
    user_id: str
    session_id: str
    conn: Any = field(default=None, repr=False, compare=False)


@dataclass
class WSMessage:
    type: str
    payload: Any = None

    def to_json(self) -> str:
        return json.dumps({"type": self.type, "payload": self.payload})

    @classmethod
    def from_json(cls, text: str | bytes) -> WSMessage:
        """Decode a message; raises ValueError on malformed input."""
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("message must be a JSON object")
        msg_type = data.get("type", "")
        if msg_type is None:
            msg_type = ""
        if not isinstance(msg_type, str):
            raise ValueError("message type must be a string")
        return cls(type=msg_type, payload=data.get("payload"))


@dataclass
class WSGameStartPayload:
    game_id: str
    player_id: str
    symbol: str
    first_turn: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "gameId": self.game_id,
            "playerId": self.player_id,
            "symbol": self.symbol,
            "firstTurn": self.first_turn,
        }


@dataclass
class WSMoveMadePayload:
    row: int
    col: int
    symbol: str

    def to_dict(self) -> dict[str, Any]:
        return {"row": self.row, "col": self.col, "symbol": self.symbol}


@dataclass
class WSGameOverPayload:
    winner: str
    board3x3: list[list[str]] = field(default_factory=lambda: _empty_grid(3))
    board4x4: list[list[str]] = field(default_factory=lambda: _empty_grid(4))

    def to_dict(self) -> dict[str, Any]:
        return {
            "winner": self.winner,
            "board3x3": _copy_grid(self.board3x3),
            "board4x4": _copy_grid(self.board4x4),
        }
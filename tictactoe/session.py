"""Player sessions keyed by a ``session_id`` cookie."""

from __future__ import annotations

import base64
import secrets
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from tictactoe.models import User
from tictactoe.nickname import random_nickname

COOKIE_NAME = "session_id"
COOKIE_MAX_AGE = 86400
_CHARSET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"


@dataclass
class Session:
    session_id: str
    user: User
    conn: Any = field(default=None, repr=False, compare=False)
    created_at: datetime = field(default_factory=datetime.now)


class SessionStore:
    """Thread-safe registry of sessions."""

    def __init__(self, nickname_factory: Callable[[], str] = random_nickname) -> None:
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()
        self._nickname_factory = nickname_factory

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def get_or_create(self, cookies: Mapping[str, str], conn: Any = None) -> Session:
        """Return the session named by the cookie, or a fresh one."""
        with self._lock:
            existing = self._sessions.get(cookies.get(COOKIE_NAME, ""))
            if existing is not None:
                if conn is not None:
                    existing.conn = conn
                existing.user.online = True
                return existing

            session = Session(
                session_id=generate_session_id(),
                user=User(
                    id="user-" + generate_random_string(8),
                    nickname=self._nickname_factory(),
                    online=True,
                    in_game=False,
                ),
                conn=conn,
            )
            self._sessions[session.session_id] = session
            return session

    def get(self, session_id: str) -> Session | None:
        with self._lock:
            return self._sessions.get(session_id)

    def remove(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)


def cookie_attributes(session_id: str, secure: bool) -> dict[str, Any]:
    """Attributes of the cookie that carries a session id."""
    return {
        "name": COOKIE_NAME,
        "value": session_id,
        "path": "/",
        "max_age": COOKIE_MAX_AGE,
        "httponly": True,
        "secure": secure,
        "samesite": "Lax",
    }


def generate_session_id() -> str:
    """URL-safe base64 of 32 random bytes."""
    return base64.urlsafe_b64encode(secrets.token_bytes(32)).decode("ascii")


def generate_random_string(length: int) -> str:
    """Random alphanumeric string of the given length."""
    return "".join(_CHARSET[byte % len(_CHARSET)] for byte in secrets.token_bytes(length))
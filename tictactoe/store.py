"""Game state persisted in Redis."""

from __future__ import annotations

import os
from typing import Any

import redis

from tictactoe import logger

DEFAULT_REDIS_ADDR = "localhost:6379"


class GameStore:
    """Saves and loads serialized game states under ``game:<id>`` keys."""

    def __init__(self, client: Any) -> None:
        self.client = client

    @staticmethod
    def _key(game_id: str) -> str:
        return "game:" + game_id

    def save_game_state(self, game_id: str, state: str) -> None:
        self.client.set(self._key(game_id), state)

    def get_game_state(self, game_id: str) -> str:
        """Return the stored state; raises KeyError if there is none."""
        value = self.client.get(self._key(game_id))
        if value is None:
            raise KeyError(game_id)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value


def connect_redis(addr: str | None = None) -> redis.Redis:
    """Connect to Redis at ``addr`` (or $REDIS_ADDR, or localhost:6379) and ping it."""
    addr = addr or os.environ.get("REDIS_ADDR") or DEFAULT_REDIS_ADDR
    host, sep, port = addr.rpartition(":")
    if not sep:
        host, port = addr, "6379"
    client = redis.Redis(
        host=host or "localhost",
        port=int(port),
        db=0,
        socket_connect_timeout=5,
        socket_timeout=3,
        decode_responses=True,
    )
    try:
        client.ping()
    except redis.RedisError as exc:
        logger.error("Failed to connect to Redis", "error", exc)
        client.close()
        raise
    return client
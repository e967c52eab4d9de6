"""Tic-tac-toe rules for local, computer and online games, with a WebSocket game server."""

__version__ = "0.1.0"
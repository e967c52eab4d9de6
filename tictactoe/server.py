"""HTTP and WebSocket server for online quick games."""

from __future__ import annotations

import asyncio
import os
import random
import time
from pathlib import Path
from typing import Any

from aiohttp import WSMsgType, web

from tictactoe import logger
from tictactoe.logger import setup_logger
from tictactoe.models import GameStatePayload, User, WSMessage
from tictactoe.quickgame import Matchmaker, QuickGame
from tictactoe.session import Session, SessionStore
from tictactoe.store import GameStore, connect_redis


def _parse_move(payload: Any) -> tuple[int, int]:
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValueError("move payload must be an object")
    coords = []
    for key in ("row", "col"):
        value = payload.get(key)
        if value is None:
            value = 0
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"move {key} must be an integer")
        coords.append(value)
    return coords[0], coords[1]


class GameServer:
    """Connections, matchmaking and running games.

    A connection is anything with an ``async send_str(text)`` method.
    """

    def __init__(
        self,
        sessions: SessionStore | None = None,
        matchmaker: Matchmaker | None = None,
        rng: random.Random | None = None,
        store: GameStore | None = None,
    ) -> None:
        self.sessions = sessions or SessionStore()
        self.matchmaker = matchmaker or Matchmaker(rng)
        self.store = store
        self.connections: dict[str, Any] = {}
        self.active_games: dict[str, QuickGame] = {}
        self._games_lock = asyncio.Lock()
        self._rng = rng or random.Random()

    async def _send(self, conn: Any, msg_type: str, payload: Any = None) -> None:
        try:
            text = WSMessage(msg_type, payload).to_json()
        except (TypeError, ValueError) as exc:
            logger.error("Failed to marshal message", "error", exc)
            return
        try:
            await conn.send_str(text)
        except (OSError, RuntimeError) as exc:
            logger.error("Failed to send WebSocket message", "error", exc)

    def _find_game(self, user_id: str) -> tuple[str, QuickGame] | None:
        for game_id, game in self.active_games.items():
            if any(player is not None and player.id == user_id for player in game.players):
                return game_id, game
        return None

    async def websocket_handler(self, request: web.Request) -> web.WebSocketResponse:
        logger.info("New WebSocket connection")
        ws = web.WebSocketResponse()
        await ws.prepare(request)

        session = self.sessions.get_or_create(request.cookies, ws)
        user = session.user
        self.connections[user.id] = ws
        try:
            logger.info("User connected", "nickname", user.nickname, "id", user.id)
            await self._send(ws, "welcome", {
                "userId": user.id,
                "nickname": user.nickname,
                "sessionId": session.session_id,
                "inGame": user.in_game,
            })
            if user.in_game:
                await self._send_reconnect(ws, user)

            async for msg in ws:
                if msg.type in (WSMsgType.TEXT, WSMsgType.BINARY):
                    await self.handle_message(session, msg.data)
                elif msg.type == WSMsgType.ERROR:
                    logger.error("WebSocket receive error", "error", ws.exception())
                    break
        finally:
            self.connections.pop(user.id, None)
            user.online = False
            await self.handle_player_disconnect(user.id)
            await ws.close()
        return ws

    async def _send_reconnect(self, conn: Any, user: User) -> None:
        async with self._games_lock:
            for game_id, game in self.active_games.items():
                if not any(p is not None and p.id == user.id for p in game.players):
                    continue
                opponent = game.get_opponent(user.id)
                current = game.current_player()
                await self._send(conn, "gameReconnect", {
                    "gameId": game_id,
                    "opponent": opponent.nickname if opponent else "",
                    "yourSymbol": game.symbols.get(user.id, ""),
                    "yourTurn": current is not None and current.id == user.id,
                    "board": [list(row) for row in game.board],
                })

    async def handle_message(self, session: Session, text: str | bytes) -> None:
        """Decode one client message and dispatch it."""
        try:
            msg = WSMessage.from_json(text)
        except ValueError as exc:
            logger.error("Failed to unmarshal message", "error", exc)
            return

        logger.info("Received message", "type", msg.type, "payload", msg.payload)

        if msg.type == "findGame":
            await self.handle_find_game(session)
        elif msg.type == "makeMove":
            await self.handle_make_move(session, msg.payload)
        elif msg.type == "cancelSearch":
            await self.handle_cancel_search(session)
        elif msg.type == "playAgain":
            await self.handle_play_again(session)
        elif msg.type == "heartbeat":
            conn = self.connections.get(session.user.id)
            if conn is not None:
                await self._send(conn, "heartbeat", int(time.time()))
        else:
            logger.warn("Unknown message type", "type", msg.type)

    async def handle_find_game(self, session: Session) -> None:
        conn = self.connections.get(session.user.id)
        if conn is None:
            return

        game = self.matchmaker.find_opponent(session.user)
        if game is None:
            await self._send(conn, "searching")
            return

        game_id = f"game-{self._rng.randrange(1000000000)}"
        async with self._games_lock:
            self.active_games[game_id] = game

        game.start()

        for index, player in enumerate(game.players):
            player_conn = self.connections.get(player.id)
            if player_conn is None:
                continue
            await self._send(player_conn, "gameStart", {
                "gameId": game_id,
                "opponent": game.players[1 - index].nickname,
                "yourSymbol": game.symbols[player.id],
                "yourTurn": game.current == index,
            })

    async def handle_make_move(self, session: Session, payload: Any) -> None:
        async with self._games_lock:
            found = self._find_game(session.user.id)
            if found is None:
                return
            game_id, game = found

            try:
                row, col = _parse_move(payload)
            except ValueError as exc:
                logger.error("Failed to unmarshal move payload", "error", exc)
                return

            try:
                valid = game.make_move(session.user.id, row, col)
            except IndexError as exc:
                logger.error("Invalid move", "error", exc)
                return
            if not valid:
                return

            current = game.current_player()
            for player in game.players:
                player_conn = self.connections.get(player.id)
                if player_conn is None:
                    continue
                state = GameStatePayload(
                    board=[list(line) for line in game.board],
                    current=current.id if current else "",
                    player_symbol=game.symbols[player.id],
                    game_over=game.game_over,
                    winner=game.winner,
                )
                await self._send(player_conn, "gameState", state.to_dict())

            if not game.game_over:
                return

            for player in game.players:
                player_conn = self.connections.get(player.id)
                if player_conn is None:
                    continue
                if not game.winner:
                    result = "draw"
                elif game.winner == player.id:
                    result = "win"
                else:
                    result = "loss"
                await self._send(player_conn, "gameOver", {"result": result, "gameId": game_id})

            self.active_games.pop(game_id, None)

    async def handle_cancel_search(self, session: Session) -> None:
        self.matchmaker.cancel_search(session.user)
        conn = self.connections.get(session.user.id)
        if conn is not None:
            await self._send(conn, "searchCancelled")

    async def handle_play_again(self, session: Session) -> None:
        await self.handle_find_game(session)

    async def handle_player_disconnect(self, user_id: str) -> None:
        """End the user's game, if any, and tell the opponent."""
        async with self._games_lock:
            found = self._find_game(user_id)
            if found is None:
                return
            game_id, game = found
            for player in game.players:
                if player.id == user_id:
                    continue
                conn = self.connections.get(player.id)
                if conn is not None:
                    await self._send(conn, "opponentDisconnected")
            self.active_games.pop(game_id, None)


async def health_check(request: web.Request) -> web.Response:
    logger.info("Health check requested")
    return web.json_response({"status": "ok"})


def _static_handler(root: Path):
    async def serve(request: web.Request) -> web.StreamResponse:
        target = (root / request.match_info["path"]).resolve()
        if target != root and root not in target.parents:
            raise web.HTTPNotFound()
        if target.is_dir():
            target = target / "index.html"
        if not target.is_file():
            raise web.HTTPNotFound()
        return web.FileResponse(target)

    return serve


def create_app(
    server: GameServer | None = None, frontend_dir: str | os.PathLike[str] = "./frontend"
) -> web.Application:
    """Application with the health check, the game socket and the static frontend."""
    server = server or GameServer()
    app = web.Application()
    app.router.add_get("/api/health", health_check)
    app.router.add_get("/ws", server.websocket_handler)
    app.router.add_get("/{path:.*}", _static_handler(Path(frontend_dir).resolve()))
    return app


def main(argv: list[str] | None = None) -> int:
    """Connect to Redis and serve on $PORT (default 8080)."""
    log, log_file = setup_logger()
    try:
        client = connect_redis()
        log.info("Redis connected successfully")
        server = GameServer(store=GameStore(client))
        app = create_app(server)

        port = os.environ.get("PORT") or "8080"
        log.info("Server running http://localhost:" + port)
        try:
            web.run_app(app, port=int(port), print=None)
        except (OSError, ValueError) as exc:
            log.error("Failed to start server", extra={"fields": {"error": str(exc)}})
            return 1
        return 0
    finally:
        log_file.close()


if __name__ == "__main__":
    raise SystemExit(main())
import json
import random

import pytest
from aiohttp import test_utils

from tictactoe.server import GameServer, create_app


class FakeConn:
    def __init__(self):
        self.sent = []

    async def send_str(self, text):
        self.sent.append(json.loads(text))

    def types(self):
        return [m["type"] for m in self.sent]


def _connect(server):
    conn = FakeConn()
    session = server.sessions.get_or_create({}, conn)
    server.connections[session.user.id] = conn
    return session, conn


async def _start_game(server):
    a, ca = _connect(server)
    b, cb = _connect(server)
    await server.handle_find_game(a)
    await server.handle_find_game(b)
    (game_id, game), = server.active_games.items()
    by_id = {a.user.id: (a, ca), b.user.id: (b, cb)}
    first = by_id[game.current_player().id]
    second = by_id[game.get_opponent(first[0].user.id).id]
    return game_id, game, first, second


@pytest.mark.asyncio
async def test_find_game_waits_then_starts():
    server = GameServer(rng=random.Random(5))
    a, ca = _connect(server)
    b, cb = _connect(server)
    await server.handle_find_game(a)
    assert ca.types() == ["searching"]
    await server.handle_find_game(b)
    assert ca.types() == ["searching", "gameStart"]
    assert cb.types() == ["gameStart"]
    start_a, start_b = ca.sent[-1]["payload"], cb.sent[-1]["payload"]
    assert start_a["gameId"] == start_b["gameId"]
    assert start_a["gameId"].startswith("game-")
    assert start_a["opponent"] == b.user.nickname
    assert {start_a["yourSymbol"], start_b["yourSymbol"]} == {"X", "O"}
    assert start_a["yourTurn"] != start_b["yourTurn"]


@pytest.mark.asyncio
async def test_find_game_without_connection_does_nothing():
    server = GameServer()
    ghost = server.sessions.get_or_create({})
    await server.handle_find_game(ghost)
    b, cb = _connect(server)
    await server.handle_find_game(b)
    assert cb.types() == ["searching"]
    assert server.active_games == {}


@pytest.mark.asyncio
async def test_move_broadcasts_state():
    server = GameServer(rng=random.Random(2))
    _, game, (fs, fc), (ss, sc) = await _start_game(server)
    await server.handle_make_move(fs, {"row": 1, "col": 2})
    state_f, state_s = fc.sent[-1], sc.sent[-1]
    assert state_f["type"] == "gameState"
    assert state_f["payload"]["board"][1][2] == game.symbols[fs.user.id]
    assert state_f["payload"]["current"] == ss.user.id
    assert state_s["payload"]["playerSymbol"] == game.symbols[ss.user.id]
    assert state_s["payload"]["gameOver"] is False


@pytest.mark.asyncio
async def test_invalid_moves_send_nothing():
    server = GameServer(rng=random.Random(4))
    _, game, (fs, fc), (ss, sc) = await _start_game(server)
    before = len(fc.sent)
    await server.handle_make_move(ss, {"row": 0, "col": 0})
    await server.handle_make_move(fs, "not a move")
    await server.handle_make_move(fs, {"row": 9, "col": 0})
    assert len(fc.sent) == before
    assert all(cell == "" for line in game.board for cell in line)


@pytest.mark.asyncio
async def test_win_sends_results_and_removes_game():
    server = GameServer(rng=random.Random(8))
    game_id, _, (fs, fc), (ss, sc) = await _start_game(server)
    for sess, (r, c) in [(fs, (0, 0)), (ss, (1, 0)), (fs, (0, 1)), (ss, (1, 1)), (fs, (0, 2))]:
        await server.handle_make_move(sess, {"row": r, "col": c})
    assert fc.sent[-1] == {"type": "gameOver", "payload": {"result": "win", "gameId": game_id}}
    assert sc.sent[-1]["payload"]["result"] == "loss"
    assert fc.sent[-2]["payload"]["winner"] == fs.user.id
    assert server.active_games == {}


@pytest.mark.asyncio
async def test_disconnect_notifies_opponent():
    server = GameServer(rng=random.Random(1))
    _, _, (fs, fc), (ss, sc) = await _start_game(server)
    await server.handle_player_disconnect(fs.user.id)
    assert sc.types()[-1] == "opponentDisconnected"
    assert fc.types()[-1] == "gameStart"
    assert server.active_games == {}


@pytest.mark.asyncio
async def test_cancel_search_and_messages():
    server = GameServer()
    a, ca = _connect(server)
    await server.handle_message(a, json.dumps({"type": "findGame"}))
    await server.handle_message(a, json.dumps({"type": "cancelSearch"}))
    assert ca.types() == ["searching", "searchCancelled"]
    assert server.matchmaker.searching is None
    await server.handle_message(a, "{not json")
    await server.handle_message(a, json.dumps({"type": "heartbeat"}))
    assert ca.sent[-1]["type"] == "heartbeat"
    assert isinstance(ca.sent[-1]["payload"], int)


@pytest.mark.asyncio
async def test_health_and_static(tmp_path):
    (tmp_path / "index.html").write_text("<h1>board</h1>")
    app = create_app(GameServer(), tmp_path)
    async with test_utils.TestClient(test_utils.TestServer(app)) as client:
        resp = await client.get("/api/health")
        assert resp.status == 200
        assert await resp.json() == {"status": "ok"}
        page = await client.get("/")
        assert await page.text() == "<h1>board</h1>"
        missing = await client.get("/missing.js")
        assert missing.status == 404


@pytest.mark.asyncio
async def test_websocket_flow(tmp_path):
    server = GameServer(rng=random.Random(3))
    app = create_app(server, tmp_path)
    async with test_utils.TestClient(test_utils.TestServer(app)) as client:
        ws_a = await client.ws_connect("/ws")
        welcome_a = await ws_a.receive_json()
        assert welcome_a["type"] == "welcome"
        assert welcome_a["payload"]["userId"].startswith("user-")
        ws_b = await client.ws_connect("/ws")
        welcome_b = await ws_b.receive_json()
        assert welcome_b["payload"]["userId"] != welcome_a["payload"]["userId"]

        await ws_a.send_str(json.dumps({"type": "findGame"}))
        assert (await ws_a.receive_json())["type"] == "searching"
        await ws_b.send_str(json.dumps({"type": "findGame"}))
        start_a = await ws_a.receive_json()
        start_b = await ws_b.receive_json()
        assert start_a["type"] == start_b["type"] == "gameStart"

        await ws_a.close()
        gone = await ws_b.receive_json()
        assert gone["type"] == "opponentDisconnected"
        await ws_b.close()
# tictactoe

A tic-tac-toe game server and the game logic behind it. The server answers a
JSON health check, serves static files from a frontend directory and runs
online quick matches between two players over a WebSocket. The package also
holds the rules for a game on one device (two players taking turns) and for a
game against a simple computer opponent.

## Installing

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Running the server

```
tictactoe-server
```

On start the server:

- writes a log file `logs/log_<YYYYMMDD_HHMMSS>.log` and mirrors its log to
  standard output;
- connects to Redis at `REDIS_ADDR` (default `localhost:6379`) and pings it,
  stopping with an error if Redis cannot be reached;
- listens on the port in `PORT` (default `8080`).

Routes:

- `GET /api/health` returns `{"status": "ok"}`.
- `GET /ws` is the WebSocket endpoint for online play.
- Any other path is served from `./frontend`; a directory serves its
  `index.html`, and a missing file gives 404.

`tictactoe.server.create_app(server, frontend_dir)` builds the same
`aiohttp` application around a `GameServer` of your own and another frontend
directory.

### WebSocket messages

Every message is a JSON object `{"type": ..., "payload": ...}`.

From the client:

- `findGame` joins matchmaking; `playAgain` does the same.
- `makeMove` with payload `{"row": r, "col": c}` (0 to 2 each).
- `cancelSearch` leaves matchmaking.
- `heartbeat` is answered with a `heartbeat` whose payload is the server's
  Unix time in seconds.

From the server:

- `welcome` on connecting: `userId`, `nickname`, `sessionId`, `inGame`.
- `searching` while waiting for an opponent.
- `gameStart` for each player: `gameId`, `opponent`, `yourSymbol`, `yourTurn`.
  Symbols and the first mover are drawn at random.
- `gameState` after every valid move: `board`, `current` (id of the player to
  move), `playerSymbol`, `gameOver`, `winner` (id of the winner, or empty).
- `gameOver` with `result` (`win`, `loss` or `draw`) and `gameId`; the game
  is then removed.
- `searchCancelled` after `cancelSearch`.
- `opponentDisconnected` when the other player's connection closes; the game
  is removed.
- `gameReconnect` on connecting, for a user marked as in a game.

Invalid moves (wrong turn, taken cell, finished game, off the board) are
ignored. A returning client that sends its `session_id` cookie gets its
earlier session and nickname back.

## Random nicknames

New players get a generated nickname such as `Aigul48213`. To print one:

```
tictactoe-nickname
```

In code: `tictactoe.nickname.random_nickname()`, optionally with a
`random.Random` for repeatable results.

## Using the game logic

```python
from tictactoe.offline import OfflineGame
from tictactoe.computer import ComputerGame

game = OfflineGame()
game.make_move(0, 0)   # X, returns True
game.make_move(0, 0)   # cell taken, returns False
print(game.current, game.stats.to_dict())

vs_cpu = ComputerGame("X")
vs_cpu.start()
vs_cpu.make_player_move(1, 1)  # the computer replies straight away
print(vs_cpu.board, vs_cpu.game_over, vs_cpu.winner)
```

- `OfflineGame`: X always starts; `stats` (`OfflineStats`) counts wins,
  losses and draws from X's side, with a winning streak.
- `ComputerGame(player_symbol)`: X always starts, so with `"O"` the
  computer moves first on `start()`. The computer takes a winning cell if it
  has one, otherwise blocks the player, otherwise plays a random free cell.
  `stats` (`ComputerStats`) counts player and computer wins; a draw counts
  for the computer.
- `tictactoe.quickgame.QuickGame` and `Matchmaker` are the two-player online
  game and the pairing of waiting players used by the server.
- `tictactoe.board` has `new_board`, `check_win` and `is_full`.

Moves return `False` when not allowed; coordinates outside 0–2 raise
`IndexError`.

## What it does not do

- No frontend is included; the server only serves whatever is in
  `./frontend`.
- Sessions, matchmaking and running games live in memory and are lost on
  restart. The server connects to Redis but does not write game state to it;
  `tictactoe.store.GameStore` offers `save_game_state` and `get_game_state`
  for use from your own code.
- The offline and computer games are not reachable through the server, and
  no statistics are stored.
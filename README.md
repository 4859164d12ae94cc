# othellocord

The core of an Othello game service for chat communities: the 8×8 board and
its rules, games kept in SQLite, Elo ratings and a leaderboard, expiring
challenges between players, pacing of bot-versus-bot simulations, slash
command definitions, message embeds, and board images drawn with Pillow.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## The board

```python
from othellocord.board import OthelloBoard, Tile

board = OthelloBoard.initial()
print(board)
print([str(tile) for tile in board.find_current_moves()])

after = board.make_moved(Tile.parse("d3"))
print(after.black_score(), after.white_score())
```

Tiles are written as a column letter and a row number, such as `a1` or `d3`;
`str(tile)` gives the upper-case form, such as `D3`. `Tile.parse` raises
`InvalidTileError` when the text is not a tile. `make_move` changes a board in
place, `make_moved` returns a changed copy.

## Storing boards and move lists

```python
from othellocord.board import OthelloBoard
from othellocord.marshal import marshal_board, unmarshal_board

text = marshal_board(OthelloBoard.initial())   # "b+27wb6bw27"
board = unmarshal_board(text)
```

The first letter tells whose turn it is, and runs of empty squares are
written as numbers. `unmarshal_board` raises `BoardFormatError` on bad input.
`marshal_move_list` and `unmarshal_move_list` do the same for a list of moves,
written as comma-terminated tiles (`A1,B2,`). `OthelloGame.to_ggf` writes a
game in Generic Game Format.

## Games and ratings

```python
from othellocord.board import Tile
from othellocord.db import connect
from othellocord.game import create_game, make_move_validated
from othellocord.player import make_player

conn = connect("othellocord.db")
black = make_player("id1", "Alice")
white = make_player("id2", "Bob")
game = create_game(conn, black, white)
game = make_move_validated(conn, "id1", Tile.parse("d3"))
```

Player ids made only of digits stand for bot players of that level
(`make_bot_player`). `make_move_validated` raises `GameNotFoundError`,
`TurnError` or `InvalidMoveError` when the move cannot be made, and
`create_game` raises `AlreadyPlayingError` when a human player is in a game
already. A game whose side to move, even after passing, has no legal move is
deleted from the store.

`othellocord.stats.update_stats` applies a `GameResult` to both players'
ratings (K = 30, starting at 1500) and win/loss records; `read_stats` and
`read_top_stats` return ratings with player names resolved through a
`UserCache`. Each stored game expires a day after its last move;
`expire_games` removes expired games, and `run_expire_games` calls it on a
timer until a `threading.Event` is set.

## Challenges and simulations

`ChallengeCache.create_challenge` keeps a `Challenge` open for 60 seconds by
default and calls the given callback if it expires; `accept_challenge` returns
whether an open challenge was found. `SimulationCache` holds `SimState`
objects (pause flag and stop signal) by id, stopping them when they expire,
and `receive_simulate` passes `SimPanel` frames from a queue to a callback at
a fixed delay until the queue yields `None`, the simulation is stopped, or it
times out.

## Commands, options and embeds

`othellocord.commands.command_payload()` returns the slash command
definitions as dictionaries ready for registration. `othellocord.options`
reads and checks option values (levels, delays, tiles, players), raising
`OptionError` on bad values. `othellocord.embeds` builds the `Embed` cards and
button rows that replies are made of, and `attach_image` encodes a board image
for upload. `othellocord.render.Renderer` draws boards, legal moves and move
analyses as Pillow images.

## Command-line tools

Create the database schema in `./othellocord.db` (or in the path given):

```
othellocord-schema
```

Draw a sample analysis board and a sample disc to `test_board.png` and
`test_disc.png` in the current directory (`--board` and `--disc` choose other
paths):

```
othellocord-render
```

## What the package does not do

The package does not connect to a chat platform, does not receive or answer
interactions, and does not register its commands itself: it provides the
pieces such a bot is built from. It has no move engine, so bot players'
moves, board analyses and the moves of a simulation are not computed here;
a simulation's frames must be supplied to `receive_simulate` from elsewhere.
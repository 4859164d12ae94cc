"""Games between two players, their storage and their lifecycle."""

from __future__ import annotations

import logging
import sqlite3
import threading
import time
from dataclasses import dataclass, field
from typing import Optional

from othellocord.board import OthelloBoard, Tile
from othellocord.marshal import (
    marshal_board,
    marshal_move_list,
    unmarshal_board,
    unmarshal_move_list,
)
from othellocord.player import Player, make_bot_player, make_player
from othellocord.stats import GameResult, update_stats

logger = logging.getLogger(__name__)

GAME_STORE_TTL = 24 * 60 * 60.0
EXPIRE_INTERVAL = 60.0

_SELECT_GAME = "SELECT board, moves, white_id, black_id, white_name, black_name FROM games"
_GGF_HEADER = "]TY[8]BO[8 ---------------------------O*------*O--------------------------- *]"


class GameNotFoundError(LookupError):
    """The player is not part of any stored game."""

    def __init__(self) -> None:
        super().__init__("game not found")


class AlreadyPlayingError(Exception):
    """One of the players already takes part in a game."""

    def __init__(self) -> None:
        super().__init__("one or more players are already in a game")


class TurnError(Exception):
    """A player tried to move when it was not their turn."""

    def __init__(self) -> None:
        super().__init__("not players turn")


class InvalidMoveError(ValueError):
    """The move is not legal in the current position."""

    def __init__(self) -> None:
        super().__init__("invalid move")


@dataclass
class OthelloGame:
    """A board, its two players and the moves played so far."""

    board: OthelloBoard = field(default_factory=OthelloBoard.initial)
    white_player: Player = field(default_factory=Player)
    black_player: Player = field(default_factory=Player)
    move_list: list[Tile] = field(default_factory=list)
    curr_potential_moves: Optional[list[Tile]] = field(default=None, compare=False, repr=False)

    def make_move(self, move: Tile) -> None:
        """Apply ``move`` to the board and record it."""
        self.board.make_move(move)
        self.move_list.append(move)

    def load_potential_moves(self) -> list[Tile]:
        """Legal moves for the side to move, computed once and cached."""
        if self.curr_potential_moves is None:
            self.curr_potential_moves = self.board.find_current_moves()
        return self.curr_potential_moves

    def reset_potential_moves(self) -> None:
        """Forget the cached legal moves."""
        self.curr_potential_moves = None

    def try_skip_turn(self) -> None:
        """Pass the turn when the side to move has no legal move."""
        if not self.load_potential_moves():
            self.board.is_black_move = not self.board.is_black_move
            self.curr_potential_moves = None

    def is_game_over(self) -> bool:
        return not self.load_potential_moves()

    def current_player(self) -> Player:
        return self.black_player if self.board.is_black_move else self.white_player

    def other_player(self) -> Player:
        return self.white_player if self.board.is_black_move else self.black_player

    def create_result(self) -> GameResult:
        """The result by disc count; a tie is a draw."""
        diff = self.board.black_score() - self.board.white_score()
        if diff > 0:
            return GameResult(winner=self.black_player, loser=self.white_player, is_draw=False)
        if diff < 0:
            return GameResult(winner=self.white_player, loser=self.black_player, is_draw=False)
        return GameResult(winner=self.black_player, loser=self.white_player, is_draw=True)

    def create_forfeit_result(self, forfeit_id: str) -> GameResult:
        """The result when the player with ``forfeit_id`` gives up."""
        if self.white_player.id == forfeit_id:
            return GameResult(winner=self.black_player, loser=self.white_player, is_draw=False)
        if self.black_player.id == forfeit_id:
            return GameResult(winner=self.white_player, loser=self.black_player, is_draw=False)
        return GameResult(is_draw=True)

    def to_ggf(self) -> str:
        """The game in Generic Game Format, for an 8x8 board."""
        moves = "".join(
            f"{'B' if index % 2 == 0 else 'W'}[{move}]" for index, move in enumerate(self.move_list)
        )
        return (
            f"(;GM[Othello]PB[{self.black_player.name}]PW[{self.white_player.name}"
            f"{_GGF_HEADER}{moves})"
        )


def _copy_game(game: OthelloGame) -> OthelloGame:
    return OthelloGame(
        board=game.board.copy(),
        white_player=game.white_player,
        black_player=game.black_player,
        move_list=list(game.move_list),
    )


def _scan_game(row: tuple) -> OthelloGame:
    board_text, moves_text, white_id, black_id, white_name, black_name = row
    return OthelloGame(
        board=unmarshal_board(board_text),
        white_player=make_player(white_id, white_name),
        black_player=make_player(black_id, black_name),
        move_list=unmarshal_move_list(moves_text),
    )


def get_game(conn: sqlite3.Connection, player_id: str) -> OthelloGame:
    """The game ``player_id`` takes part in, as either colour."""
    row = conn.execute(
        f"{_SELECT_GAME} WHERE white_id = :id OR black_id = :id;", {"id": player_id}
    ).fetchone()
    if row is None:
        raise GameNotFoundError()
    game = _scan_game(row)
    logger.info("selected game %s for player %s", game, player_id)
    return game


def check_game_participation(
    conn: sqlite3.Connection, player1_id: str, player2_id: Optional[str]
) -> None:
    """Raise :class:`AlreadyPlayingError` if either player is in a game."""
    (count,) = conn.execute(
        "SELECT COUNT(*) FROM games WHERE white_id = :p1 OR black_id = :p1 "
        "OR white_id = :p2 OR black_id = :p2;",
        {"p1": player1_id, "p2": player2_id},
    ).fetchone()
    if count > 0:
        raise AlreadyPlayingError()


def set_game(conn: sqlite3.Connection, game: OthelloGame, expire_time: float) -> None:
    """Insert or replace ``game``; ``expire_time`` is in seconds since the epoch."""
    conn.execute(
        "INSERT OR REPLACE INTO games "
        "(board, white_id, black_id, white_name, black_name, moves, expire_time) "
        "VALUES (?, ?, ?, ?, ?, ?, ?);",
        (
            marshal_board(game.board),
            game.white_player.id,
            game.black_player.id,
            game.white_player.name,
            game.black_player.name,
            marshal_move_list(game.move_list),
            expire_time,
        ),
    )


def delete_game(conn: sqlite3.Connection, game: OthelloGame) -> None:
    conn.execute(
        "DELETE FROM games WHERE white_id = ? AND black_id = ?;",
        (game.white_player.id, game.black_player.id),
    )


def count_games(conn: sqlite3.Connection) -> int:
    (count,) = conn.execute("SELECT COUNT(*) FROM games;").fetchone()
    return count


def game_expire_time() -> float:
    """When a game stored now expires, in seconds since the epoch."""
    return time.time() + GAME_STORE_TTL


def create_game(conn: sqlite3.Connection, black_player: Player, white_player: Player) -> OthelloGame:
    """Start and store a new game, unless a human player is already playing."""
    game = OthelloGame(board=OthelloBoard.initial(), white_player=white_player, black_player=black_player)
    player2_id = white_player.id if white_player.is_human() else None
    with conn:
        check_game_participation(conn, black_player.id, player2_id)
        set_game(conn, game, game_expire_time())
    logger.info("created and inserted game %s", game)
    return game


def create_bot_game(conn: sqlite3.Connection, black_player: Player, level: int) -> OthelloGame:
    return create_game(conn, black_player, make_bot_player(level))


def make_move(conn: sqlite3.Connection, game: OthelloGame, move: Tile) -> OthelloGame:
    """Play ``move`` and store the game, or delete it once it is over."""
    game = _copy_game(game)
    game.make_move(move)
    game.reset_potential_moves()
    game.try_skip_turn()

    if not game.load_potential_moves():
        delete_game(conn, game)
        return game
    set_game(conn, game, game_expire_time())
    return game


def make_move_validated(conn: sqlite3.Connection, player_id: str, move: Tile) -> OthelloGame:
    """Play ``move`` for ``player_id`` after checking turn and legality."""
    with conn:
        game = get_game(conn, player_id)
        if game.current_player().id != player_id:
            raise TurnError()
        if move not in game.load_potential_moves():
            raise InvalidMoveError()
        return make_move(conn, game, move)


def expire_games(conn: sqlite3.Connection) -> list[OthelloGame]:
    """Remove games past their expiry time and settle their stats."""
    now = time.time()
    with conn:
        rows = conn.execute(f"{_SELECT_GAME} WHERE expire_time < ?;", (now,)).fetchall()
        games = [_scan_game(row) for row in rows]
        conn.execute("DELETE FROM games WHERE expire_time < ?;", (now,))

    for game in games:
        player = game.current_player()
        stats_result = update_stats(conn, GameResult(winner=player, loser=player, is_draw=False))
        logger.info("updated stats result %s", stats_result)
    return games


def run_expire_games(
    conn: sqlite3.Connection, stop_event: threading.Event, interval: float = EXPIRE_INTERVAL
) -> None:
    """Expire games every ``interval`` seconds until ``stop_event`` is set."""
    while not stop_event.wait(interval):
        try:
            expire_games(conn)
        except Exception:
            logger.exception("failed to expire games")
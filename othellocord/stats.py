"""Player ratings, win/loss records and Elo updates."""

from __future__ import annotations

import logging
import sqlite3
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from typing import Protocol

from othellocord.player import Player, make_player

logger = logging.getLogger(__name__)

DEFAULT_ELO = 1500.0
ELO_K = 30

_SELECT_COLUMNS = "player_id, elo, won, lost, drawn"


class UsernameSource(Protocol):
    def get_username(self, player_id: str) -> str: ...


@dataclass(frozen=True)
class GameResult:
    winner: Player = field(default_factory=Player)
    loser: Player = field(default_factory=Player)
    is_draw: bool = False


@dataclass
class StatsRow:
    player_id: str
    elo: float
    won: int = 0
    drawn: int = 0
    lost: int = 0


@dataclass
class Stats:
    player: Player
    elo: float
    won: int = 0
    drawn: int = 0
    lost: int = 0

    def win_rate(self) -> str:
        """Share of games won, formatted like ``%0.50``."""
        total = self.won + self.lost + self.drawn
        rate = self.won / total if total > 0 else 0.0
        return f"%{rate:0.2f}"


def format_elo(elo: float) -> str:
    prefix = "+" if elo >= 0 else ""
    return f"{prefix}{elo:.2f}"


@dataclass(frozen=True)
class StatsResult:
    winner_elo: float
    loser_elo: float
    win_diff: float
    lose_diff: float

    def format_winner_elo_diff(self) -> str:
        return format_elo(self.win_diff)

    def format_loser_elo_diff(self) -> str:
        return format_elo(self.lose_diff)


def default_stats(player_id: str) -> StatsRow:
    return StatsRow(player_id=player_id, elo=DEFAULT_ELO)


def map_stats(row: StatsRow) -> Stats:
    return Stats(
        player=make_player(row.player_id, ""),
        elo=row.elo,
        won=row.won,
        drawn=row.drawn,
        lost=row.lost,
    )


def _row(values: tuple) -> StatsRow:
    player_id, elo, won, lost, drawn = values
    return StatsRow(player_id=player_id, elo=float(elo), won=won, drawn=drawn, lost=lost)


def get_or_insert_stats_default(conn: sqlite3.Connection, default: StatsRow) -> StatsRow:
    """Return the stored stats for ``default.player_id``, inserting ``default`` if none exist."""
    found = conn.execute(
        f"SELECT {_SELECT_COLUMNS} FROM stats WHERE player_id = ?;", (default.player_id,)
    ).fetchone()
    if found is not None:
        stats = _row(found)
    else:
        stats = replace(default)
        conn.execute(
            "INSERT INTO stats (player_id, elo, won, lost, drawn) VALUES (?, ?, ?, ?, ?);",
            (stats.player_id, stats.elo, stats.won, stats.lost, stats.drawn),
        )
        logger.info("inserted stats %s", stats)
    logger.info("selected stats for player %s: %s", stats.player_id, stats)
    return stats


def get_or_insert_stats(conn: sqlite3.Connection, player_id: str) -> StatsRow:
    return get_or_insert_stats_default(conn, default_stats(player_id))


def get_top_stats(conn: sqlite3.Connection, count: int) -> list[StatsRow]:
    """The ``count`` highest rated rows, best first."""
    rows = conn.execute(
        f"SELECT {_SELECT_COLUMNS} FROM stats ORDER BY elo DESC, rowid ASC LIMIT ?;", (count,)
    ).fetchall()
    return [_row(values) for values in rows]


def _update_stat(conn: sqlite3.Connection, stats: StatsRow) -> None:
    conn.execute(
        "UPDATE stats SET elo = ?, won = ?, lost = ?, drawn = ? WHERE player_id = ?;",
        (stats.elo, stats.won, stats.lost, stats.drawn, stats.player_id),
    )


def probability(rating1: float, rating2: float) -> float:
    return 1.0 / (1.0 + 10 ** ((rating1 - rating2) / 400.0))


def calc_elo_won(rating: float, probability: float) -> float:
    return rating + ELO_K * (1.0 - probability)


def calc_elo_lost(rating: float, probability: float) -> float:
    return rating - ELO_K * probability


def update_stats(conn: sqlite3.Connection, result: GameResult) -> StatsResult:
    """Apply a game result to both players' ratings and records."""
    try:
        winner = get_or_insert_stats(conn, result.winner.id)
        loser = get_or_insert_stats(conn, result.loser.id)

        if result.is_draw or result.winner.id == result.loser.id:
            conn.rollback()
            return StatsResult(winner_elo=winner.elo, loser_elo=loser.elo, win_diff=0.0, lose_diff=0.0)

        win_before = winner.elo
        loss_before = loser.elo
        winner.elo = calc_elo_won(winner.elo, probability(loser.elo, winner.elo))
        loser.elo = calc_elo_lost(loser.elo, probability(winner.elo, loser.elo))
        winner.won += 1
        loser.lost += 1

        _update_stat(conn, winner)
        _update_stat(conn, loser)
        conn.commit()
    except BaseException:
        conn.rollback()
        raise

    stats_result = StatsResult(
        winner_elo=winner.elo,
        loser_elo=loser.elo,
        win_diff=winner.elo - win_before,
        lose_diff=loser.elo - loss_before,
    )
    logger.info("updated stats for %s: %s", result, stats_result)
    return stats_result


def read_stats(conn: sqlite3.Connection, users: UsernameSource, player_id: str) -> Stats:
    """Stats for a player, creating default ones and resolving human names."""
    with conn:
        row = get_or_insert_stats(conn, player_id)
    stats = map_stats(row)
    if stats.player.is_human():
        stats.player = replace(stats.player, name=users.get_username(player_id))
    return stats


def read_top_stats(conn: sqlite3.Connection, users: UsernameSource, count: int) -> list[Stats]:
    """The top rated players with their names resolved concurrently."""
    stats_list = [map_stats(row) for row in get_top_stats(conn, count)]
    humans = [stats for stats in stats_list if not stats.player.is_bot()]
    if humans:
        with ThreadPoolExecutor(max_workers=min(8, len(humans))) as pool:
            names = list(pool.map(lambda stats: users.get_username(stats.player.id), humans))
        for stats, name in zip(humans, names):
            stats.player = replace(stats.player, name=name)
    return stats_list
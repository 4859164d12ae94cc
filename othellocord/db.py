"""SQLite schema and connection setup."""

from __future__ import annotations

import argparse
import sqlite3
from typing import Optional, Sequence

DEFAULT_DB = "./othellocord.db"
BUSY_TIMEOUT = 5.0

CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS stats (
    player_id TEXT PRIMARY KEY,
    elo FLOAT NOT NULL,
    won INTEGER NOT NULL,
    drawn INTEGER NOT NULL,
    lost INTEGER NOT NULL
);
CREATE TABLE IF NOT EXISTS games (
    board TEXT NOT NULL,
    white_id TEXT NOT NULL,
    black_id TEXT NOT NULL,
    white_name TEXT NOT NULL,
    black_name TEXT NOT NULL,
    moves TEXT NOT NULL,
    expire_time INTEGER NOT NULL,
    PRIMARY KEY (white_id, black_id)
);
"""


def create_schema(conn: sqlite3.Connection) -> None:
    """Create the stats and games tables if they do not exist."""
    conn.executescript(CREATE_TABLE)


def connect(path: str = DEFAULT_DB) -> sqlite3.Connection:
    """Open the database at ``path`` and make sure the schema exists."""
    conn = sqlite3.connect(path, timeout=BUSY_TIMEOUT, check_same_thread=False)
    create_schema(conn)
    return conn


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="othellocord-schema", description="Create the database schema.")
    parser.add_argument("database", nargs="?", default=DEFAULT_DB, help="path of the SQLite database")
    args = parser.parse_args(argv)
    conn = connect(args.database)
    conn.close()
    return 0
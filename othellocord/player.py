"""Players, bot levels and a time-limited cache of platform users."""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from cachetools import TTLCache

logger = logging.getLogger(__name__)

MIN_BOT_LEVEL = 1
MAX_BOT_LEVEL = 5
USER_CACHE_TTL = 3600.0
_USER_CACHE_SIZE = 10_000

_BOT_ID = re.compile(r"[+-]?[0-9]+")
_DEPTHS = {1: 3, 2: 5, 3: 6, 4: 7, 5: 8}


@dataclass(frozen=True)
class User:
    """A chat platform user as returned by a user fetcher."""

    id: str
    username: str
    avatar_url: str = ""


@dataclass(frozen=True)
class Player:
    """A game participant; a non-zero level marks a bot."""

    id: str = ""
    name: str = ""
    level: int = 0

    def level_to_depth(self) -> int:
        """Search depth used by the engine for this bot's level, 0 if unknown."""
        return _DEPTHS.get(self.level, 0)

    def is_human(self) -> bool:
        return self.level == 0

    def is_bot(self) -> bool:
        return self.level != 0


def _bot_name(level: int) -> str:
    return f"NTest level {level}"


def make_human_player(user: User) -> Player:
    return Player(id=user.id, name=user.username)


def make_bot_player(level: int) -> Player:
    return Player(id=str(level), name=_bot_name(level), level=level)


def make_player(player_id: str, name: str) -> Player:
    """Build a player from stored data; numeric ids denote bots."""
    if _BOT_ID.fullmatch(player_id):
        level = int(player_id)
        return Player(id=player_id, name=_bot_name(level), level=level)
    return Player(id=player_id, name=name)


def is_invalid_bot_level(level: int) -> bool:
    return level < MIN_BOT_LEVEL or level > MAX_BOT_LEVEL


UserFetcher = Callable[[str], User]


class UserCache:
    """Caches users fetched from the platform for a limited time."""

    def __init__(self, fetcher: UserFetcher, ttl: float = USER_CACHE_TTL) -> None:
        self._fetcher = fetcher
        self._cache: TTLCache = TTLCache(maxsize=_USER_CACHE_SIZE, ttl=ttl)
        self._lock = threading.Lock()

    def cached(self, player_id: str) -> Optional[User]:
        """The cached user for ``player_id``, or None if absent or expired."""
        with self._lock:
            return self._cache.get(player_id)

    def get_user(self, player_id: str) -> User:
        """Return the user, fetching and caching it on a miss."""
        user = self.cached(player_id)
        if user is None:
            try:
                user = self._fetcher(player_id)
            except Exception:
                logger.error("failed to fetch user %s", player_id)
                raise
            with self._lock:
                self._cache[player_id] = user
            logger.info("set user %s back into the cache", player_id)
        logger.info("fetched user %s (%s)", user.username, player_id)
        return user

    def get_username(self, player_id: str) -> str:
        return self.get_user(player_id).username

    def get_player(self, player_id: str) -> Player:
        return make_human_player(self.get_user(player_id))
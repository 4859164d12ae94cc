"""Pending challenges between users that expire unless accepted."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable

from othellocord.player import Player

logger = logging.getLogger(__name__)

CHALLENGE_TTL = 60.0


@dataclass(frozen=True)
class Challenge:
    challenged: Player
    challenger: Player

    def key(self) -> str:
        return f"{self.challenged.id},{self.challenger.id}"


class ChallengeCache:
    """Holds open challenges; each one expires after ``ttl`` seconds."""

    def __init__(self, ttl: float = CHALLENGE_TTL) -> None:
        self.ttl = ttl
        self._store: dict[str, threading.Event] = {}
        self._lock = threading.Lock()

    def create_challenge(self, challenge: Challenge, on_expire: Callable[[], None]) -> None:
        """Register a challenge; ``on_expire`` runs if it is not accepted in time."""
        key = challenge.key()
        stop = threading.Event()
        with self._lock:
            self._store[key] = stop
        logger.info("set challenge %s into challenge cache", key)

        def watch() -> None:
            try:
                if stop.wait(self.ttl):
                    logger.info("stopped challenge %s", key)
                    return
                logger.info("expired challenge %s", key)
                with self._lock:
                    if self._store.get(key) is stop:
                        del self._store[key]
                on_expire()
            finally:
                with self._lock:
                    if self._store.get(key) is stop:
                        del self._store[key]

        threading.Thread(target=watch, name=f"challenge-{key}", daemon=True).start()

    def accept_challenge(self, challenge: Challenge) -> bool:
        """Accept an open challenge; False if none exists for it."""
        key = challenge.key()
        with self._lock:
            stop = self._store.pop(key, None)
        if stop is None:
            return False
        stop.set()
        logger.info("accepted challenge %s from challenge cache", key)
        return True
"""State and pacing of bot-versus-bot simulations."""

from __future__ import annotations

import logging
import queue
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from othellocord.board import BOARD_SIZE, ZERO_TILE, Tile
from othellocord.game import OthelloGame

logger = logging.getLogger(__name__)

SIMULATION_TTL = 60 * 60.0
SIM_COUNT = BOARD_SIZE * BOARD_SIZE
_DEFAULT_DELAY = 2.0


@dataclass
class SimState:
    """Pause flag and stop signal shared by a running simulation."""

    stop_event: threading.Event = field(default_factory=threading.Event)
    _paused: bool = field(default=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def is_paused(self) -> bool:
        with self._lock:
            return self._paused

    def toggle_pause(self) -> bool:
        """Flip the pause flag and return the new value."""
        with self._lock:
            self._paused = not self._paused
            return self._paused

    def stop(self) -> None:
        self.stop_event.set()


class SimulationCache:
    """Running simulations by id; expired entries are stopped and dropped."""

    def __init__(self, ttl: float = SIMULATION_TTL) -> None:
        self.ttl = ttl
        self._entries: dict[str, tuple[SimState, float]] = {}
        self._lock = threading.Lock()

    def _purge(self) -> None:
        now = time.monotonic()
        expired = [key for key, (_, deadline) in self._entries.items() if deadline <= now]
        for key in expired:
            state, _ = self._entries.pop(key)
            logger.info("stopping simulation %s", key)
            state.stop()

    def set(self, simulation_id: str, state: SimState) -> None:
        with self._lock:
            self._purge()
            self._entries[simulation_id] = (state, time.monotonic() + self.ttl)

    def get(self, simulation_id: str) -> Optional[SimState]:
        """The state for ``simulation_id``, or None if unknown or expired."""
        with self._lock:
            self._purge()
            entry = self._entries.get(simulation_id)
        return entry[0] if entry is not None else None


@dataclass
class SimPanel:
    """One frame of a simulation: the game after ``move``."""

    game: OthelloGame
    move: Tile = ZERO_TILE
    finished: bool = False


def receive_simulate(
    state: SimState,
    panels: "queue.Queue[Optional[SimPanel]]",
    handle_send: Callable[[SimPanel], None],
    handle_cancel: Callable[[], None],
    do_cancel: Optional[Callable[[], None]] = None,
    delay: float = _DEFAULT_DELAY,
    timeout: float = SIMULATION_TTL,
) -> None:
    """Pass panels to ``handle_send`` one per ``delay`` until done, stopped or timed out.

    A ``None`` in ``panels`` marks the end of the simulation.
    """
    deadline = time.monotonic() + timeout
    while True:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            handle_cancel()
            logger.info("simulation receiver timed out")
            return
        if state.stop_event.wait(min(delay, remaining)):
            if do_cancel is not None:
                do_cancel()
            handle_cancel()
            logger.info("simulation receiver stopped")
            return
        if time.monotonic() >= deadline:
            handle_cancel()
            logger.info("simulation receiver timed out")
            return
        if state.is_paused:
            continue
        panel = panels.get()
        if panel is None:
            logger.info("simulation receiver complete")
            return
        handle_send(panel)
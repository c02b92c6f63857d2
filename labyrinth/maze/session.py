"""Versioned ownership of the live labyrinth.

A session holds exactly one finished :class:`Labyrinth`. Regeneration always
builds from scratch and swaps the whole bundle; nothing is patched in place.
Each swap bumps ``version`` (stamped into the Grid) so readers can detect
that a handle they kept is stale.

Concurrent requests are not queued. Every call to :meth:`regenerate` takes a
ticket; a build that finishes after a newer ticket was issued is discarded
and the newer result wins.
"""

from __future__ import annotations

import hashlib
import random
import threading
from typing import Optional

from ..logging_utils import get_logger
from .config import MazeConfig
from .errors import StaleGridError
from .pipeline import SEED_MAX, Labyrinth, build_labyrinth, new_seed

log = get_logger("labyrinth.maze.session")


def coerce_seed(payload_seed) -> int:
    """Convert a provided seed (int or str) into a bounded non-negative int."""
    if payload_seed is None:
        return new_seed()
    if isinstance(payload_seed, bool):
        raise TypeError("seed must be an int or str")
    if isinstance(payload_seed, int):
        return payload_seed % SEED_MAX
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return new_seed()
        if s.isdigit():
            return int(s) % SEED_MAX
        h = hashlib.sha256(s.encode('utf-8')).digest()
        return int.from_bytes(h[:8], 'big') % SEED_MAX
    raise TypeError(f"seed must be an int or str, got {type(payload_seed).__name__}")


def reconcile_widths(min_width: int, max_width: int, changed: str = "min"):
    """Couple the two width controls so ``min <= max`` always holds.

    Moving ``min`` above ``max`` drags ``max`` up with it; moving ``max``
    below ``min`` drags ``min`` down.
    """
    if changed not in ("min", "max"):
        raise ValueError(f"changed must be 'min' or 'max', got {changed!r}")
    if min_width <= max_width:
        return min_width, max_width
    if changed == "min":
        return min_width, min_width
    return max_width, max_width


class MazeSession:
    def __init__(self, config: Optional[MazeConfig] = None, rng_factory=random.Random):
        self.base_config = config or MazeConfig()
        self._rng_factory = rng_factory
        self._lock = threading.Lock()
        self._current: Optional[Labyrinth] = None
        self._version = 0
        self._ticket = 0

    @property
    def version(self) -> int:
        return self._version

    def current(self) -> Labyrinth:
        with self._lock:
            live = self._current
        if live is None:
            live = self.regenerate(self.base_config)
        return live

    def next_seed(self) -> int:
        """Seed for a plain "regenerate" action: previous seed + 1."""
        with self._lock:
            live = self._current
        if live is None:
            return self.base_config.seed if self.base_config.seed is not None else new_seed()
        return (live.seed + 1) % SEED_MAX

    def regenerate(self, config: Optional[MazeConfig] = None) -> Labyrinth:
        """Build a fresh labyrinth and make it current.

        Returns whichever labyrinth is live once this call completes; when a
        newer request overtook this one that is the newer result.
        """
        cfg = config or self.base_config
        if cfg.seed is None:
            cfg = cfg.with_overrides(seed=new_seed())
        with self._lock:
            self._ticket += 1
            ticket = self._ticket
        # Built outside the lock; the ticket doubles as the grid version
        built = build_labyrinth(cfg, rng=self._rng_factory(cfg.seed), version=ticket)
        with self._lock:
            if self._current is not None and self._current.version > ticket:
                log.info(event="regenerate_superseded", ticket=ticket, live=self._current.version)
                return self._current
            self._current = built
            self._version = ticket
            return built

    def check(self, version) -> Labyrinth:
        """Return the live labyrinth if ``version`` matches it, else raise StaleGridError."""
        live = self.current()
        if version is not None and int(version) != live.version:
            raise StaleGridError(version, live.version)
        return live

    def discard(self) -> None:
        with self._lock:
            self._current = None


__all__ = ["MazeSession", "coerce_seed", "reconcile_widths"]

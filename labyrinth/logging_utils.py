"""Structured event logging for the labyrinth package.

Each call writes one line: key=value pairs by default, or a JSON object when
``LABYRINTH_LOG_JSON`` is set. Both are read per call, as is the threshold
``LABYRINTH_LOG_LEVEL`` (debug/info/warn/error, default info), so tests and
the CLI can flip them without re-creating loggers.

    from labyrinth.logging_utils import get_logger
    log = get_logger("labyrinth.maze")
    log.info(event="maze_generated", seed=42, width=41)

``level``, ``ts`` and ``logger`` are filled in automatically. Fields whose
value is None are dropped.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUTHY = ("1", "true", "yes", "on")


def _threshold() -> int:
    return LEVELS.get(os.getenv("LABYRINTH_LOG_LEVEL", "info").lower(), LEVELS["info"])


def _wants_json() -> bool:
    return os.getenv("LABYRINTH_LOG_JSON", "0").lower() in _TRUTHY


def _kv(key: str, value) -> str:
    if isinstance(value, (int, float)):
        return f"{key}={value}"
    return f"{key}=" + str(value).replace(" ", "_")


def format_record(level: str, fields: dict) -> str:
    record = {"level": level, "ts": int(time.time())}
    record.update((k, v) for k, v in fields.items() if v is not None)
    if _wants_json():
        return json.dumps(record, separators=(",", ":"), default=str)
    return " ".join(_kv(k, v) for k, v in record.items())


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "labyrinth"

    def _emit(self, level: str, fields: dict):
        if LEVELS[level] < _threshold():
            return
        fields.setdefault("logger", self.name)
        stream = sys.stderr if level == "error" else sys.stdout
        print(format_record(level, fields), file=stream)

    def debug(self, **fields):
        self._emit("debug", fields)

    def info(self, **fields):
        self._emit("info", fields)

    def warn(self, **fields):
        self._emit("warn", fields)

    def error(self, **fields):
        self._emit("error", fields)


_loggers: dict = {}


def get_logger(name: str) -> _Logger:
    """Return the shared logger for ``name``."""
    return _loggers.setdefault(name, _Logger(name))


log = get_logger("labyrinth")

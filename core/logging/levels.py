from __future__ import annotations

import logging
from enum import IntEnum


class LogLevel(IntEnum):
    TRACE = 5
    DEBUG = 10
    INFO = 20
    SUCCESS = 25
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


_CUSTOM = (LogLevel.TRACE, LogLevel.SUCCESS)


def register_levels() -> None:
    for level in _CUSTOM:
        if logging.getLevelName(int(level)) != level.name:
            logging.addLevelName(int(level), level.name)


def to_level(value: int | str | None, default: int = logging.INFO) -> int:
    """Map a level name or number to its numeric value; unknown names fall back to *default*."""
    if value is None or value == "":
        return default
    if isinstance(value, int):
        return value
    name = str(value).strip().upper()
    if name in LogLevel.__members__:
        return int(LogLevel[name])
    return default

"""Minimal levelled logging with a replaceable output appender."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity of a log message; higher values are more verbose."""

    OFF = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5


class LogAppender(ABC):
    """Destination that prints log messages."""

    @abstractmethod
    def emit(self, level: LogLevel, message: str) -> None:
        """Output a single message of the given level."""


class ConsoleAppender(LogAppender):
    """Writes messages to standard output prefixed with the level name."""

    def emit(self, level: LogLevel, message: str) -> None:
        level = LogLevel(level)
        if level is LogLevel.OFF:
            raise ValueError("cannot emit a message with level OFF")
        sys.stdout.write(f"[{level.name}] {message}\n")
        sys.stdout.flush()


@dataclass
class _LoggerConfig:
    level: LogLevel = LogLevel.INFO
    appender: LogAppender = field(default_factory=ConsoleAppender)


_config = _LoggerConfig()


def set_log_level(level: LogLevel) -> None:
    """Set the most verbose level that is still printed; OFF silences all."""
    _config.level = LogLevel(level)


def get_log_level() -> LogLevel:
    """Return the current global log level."""
    return _config.level


def set_appender(appender: LogAppender) -> None:
    """Replace the appender used for all messages."""
    _config.appender = appender


def log(level: LogLevel, message: str) -> None:
    """Send a message to the appender if the global level allows it."""
    level = LogLevel(level)
    if _config.level is not LogLevel.OFF and level <= _config.level:
        _config.appender.emit(level, message)
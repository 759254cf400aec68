"""
Structured logging for pathmux.

Extends Python's standard logging with:
- a TRACE level (5) for per-request detail
- [key:value] rendering of extra fields
- optional ANSI colours and microsecond timestamps
- "view" loggers derived from a root logger
- complete disabling with level=False or level="false"
"""

import logging

from .colors import ColorManager
from .config import LogConfig
from .constants import LogConstants
from .exceptions import InvalidLogLevelError, LogError
from .factory import LoggerFactory
from .formatters import LogFormatter
from .logger import Logger

logging.TRACE = LogConstants.CUSTOM_LEVELS["TRACE"]  # type: ignore[attr-defined]
logging.addLevelName(logging.TRACE, "TRACE")  # type: ignore[attr-defined]

LogConstants.LEVEL_NAMES["trace"] = logging.TRACE  # type: ignore[attr-defined]

ColorManager.add_custom_level_colors()


def resolve_level(s: str | int | bool) -> int | bool:
    """
    Resolve log level from string, numeric value, or boolean.

    Raises:
        InvalidLogLevelError: If the log level is invalid
    """
    if isinstance(s, bool):
        return s
    if str(s).isnumeric():
        return int(s)
    name = str(s).lower()
    if name in LogConstants.LEVEL_NAMES:
        return LogConstants.LEVEL_NAMES[name]
    raise InvalidLogLevelError(s)


def create_root_lg(
    level: str | int | bool = "info",
    location: bool | int = False,
    micros: bool = False,
    colors: bool = True,
) -> Logger:
    """
    Create a root logger with the specified configuration.

    Example:
        >>> lg = create_root_lg("debug", colors=False)
    """
    config = LogConfig.from_params(level, location, micros, colors)
    return LoggerFactory.create_root(config)


def create_lg(
    name: str,
    level: str | int | bool,
    location: int = 0,
    micros: bool = False,
    colors: bool = True,
) -> Logger:
    """Create a named logger with its own console handler."""
    config = LogConfig.from_params(level, location, micros, colors)
    return LoggerFactory.create(name, config)


__all__ = [
    "ColorManager",
    "InvalidLogLevelError",
    "LogConfig",
    "LogConstants",
    "LogError",
    "LogFormatter",
    "Logger",
    "LoggerFactory",
    "create_lg",
    "create_root_lg",
    "resolve_level",
]

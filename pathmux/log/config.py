"""
Immutable logger configuration.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .exceptions import LogError


@dataclass(frozen=True)
class LogConfig:
    """
    Immutable configuration for loggers created by LoggerFactory.

    Attributes:
        level: Numeric level, or False to disable logging entirely
        location: Number of caller frames to show (0 hides locations)
        micros: Show sub-millisecond digits in timestamps
        colors: Emit ANSI colours
    """

    level: int | bool = logging.INFO
    location: int = 0
    micros: bool = False
    colors: bool = True

    @staticmethod
    def _resolve_level(level: str | int | bool) -> int | bool:
        """Resolve level parameter to int or False."""
        from .constants import LogConstants
        from .exceptions import InvalidLogLevelError

        if isinstance(level, bool):
            return logging.INFO if level else False
        if isinstance(level, str):
            name = level.lower()
            if name.isnumeric():
                return int(name)
            if name in LogConstants.LEVEL_NAMES:
                return LogConstants.LEVEL_NAMES[name]
            raise InvalidLogLevelError(level)
        return level

    @classmethod
    def from_params(
        cls,
        level: str | int | bool,
        location: bool | int = 0,
        micros: bool = False,
        colors: bool = True,
    ) -> LogConfig:
        """
        Create LogConfig from individual parameters.

        Args:
            level: Level name ("info", "trace", ...), number, or False to disable
            location: Location display depth (True means 1)
            micros: Whether to show microsecond precision
            colors: Whether to enable colored output

        Raises:
            InvalidLogLevelError: If *level* is not a known level name
        """
        return cls(
            level=cls._resolve_level(level),
            location=int(location),
            micros=micros,
            colors=colors,
        )

    @classmethod
    def from_config(
        cls, config_dict: Mapping[str, Any], section: str = "logging"
    ) -> LogConfig:
        """
        Create LogConfig from a (possibly nested) configuration mapping.

        Args:
            config_dict: Configuration mapping, e.g. Config.dict()
            section: Dotted path of the logging section (default: "logging")

        Example:
            config = Config("etc/pathmux.yaml")
            log_config = LogConfig.from_config(config.dict())

        Raises:
            LogError: If the section is present but is not a mapping
        """
        current: Any = config_dict
        for part in section.split("."):
            if isinstance(current, Mapping) and part in current:
                current = current[part]
            else:
                current = {}
                break
        if current is None:
            current = {}
        if not isinstance(current, Mapping):
            raise LogError(f"{section} section must be a mapping", value=current)

        level = current.get("level", "info")
        if level == "false":
            level = False
        return cls.from_params(
            level=level,
            location=current.get("location", 0),
            micros=current.get("microseconds", current.get("micros", False)),
            colors=current.get("colors", True),
        )

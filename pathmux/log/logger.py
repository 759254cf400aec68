"""
Logger class with a TRACE level and structured extra fields.
"""

import logging
from collections import OrderedDict
from collections.abc import Mapping
from typing import Any

from .config import LogConfig
from .constants import LogConstants
from .formatters import EXTRA_ATTR

TRACE = LogConstants.CUSTOM_LEVELS["TRACE"]


class Logger(logging.Logger):
    """
    pathmux logger.

    Differences from logging.Logger:
    - trace() logs below DEBUG, used for per-request routing detail
    - extra fields stay grouped on the record so the formatter can render
      them as [key:value]
    - fields given at construction are added to every record
    - LogConfig(level=False) switches the logger off completely
    - a derived logger (see LoggerFactory.derive) writes through the
      handlers of the root logger it was derived from
    """

    def __init__(
        self,
        name: str,
        config: LogConfig | None = None,
        extra: Mapping[str, Any] | None = None,
    ) -> None:
        """
        Initialize the logger.

        Args:
            name: Logger name, a "/"-separated path by convention
            config: Logger configuration (default: info level)
            extra: Fields added to every record of this logger
        """
        config = config if config is not None else LogConfig()
        off = config.level is False
        super().__init__(name, logging.CRITICAL + 1 if off else int(config.level))
        self._off = off
        self._config = config
        self._fields = extra
        self._root_logger: Logger | None = None

    @property
    def config(self) -> LogConfig:
        return self._config

    @property
    def disabled(self) -> bool:  # type: ignore[override]
        return self._off

    @disabled.setter
    def disabled(self, value: bool) -> None:
        # logging.Logger.__init__ assigns disabled before _off exists
        self._off = value

    def isEnabledFor(self, level: int) -> bool:
        if self._off or not super().isEnabledFor(level):
            return False
        parent = self.parent
        return parent.isEnabledFor(level) if isinstance(parent, Logger) else True

    def setLevel(self, level: int | str) -> None:
        super().setLevel(level)
        self._cache.clear()  # type: ignore[attr-defined]

    def makeRecord(  # type: ignore[override]
        self,
        name: str,
        level: int,
        fn: str,
        lno: int,
        msg: str,
        args: Any,
        exc_info: Any,
        func: str | None = None,
        extra: Mapping[str, Any] | None = None,
        sinfo: str | None = None,
    ) -> logging.LogRecord:
        record = super().makeRecord(
            name, level, fn, lno, msg, args, exc_info, func=func, sinfo=sinfo
        )
        fields: dict[str, Any] = dict(self._fields or {})
        fields.update(extra or {})
        if isinstance(self._fields, OrderedDict) or isinstance(extra, OrderedDict):
            fields = OrderedDict(fields)
        setattr(record, EXTRA_ATTR, fields)
        # Plain attributes too, for formatters that use %(name)s lookups
        for key, value in fields.items():
            record.__dict__.setdefault(key, value)
        return record

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log *msg* at TRACE level (5)."""
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    def callHandlers(self, record: logging.LogRecord) -> None:
        root = self._root_logger
        if root is None:
            super().callHandlers(record)
            return
        for handler in root.handlers:
            if record.levelno >= handler.level:
                handler.handle(record)

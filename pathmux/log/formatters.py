"""
Log formatter rendering structured extra fields.

Output layout::

    [2026-01-02 12:34:56,789] [I] matched route [method:GET] [path:/users/42] [4242] [/pathmux]

The message is padded to a fixed rule width, then every extra field is
rendered as [key:value], followed by the process id and the logger name.
"""

import collections
import logging
import os
from typing import Any

from .colors import ColorManager
from .config import LogConfig
from .constants import LogConstants

EXTRA_ATTR = "__mux__extra"


def _extra_items(record: logging.LogRecord) -> list[tuple[str, Any]]:
    """Extra fields attached by pathmux.log.Logger, sorted unless ordered."""
    extra = getattr(record, EXTRA_ATTR, None)
    if not extra:
        return []
    keys = extra.keys()
    if not isinstance(extra, collections.OrderedDict):
        keys = sorted(keys)
    return [(k, extra[k]) for k in keys]


def _render_value(value: Any) -> str:
    if isinstance(value, BaseException):
        return value.__class__.__name__
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


class PreFormatter(logging.Formatter):
    """Standard formatter with optional sub-millisecond timestamp digits."""

    def __init__(self, fmt: str, micros: bool) -> None:
        self._micros = micros
        super().__init__(fmt)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        s = super().formatTime(record)
        if self._micros:
            micros = int((record.created % 1) * 1000000) % 1000
            s += f".{micros:03d}"
        return s


class LogFormatter(logging.Formatter):
    """
    Console formatter with optional colours and [key:value] extra fields.

    Exceptions passed as extra={"exception": e} are rendered by class name;
    use lg.exception() or exc_info=True for a full traceback.
    """

    def __init__(self, config: LogConfig) -> None:
        super().__init__()
        self._config = config
        self._pre_formatter = PreFormatter(LogConstants.DEFAULT_FORMAT, config.micros)

    @property
    def config(self) -> LogConfig:
        return self._config

    def _rule(self) -> int:
        if self._config.micros:
            return LogConstants.MICRO_RULE_WIDTH
        return LogConstants.DEFAULT_RULE_WIDTH

    def _width(self, record: logging.LogRecord) -> int:
        # "[" + timestamp + "] [" + level + "] " + message
        # asctime is "YYYY-mm-dd HH:MM:SS,mmm", plus ".uuu" with micros
        timestamp_len = 27 if self._config.micros else 23
        return 1 + timestamp_len + 3 + 1 + 2 + len(record.getMessage())

    def _render_location(self, record: logging.LogRecord) -> str:
        if not self._config.location:
            return ""
        name = "./" + os.path.relpath(record.pathname, os.getcwd())
        return f" [{name}:{record.lineno}]"

    def _plain(self, record: logging.LogRecord) -> str:
        fmt = LogConstants.DEFAULT_FORMAT
        fmt += " " * max(1, self._rule() - self._width(record))
        fields = [
            f"[{k}:{_render_value(v)}]".replace("%", "%%")
            for k, v in _extra_items(record)
        ]
        if fields:
            fmt += " ".join(fields) + " "
        fmt += "[%(process)d] [%(name)s]"
        return fmt + self._render_location(record)

    def _colored(self, record: logging.LogRecord) -> str:
        base = ColorManager.get_color_for_level(record.levelno)
        col = base + "m"
        bold = ColorManager.create_bold_color(base)
        reset = ColorManager.RESET

        fmt = col + "[%(asctime)s] [" + bold + "%(levelname).1s" + reset + col + "] "
        fmt += bold + "%(message)s" + reset + col
        fmt += " " * max(1, self._rule() - self._width(record))
        for k, v in _extra_items(record):
            value = _render_value(v).replace("%", "%%")
            fmt += f"{k}[{bold}{value}{reset}{col}] "
        gray = ColorManager.create_gray_level(9) + "m"
        fmt += gray + "[%(process)d] [%(name)s]"
        fmt += self._render_location(record)
        return fmt + reset

    def format(self, record: logging.LogRecord) -> str:
        if self._config.colors:
            fmt = self._colored(record)
        else:
            fmt = self._plain(record)
        self._pre_formatter._fmt = fmt
        self._pre_formatter._style._fmt = fmt
        return self._pre_formatter.format(record)

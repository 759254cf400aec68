"""
Factory for creating and configuring loggers.
"""

import logging
import sys
from collections.abc import Mapping
from typing import Any, TextIO, cast

from .config import LogConfig
from .formatters import LogFormatter
from .logger import Logger


class LoggerFactory:
    """Factory for creating and configuring loggers."""

    @staticmethod
    def create_root(config: LogConfig, logger_class: type[Logger] = Logger) -> Logger:
        """
        Create the root logger ("/") with the specified configuration.

        Example:
            >>> config = LogConfig.from_params(level="info", colors=False)
            >>> lg = LoggerFactory.create_root(config)
            >>> lg.info("serving", extra={"address": ":8080"})
            [2026-01-02 12:34:56,789] [I] serving      [address::8080] [1234] [/]
        """
        return LoggerFactory.create("/", config, logger_class)

    @staticmethod
    def _existing(name: str) -> Logger | None:
        existing = logging.root.manager.loggerDict.get(name)
        if isinstance(existing, Logger):
            return existing
        return None

    @staticmethod
    def create(
        name: str,
        config: LogConfig,
        logger_class: type[Logger] = Logger,
        extra: Mapping[str, Any] | None = None,
        stream: TextIO | None = None,
    ) -> Logger:
        """
        Create a logger with its own console handler.

        Returns the already registered logger when *name* exists.

        Args:
            name: Logger name
            config: Logger configuration
            logger_class: Logger class to use
            extra: Pre-populated extra fields to include in all log records
            stream: Output stream for the console handler (default: stdout)
        """
        existing = LoggerFactory._existing(name)
        if existing is not None:
            return existing

        lg = logger_class(name, config, extra)
        handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        if config.level is not False:
            handler.setLevel(cast(int, config.level))
        handler.setFormatter(LogFormatter(config))
        lg.addHandler(handler)
        lg.propagate = False
        lg.parent = logging.root

        logging.root.manager.loggerDict[name] = lg
        lg.trace("created logger", extra={"level": logging.getLevelName(lg.level)})
        return lg

    @staticmethod
    def derive(parent: Logger, tags: str | list[str]) -> Logger:
        """
        Derive a "view" logger that delegates to the root's handlers.

        Examples:
            >>> root = LoggerFactory.create_root(config)  # name: "/"
            >>> LoggerFactory.derive(root, "net").name
            '/net'
            >>> LoggerFactory.derive(root, ["router", "match"]).name
            '/router/match'

        Args:
            parent: Parent logger instance
            tags: Single tag string OR list of tag strings to form hierarchy
        """
        if isinstance(tags, str):
            tags = [tags]
        prefix = parent.name if parent.name.endswith("/") else parent.name + "/"
        name = prefix + "/".join(tags)

        existing = LoggerFactory._existing(name)
        if existing is not None:
            return existing

        root = parent._root_logger if parent._root_logger else parent
        lg = parent.__class__(name, parent.config)
        lg.setLevel(logging.NOTSET)
        lg.disabled = parent.disabled
        lg._root_logger = root
        lg.parent = parent
        lg.propagate = False

        logging.root.manager.loggerDict[name] = lg
        lg.trace("derived logger", extra={"root": root.name})
        return lg

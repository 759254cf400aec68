"""
Unified exception hierarchy for pathmux.

Every pathmux-specific error derives from MuxError, so callers can catch all
router, configuration and server failures with a single except clause.
"""

from typing import Any


class MuxError(Exception):
    """
    Base exception for all pathmux errors.

    Example:
        try:
            router.start(":8080")
        except MuxError as e:
            lg.error(f"router error: {e}")
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class NoRouteMatched(MuxError):  # noqa: N818
    """
    No registered route has both a matching method and segment count.

    Raised by Matcher.lookup(). The dispatcher turns it into a 404 response
    and never retries.
    """

    def __init__(self, method: str, path: str) -> None:
        super().__init__("no route matched", method=method, path=path)
        self.method = method
        self.path = path


class RouteTableFrozenError(MuxError):
    """Raised when a route is registered after the table stopped accepting routes."""

    def __init__(self, method: str, pattern: str) -> None:
        super().__init__(
            "route table is frozen, register routes before serving",
            method=method,
            pattern=pattern,
        )


class ConfigError(MuxError):
    """
    Configuration-related errors.

    Examples:
        - Config file not found
        - Invalid YAML syntax
        - Invalid configuration value type
    """

    pass


class ServerError(MuxError):
    """
    Server-related errors.

    Examples:
        - Server startup failed
        - Port already in use
        - Request handler error
    """

    pass

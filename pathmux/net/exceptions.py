"""
Custom exceptions for the pathmux.net package.

Kept in their own module so tcp.py and http.py can both import them without
circular imports.
"""

from ..exceptions import ServerError


class ServerStartupError(ServerError):
    """Raised when the server fails to start (bad address, bind failure)."""

    pass


class ServerShutdownError(ServerError):
    """Raised when the server fails to shutdown gracefully."""

    pass


class HandlerError(ServerError):
    """Raised when a request handler encounters an error."""

    pass

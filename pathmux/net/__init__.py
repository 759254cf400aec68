"""Network components: threaded HTTP server and request handler."""

from .exceptions import (
    HandlerError,
    ServerShutdownError,
    ServerStartupError,
)
from .http import Dispatcher
from .http import RequestHandler as HTTPRequestHandler
from .tcp import Server, parse_address

__all__ = [
    # Server
    "Server",
    "HTTPRequestHandler",
    "Dispatcher",
    "parse_address",
    # Exceptions
    "ServerStartupError",
    "ServerShutdownError",
    "HandlerError",
]

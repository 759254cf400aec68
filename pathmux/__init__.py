"""
pathmux: a minimal HTTP request router with path parameters.

Example:
    from pathmux import Router, get_param

    router = Router()

    def show_user(request, writer):
        writer.json({"id": get_param(request, "id")})

    router.get("/users/:id", show_user)
    router.start(":8080")
"""

from importlib.metadata import PackageNotFoundError, version

from .config import Config, MuxConfig
from .exceptions import (
    ConfigError,
    MuxError,
    NoRouteMatched,
    RouteTableFrozenError,
    ServerError,
)
from .http import Request, ResponseWriter, not_found
from .net import HandlerError, Server, ServerShutdownError, ServerStartupError
from .router import Router
from .routing import MatchResult, Params, Route, RouteTable, get_param

try:
    __version__ = version("pathmux")
except PackageNotFoundError:
    # Package not installed (development checkout)
    __version__ = "0.1.0-dev"

__all__ = [
    "__version__",
    # Core
    "Router",
    "Route",
    "RouteTable",
    "MatchResult",
    "Params",
    "get_param",
    # HTTP
    "Request",
    "ResponseWriter",
    "not_found",
    "Server",
    # Configuration
    "Config",
    "MuxConfig",
    # Exceptions
    "MuxError",
    "NoRouteMatched",
    "RouteTableFrozenError",
    "ConfigError",
    "ServerError",
    "ServerStartupError",
    "ServerShutdownError",
    "HandlerError",
]

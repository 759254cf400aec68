"""
Router: route registration, dispatch and serving.

Usage::

    router = Router(lg)

    def show_user(request, writer):
        writer.json({"id": get_param(request, "id")})

    router.get("/users/:id", show_user)
    router.start(":8080")

Routes are matched in registration order by method and segment count only;
see pathmux.routing.matcher for the exact rules and the literal_segments
option.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING

from .exceptions import NoRouteMatched
from .http.request import Request
from .http.response import ResponseWriter, not_found
from .log import LogConfig, Logger, LoggerFactory
from .net.tcp import Server
from .routing.matcher import Matcher
from .routing.route import Handler, MatchResult, Route
from .routing.table import RouteTable

if TYPE_CHECKING:
    from .config import MuxConfig


def _quiet_lg() -> Logger:
    return LoggerFactory.create("/pathmux", LogConfig(level=False))


class Router:
    """
    Owns a route table and dispatches requests to the first matching route.

    The table is built during a registration phase. start() and server()
    freeze it, after which the router is shared read-only between request
    threads and further registrations raise RouteTableFrozenError.
    """

    def __init__(self, lg: Logger | None = None, literal_segments: bool = False):
        """
        Initialize the router.

        Args:
            lg: Logger (optional, a disabled logger is used when omitted)
            literal_segments: Also require static pattern segments to equal
                the request segment (default: compare segment counts only)
        """
        self._lg = lg if lg is not None else _quiet_lg()
        self._table = RouteTable()
        self._matcher = Matcher(self._table, literal_segments=literal_segments)

    @classmethod
    def from_config(cls, config: "MuxConfig", lg: Logger | None = None) -> "Router":
        """Build a router with the matching options of *config*."""
        return cls(lg=lg, literal_segments=config.literal_segments)

    @property
    def lg(self) -> Logger:
        return self._lg

    @property
    def table(self) -> RouteTable:
        return self._table

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes in registration order."""
        return self._table.all()

    @property
    def literal_segments(self) -> bool:
        return self._matcher.literal_segments

    def register(self, method: str, pattern: str, handler: Handler) -> Route:
        """
        Register a handler for method and pattern.

        Raises:
            RouteTableFrozenError: If the router is already serving
        """
        route = self._table.register(method, pattern, handler)
        self._lg.trace(
            "registered route",
            extra={"method": method, "pattern": pattern, "handler": route.handler_name},
        )
        return route

    def get(self, pattern: str, handler: Handler) -> Route:
        return self.register("GET", pattern, handler)

    def post(self, pattern: str, handler: Handler) -> Route:
        return self.register("POST", pattern, handler)

    def put(self, pattern: str, handler: Handler) -> Route:
        return self.register("PUT", pattern, handler)

    def patch(self, pattern: str, handler: Handler) -> Route:
        return self.register("PATCH", pattern, handler)

    def delete(self, pattern: str, handler: Handler) -> Route:
        return self.register("DELETE", pattern, handler)

    def head(self, pattern: str, handler: Handler) -> Route:
        return self.register("HEAD", pattern, handler)

    def options(self, pattern: str, handler: Handler) -> Route:
        return self.register("OPTIONS", pattern, handler)

    def route(self, method: str, pattern: str) -> Callable[[Handler], Handler]:
        """
        Decorator form of register().

        Example:
            @router.route("GET", "/health")
            def health(request, writer):
                writer.json({"status": "ok"})
        """

        def decorator(handler: Handler) -> Handler:
            self.register(method, pattern, handler)
            return handler

        return decorator

    def match(self, method: str, path: str) -> MatchResult | None:
        """Return the route and parameters a request would get, or None."""
        return self._matcher.match(method, path)

    def dispatch(self, request: Request, writer: ResponseWriter) -> Route | None:
        """
        Serve one request.

        Invokes the first matching route's handler exactly once with a copy of
        the request carrying the bound parameters. Handler exceptions
        propagate to the caller. Without a match a 404 is written and no
        handler runs.

        Returns:
            The route that handled the request, or None for a 404
        """
        try:
            result = self._matcher.lookup(request.method, request.path)
        except NoRouteMatched as e:
            self._lg.debug("no route matched", extra=e.context)
            not_found(writer)
            return None

        route = result.route
        self._lg.trace(
            "matched route",
            extra={
                "method": request.method,
                "path": request.path,
                "pattern": route.pattern,
            },
        )
        route.handler(request.with_params(result.params), writer)
        return route

    def server(self, address: str) -> Server:
        """
        Freeze the route table and bind a server without serving yet.

        Raises:
            ServerStartupError: If the address is invalid or cannot be bound
        """
        self._table.freeze()
        server = Server(LoggerFactory.derive(self._lg, "net"), address, self)
        return server.bind()

    def start(self, address: str) -> int:
        """
        Freeze the route table, bind address and serve until interrupted.

        Args:
            address: Listen address such as ":8080" or "127.0.0.1:8000"

        Returns:
            int: Exit code (0 for success)

        Raises:
            ServerStartupError: If the address is invalid or cannot be bound
        """
        self._lg.info(
            "starting router", extra={"address": address, "routes": len(self._table)}
        )
        return self.server(address).run()

    def __repr__(self) -> str:
        return f"<Router routes={len(self._table)} frozen={self._table.frozen}>"

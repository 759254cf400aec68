"""
HTTP request handler bridging http.server to a pathmux dispatcher.

Every HTTP method is handled the same way: the raw request is turned into a
pathmux Request and a ResponseWriter, the server's dispatcher is called, and
the response is finished. Routing decisions, including the 404, belong to the
dispatcher.
"""

import http.server
from typing import Any, Protocol, cast

from ..http.request import Request
from ..http.response import ResponseWriter
from .exceptions import HandlerError


class Dispatcher(Protocol):
    """Anything with a dispatch(request, writer) method, e.g. pathmux.Router."""

    def dispatch(self, request: Request, writer: ResponseWriter) -> Any: ...


class ServerWithDispatcher(Protocol):
    """Server interface expected by RequestHandler."""

    _dispatcher: Dispatcher
    _lg: Any


class RequestHandler(http.server.BaseHTTPRequestHandler):
    """
    Translates one HTTP request into a dispatcher call.

    Attributes:
        server: Server instance with _dispatcher and _lg attributes
    """

    server_version = "pathmux"

    def _read_body(self) -> bytes:
        length = self.headers.get("Content-Length")
        if not length:
            return b""
        try:
            size = int(length)
        except ValueError:
            return b""
        return self.rfile.read(size) if size > 0 else b""

    def _build_request(self) -> Request:
        client = self.client_address
        return Request.from_target(
            method=self.command,
            target=self.path,
            headers=self.headers.items(),
            body=self._read_body(),
            client=(client[0], client[1]) if client else None,
        )

    def _handle(self) -> None:
        """
        Dispatch the current request.

        Raises:
            HandlerError: If the dispatched handler raised
        """
        server = cast(ServerWithDispatcher, self.server)
        request = self._build_request()
        writer = ResponseWriter(self, omit_body=self.command == "HEAD")
        try:
            server._dispatcher.dispatch(request, writer)
        except Exception as e:
            server._lg.error(
                "request handler error",
                extra={"method": request.method, "path": request.path, "exception": e},
            )
            if not writer.headers_sent:
                self.send_error(500, "Internal Server Error")
            raise HandlerError(
                f"{request.method} request handler failed: {e}",
                method=request.method,
                path=request.path,
            ) from e
        writer.finish()

    def __getattr__(self, name: str) -> Any:
        # http.server looks up do_<METHOD>; every method goes to the dispatcher
        if name.startswith("do_"):
            return self._handle
        raise AttributeError(name)

    def log_message(self, format: str, *args: Any) -> None:
        """Route http.server's access log through the application logger."""
        server = cast(ServerWithDispatcher, self.server)
        server._lg.trace(format % args, extra={"client": self.address_string()})

"""
Threaded TCP server running the pathmux HTTP request handler.

Each accepted connection is served on its own thread, so handlers run
concurrently. The dispatcher they share must be read-only while serving;
pathmux.Router freezes its route table before it builds a server.

Example Usage:
    router = Router(lg)
    router.get("/users/:id", show_user)

    with Server(lg, ":8080", router) as server:
        server.serve_forever()
"""

import socket
import socketserver
from typing import Any

from .exceptions import ServerShutdownError, ServerStartupError
from .http import Dispatcher, RequestHandler


def parse_address(address: str) -> tuple[str, int]:
    """
    Split a listen address into (host, port).

    Accepted forms::

        ":8080"           -> ("", 8080)       all interfaces
        "localhost:8080"  -> ("localhost", 8080)
        "127.0.0.1:0"     -> ("127.0.0.1", 0)  ephemeral port
        "[::1]:8080"      -> ("::1", 8080)

    Raises:
        ServerStartupError: If the address has no port or the port is invalid
    """
    host, sep, port_str = address.rpartition(":")
    if not sep:
        raise ServerStartupError("address must be host:port", address=address)
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        port = int(port_str)
    except ValueError:
        raise ServerStartupError("invalid port", address=address) from None
    if not 0 <= port <= 65535:
        raise ServerStartupError("port out of range", address=address)
    return host, port


class _Server(socketserver.ThreadingMixIn, socketserver.TCPServer):
    """
    Internal threaded TCP server.

    Holds the logger and dispatcher the request handler reads, and reports
    handler failures through the application logger instead of stderr.
    """

    allow_reuse_address = True
    daemon_threads = True

    def __init__(
        self,
        lg: Any,
        dispatcher: Dispatcher,
        server_address: tuple[str, int],
        handler_class: type[RequestHandler] = RequestHandler,
    ) -> None:
        """
        Bind the listening socket.

        Raises:
            ServerStartupError: If the socket cannot be bound
        """
        self._lg = lg
        self._dispatcher = dispatcher
        host = server_address[0]
        if ":" in host:
            self.address_family = socket.AF_INET6
        try:
            super().__init__(server_address, handler_class)
        except OSError as e:
            self._lg.error(
                "failed to bind server socket",
                extra={"host": host, "port": server_address[1], "exception": e},
            )
            raise ServerStartupError(
                f"Server initialization failed: {e}",
                host=host,
                port=server_address[1],
            ) from e
        self._lg.debug("TCP server initialized", extra={"address": self.server_address})

    def handle_error(self, request: Any, client_address: Any) -> None:
        self._lg.error(
            "error while serving request",
            extra={"client": client_address},
            exc_info=True,
        )


class Server:
    """
    HTTP server for a pathmux dispatcher.

    The socket is bound by bind() (called implicitly by serve_forever() and
    the context manager), so a bind failure surfaces as ServerStartupError
    before any request is served.

    Example:
        server = Server(lg, "127.0.0.1:0", router)
        server.bind()
        host, port = server.server_address
        threading.Thread(target=server.serve_forever, daemon=True).start()
        ...
        server.shutdown()
    """

    def __init__(self, lg: Any, address: str, dispatcher: Dispatcher) -> None:
        """
        Initialize the server.

        Args:
            lg: Logger instance for server operations
            address: Listen address, see parse_address()
            dispatcher: Object whose dispatch(request, writer) serves requests

        Raises:
            ServerStartupError: If the address is invalid
            ValueError: If lg or dispatcher is None
        """
        if lg is None:
            raise ValueError("Logger cannot be None")
        if dispatcher is None:
            raise ValueError("Dispatcher cannot be None")
        self._lg = lg
        self._address = address
        self._host, self._port = parse_address(address)
        self._dispatcher = dispatcher
        self._httpd: _Server | None = None

    @property
    def address(self) -> str:
        return self._address

    @property
    def server_address(self) -> tuple[str, int]:
        """Bound (host, port); the real port when ":0" was requested."""
        if self._httpd is None:
            return self._host, self._port
        host, port = self._httpd.server_address[:2]
        return str(host), int(port)

    def bind(self) -> "Server":
        """
        Bind the listening socket. Idempotent.

        Raises:
            ServerStartupError: If the socket cannot be bound
        """
        if self._httpd is None:
            self._httpd = _Server(self._lg, self._dispatcher, (self._host, self._port))
        return self

    def serve_forever(self, poll_interval: float = 0.5) -> None:
        """
        Serve until shutdown() is called or the process is interrupted.

        Raises:
            ServerStartupError: If the socket cannot be bound
            ServerShutdownError: If serving stops on an unexpected error
        """
        httpd = self.bind()._httpd
        assert httpd is not None
        host, port = self.server_address
        self._lg.info("serving...", extra={"host": host or "*", "port": port})
        try:
            httpd.serve_forever(poll_interval=poll_interval)
        except KeyboardInterrupt:
            self._lg.info("keyboard interrupt, exiting server...")
        except Exception as e:
            self._lg.error("HTTP server error", extra={"exception": e})
            raise ServerShutdownError(f"HTTP server error: {e}") from e
        finally:
            self.close()

    def shutdown(self) -> None:
        """Stop serve_forever() from another thread and wait for it."""
        if self._httpd is not None:
            self._httpd.shutdown()

    def close(self) -> None:
        """Close the listening socket."""
        if self._httpd is None:
            return
        try:
            self._httpd.server_close()
            self._lg.info("closed server")
        except OSError as e:
            self._lg.error("error during server shutdown", extra={"exception": e})
            raise ServerShutdownError(f"Server close failed: {e}") from e
        finally:
            self._httpd = None

    def run(self) -> int:
        """
        Bind and serve until interrupted.

        Returns:
            int: Exit code (0 for success)
        """
        self.serve_forever()
        return 0

    def __enter__(self) -> "Server":
        return self.bind()

    def __exit__(self, *exc: Any) -> None:
        self.close()

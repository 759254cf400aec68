"""
Response writer handed to handlers.

The writer streams straight to the transport: headers go out on the first
write_header() or write() call and the body is written as it is produced.
Handlers own the whole response; the dispatcher never writes after the
handler returns, except finish() which sends a bare 200 for handlers that
wrote nothing.
"""

from __future__ import annotations

import json
from typing import Any, BinaryIO, Protocol

NOT_FOUND_BODY = "404 page not found\n"


class Transport(Protocol):
    """The subset of http.server.BaseHTTPRequestHandler a writer needs."""

    wfile: BinaryIO

    def send_response(self, code: int, message: str | None = None) -> None: ...

    def send_header(self, keyword: str, value: str) -> None: ...

    def end_headers(self) -> None: ...


class ResponseWriter:
    """
    Writes a single HTTP response.

    Example:
        def show_user(request, writer):
            writer.json({"id": get_param(request, "id")})

        def teapot(request, writer):
            writer.headers["Content-Type"] = "text/plain"
            writer.write_header(418)
            writer.write("short and stout")
    """

    def __init__(self, transport: Transport, omit_body: bool = False) -> None:
        """
        Initialize the writer.

        Args:
            transport: Where the status line, headers and body are written
            omit_body: Send status and headers only, as for a HEAD request
        """
        self._transport = transport
        self._omit_body = omit_body
        self.headers: dict[str, str] = {}
        self._status: int | None = None
        self._bytes_written = 0

    @property
    def status(self) -> int | None:
        """Status code sent, or None if headers were not sent yet."""
        return self._status

    @property
    def headers_sent(self) -> bool:
        return self._status is not None

    @property
    def bytes_written(self) -> int:
        return self._bytes_written

    def write_header(self, status: int) -> None:
        """
        Send the status line and pending headers.

        Only the first call has an effect; later calls are ignored because
        the status line is already on the wire.
        """
        if self._status is not None:
            return
        self._status = status
        self._transport.send_response(status)
        for name, value in self.headers.items():
            self._transport.send_header(name, value)
        self._transport.end_headers()

    def write(self, data: bytes | str) -> int:
        """
        Write body data, sending a 200 status first if none was sent.

        With omit_body the data is accepted but not sent.

        Returns:
            Number of bytes written
        """
        if isinstance(data, str):
            data = data.encode("utf-8")
        if self._status is None:
            self.write_header(200)
        if self._omit_body:
            return len(data)
        self._transport.wfile.write(data)
        self._bytes_written += len(data)
        return len(data)

    def text(
        self,
        body: str,
        status: int = 200,
        content_type: str = "text/plain; charset=utf-8",
    ) -> None:
        """Write a complete text response."""
        payload = body.encode("utf-8")
        self.headers.setdefault("Content-Type", content_type)
        self.headers["Content-Length"] = str(len(payload))
        self.write_header(status)
        self.write(payload)

    def json(self, obj: Any, status: int = 200) -> None:
        """Write a complete JSON response."""
        payload = json.dumps(obj).encode("utf-8")
        self.headers["Content-Type"] = "application/json"
        self.headers["Content-Length"] = str(len(payload))
        self.write_header(status)
        self.write(payload)

    def finish(self) -> None:
        """Make sure a status line went out, then flush."""
        if self._status is None:
            self.headers.setdefault("Content-Length", "0")
            self.write_header(200)
        flush = getattr(self._transport.wfile, "flush", None)
        if flush is not None:
            flush()


def not_found(writer: ResponseWriter) -> None:
    """Answer with the plain-text 404 used when no route matches."""
    writer.headers["X-Content-Type-Options"] = "nosniff"
    writer.text(NOT_FOUND_BODY, status=404)

"""
Helpers for testing handlers and routers without a socket.

Example:
    recorder = ResponseRecorder()
    router.dispatch(Request.from_target("GET", "/users/42"), recorder.writer())
    assert recorder.status == 200
    assert recorder.json() == {"id": "42"}
"""

import io
import json
from typing import Any

from .http.request import Request
from .http.response import ResponseWriter
from .routing.route import Route


class ResponseRecorder:
    """
    In-memory transport recording what a ResponseWriter sends.

    Implements the send_response/send_header/end_headers/wfile subset of
    http.server.BaseHTTPRequestHandler.
    """

    def __init__(self) -> None:
        self.wfile = io.BytesIO()
        self.status: int | None = None
        self.headers: dict[str, str] = {}
        self.headers_ended = False

    def send_response(self, code: int, message: str | None = None) -> None:
        self.status = code

    def send_header(self, keyword: str, value: str) -> None:
        self.headers[keyword] = value

    def end_headers(self) -> None:
        self.headers_ended = True

    def writer(self, omit_body: bool = False) -> ResponseWriter:
        return ResponseWriter(self, omit_body=omit_body)

    @property
    def body(self) -> bytes:
        return self.wfile.getvalue()

    def text(self) -> str:
        return self.body.decode("utf-8")

    def json(self) -> Any:
        return json.loads(self.body)


def dispatch(
    router: Any,
    method: str,
    target: str,
    headers: dict[str, str] | None = None,
    body: bytes = b"",
) -> tuple[ResponseRecorder, Route | None]:
    """
    Dispatch a synthetic request through *router*.

    Returns:
        (recorder, route) where route is None when the router answered 404
    """
    recorder = ResponseRecorder()
    writer = recorder.writer(omit_body=method == "HEAD")
    request = Request.from_target(method, target, headers=headers, body=body)
    route = router.dispatch(request, writer)
    writer.finish()
    return recorder, route

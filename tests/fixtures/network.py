"""
Network fixtures: a live pathmux server on an ephemeral port.
"""

import threading
import urllib.error
import urllib.request
from collections.abc import Callable, Generator
from dataclasses import dataclass

import pytest

from pathmux import Router, Server


@dataclass
class HTTPResult:
    """Status, headers and body of a response received over the network."""

    status: int
    headers: dict[str, str]
    body: bytes

    def text(self) -> str:
        return self.body.decode("utf-8")


def http_request(
    base_url: str,
    method: str,
    path: str,
    body: bytes | None = None,
    headers: dict[str, str] | None = None,
) -> HTTPResult:
    """Send one request with urllib and return the response, errors included."""
    req = urllib.request.Request(
        base_url + path, data=body, method=method, headers=headers or {}
    )
    # Local server; ignore any proxy configured in the environment
    opener = urllib.request.build_opener(urllib.request.ProxyHandler({}))
    try:
        with opener.open(req, timeout=5) as resp:
            return HTTPResult(resp.status, dict(resp.headers.items()), resp.read())
    except urllib.error.HTTPError as e:
        with e:
            return HTTPResult(e.code, dict(e.headers.items()), e.read())


@dataclass
class LiveServer:
    server: Server
    base_url: str

    def request(self, method: str, path: str, **kwargs) -> HTTPResult:
        return http_request(self.base_url, method, path, **kwargs)


@pytest.fixture
def serve() -> Generator[Callable[[Router], LiveServer], None, None]:
    """
    Start routers on 127.0.0.1 with an ephemeral port.

    Usage:
        def test_x(serve):
            live = serve(router)
            assert live.request("GET", "/health").status == 200
    """
    started: list[tuple[Server, threading.Thread]] = []

    def start(router: Router) -> LiveServer:
        server = router.server("127.0.0.1:0")
        thread = threading.Thread(
            target=server.serve_forever, kwargs={"poll_interval": 0.05}, daemon=True
        )
        thread.start()
        started.append((server, thread))
        host, port = server.server_address
        return LiveServer(server=server, base_url=f"http://{host}:{port}")

    yield start

    for server, thread in started:
        server.shutdown()
        thread.join(timeout=5)

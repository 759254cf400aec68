"""
Immutable HTTP request.

A Request is built once per incoming HTTP request by the transport. The
dispatcher attaches the bound path parameters with with_params(), which
returns a copy; the original request is never mutated.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from urllib.parse import unquote, urlsplit

from ..routing.params import Params


def _normalize_headers(
    headers: Mapping[str, str] | Iterable[tuple[str, str]] | None,
) -> dict[str, str]:
    """Lower-case header names. Later duplicates replace earlier ones."""
    if headers is None:
        return {}
    items = headers.items() if isinstance(headers, Mapping) else headers
    return {name.lower(): value for name, value in items}


@dataclass(frozen=True)
class Request:
    """
    An HTTP request as seen by a handler.

    Attributes:
        method: Request method, exactly as received (case preserved)
        path: Decoded URL path without the query string
        headers: Header mapping with lower-cased names
        body: Raw request body
        target: Raw request target as sent by the client (path + query)
        client: (host, port) of the peer, when known
        params: Path parameters bound by the dispatcher, None outside a dispatch
    """

    method: str
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    target: str = ""
    client: tuple[str, int] | None = None
    params: Params | None = None

    @classmethod
    def from_target(
        cls,
        method: str,
        target: str,
        headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
        body: bytes = b"",
        client: tuple[str, int] | None = None,
    ) -> Request:
        """
        Build a request from a raw request target such as "/users/42?x=1".

        The path is percent-decoded and the query string is dropped. An
        origin-form target ("/...") is taken as a path even when it starts
        with "//"; only absolute-form targets are split as URLs.
        """
        if target.startswith("/"):
            raw_path = target.split("?", 1)[0].split("#", 1)[0]
        else:
            raw_path = urlsplit(target).path
        path = unquote(raw_path) or "/"
        return cls(
            method=method,
            path=path,
            headers=_normalize_headers(headers),
            body=body,
            target=target,
            client=client,
        )

    def with_params(self, params: Params) -> Request:
        """Return a copy of this request carrying *params*."""
        return dataclasses.replace(self, params=params)

    def header(self, name: str, default: str | None = None) -> str | None:
        """Case-insensitive header lookup."""
        return self.headers.get(name.lower(), default)

    @property
    def content_type(self) -> str | None:
        return self.header("content-type")

    def text(self, encoding: str = "utf-8") -> str:
        """Decode the body as text."""
        return self.body.decode(encoding)

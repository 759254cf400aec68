"""Route and MatchResult frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .params import Params

# handler(request, writer) -> None
Handler = Callable[[Any, Any], None]


@dataclass(frozen=True)
class Route:
    """
    A registered (method, pattern, handler) triple.

    Immutable once registered. The pattern is stored verbatim; it is only
    interpreted by the matcher.
    """

    method: str
    pattern: str
    handler: Handler

    @property
    def handler_name(self) -> str:
        """Qualified name of the handler, for listings and log lines."""
        return getattr(self.handler, "__qualname__", None) or repr(self.handler)


@dataclass(frozen=True)
class MatchResult:
    """Result of a successful route lookup."""

    route: Route
    params: Params

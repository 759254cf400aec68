"""
Route matching by segment count.

The matcher scans the route table linearly, in registration order, and picks
the first route whose method equals the request method and whose pattern has
as many segments as the request path. Parameter segments (":name") bind the
request segment at the same index.

Known limitation:
    Static segments are not compared. "/users/:id" and "/posts/:id" have the
    same shape, so a GET for "/posts/5" selects whichever of the two was
    registered first. Pass literal_segments=True to require static segments
    to be equal to the request segment.

Normalization differs between the two sides:
    - request paths are trimmed of leading and trailing slashes
    - patterns are trimmed of leading and trailing spaces, split on "/" and the
      first element (empty for a leading slash) is dropped
"""

from collections.abc import Sequence

from ..exceptions import NoRouteMatched
from .params import Params
from .route import MatchResult, Route
from .table import RouteTable

PARAM_PREFIX = ":"


def split_request_path(path: str) -> list[str]:
    """
    Split a request path into segments.

    Examples::

        "/users/42"  -> ["users", "42"]
        "/users/42/" -> ["users", "42"]
        "/"          -> [""]
    """
    return path.strip("/").split("/")


def split_pattern(pattern: str) -> list[str]:
    """
    Split a route pattern into segments.

    Examples::

        "/users/:id"  -> ["users", ":id"]
        " /users/ "   -> ["users", ""]
        "users/:id"   -> [":id"]
        ""            -> []
    """
    return pattern.strip(" ").split("/")[1:]


def is_param(segment: str) -> bool:
    return segment.startswith(PARAM_PREFIX)


def is_structural_match(
    pattern_segments: Sequence[str],
    request_segments: Sequence[str],
    literal: bool = False,
) -> bool:
    """
    Check whether a pattern can serve a request path.

    With literal=False only the segment counts are compared. With literal=True
    every non-parameter segment must also equal the request segment.
    """
    if len(pattern_segments) != len(request_segments):
        return False
    if not literal:
        return True
    return all(
        is_param(seg) or seg == value
        for seg, value in zip(pattern_segments, request_segments)
    )


def bind_params(
    pattern_segments: Sequence[str], request_segments: Sequence[str]
) -> Params:
    """
    Bind parameter names to request values by position.

    A name repeated in the pattern keeps the value of its last occurrence.
    """
    values: dict[str, str] = {}
    for index, seg in enumerate(pattern_segments):
        if is_param(seg):
            values[seg[len(PARAM_PREFIX) :]] = request_segments[index]
    return Params(values)


class Matcher:
    """
    Linear-scan matcher over a RouteTable.

    The matcher holds no per-request state, so one instance can serve
    concurrent lookups once the table is frozen.
    """

    __slots__ = ("_literal", "_table")

    def __init__(self, table: RouteTable, literal_segments: bool = False) -> None:
        self._table = table
        self._literal = literal_segments

    @property
    def literal_segments(self) -> bool:
        return self._literal

    def _candidates(self, method: str) -> list[Route]:
        return [r for r in self._table.all() if r.method == method]

    def match(self, method: str, path: str) -> MatchResult | None:
        """
        Find the first route serving (method, path).

        Returns:
            MatchResult with the route and its bound parameters, or None
        """
        request_segments = split_request_path(path)
        for route in self._candidates(method):
            pattern_segments = split_pattern(route.pattern)
            if is_structural_match(pattern_segments, request_segments, self._literal):
                return MatchResult(
                    route=route,
                    params=bind_params(pattern_segments, request_segments),
                )
        return None

    def lookup(self, method: str, path: str) -> MatchResult:
        """
        Like match(), but raise NoRouteMatched instead of returning None.

        Raises:
            NoRouteMatched: If no route has the method and segment count
        """
        result = self.match(method, path)
        if result is None:
            raise NoRouteMatched(method, path)
        return result

"""
Ordered route table.

Routes are appended in registration order and that order decides ties: the
first structurally compatible route wins. The table is built during a
registration phase and frozen before serving starts, after which it is shared
read-only between request threads.
"""

from collections.abc import Iterator

from ..exceptions import RouteTableFrozenError
from .route import Handler, Route


class RouteTable:
    """Stores registered routes in insertion order."""

    __slots__ = ("_frozen", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._frozen = False

    def register(self, method: str, pattern: str, handler: Handler) -> Route:
        """
        Append a route to the end of the table.

        The pattern is not validated: empty patterns, repeated parameter names
        and patterns without a leading slash are stored as given.

        Args:
            method: HTTP method, compared case-sensitively at dispatch
            pattern: Path pattern such as "/users/:id"
            handler: Callable invoked as handler(request, writer)

        Returns:
            The registered Route

        Raises:
            RouteTableFrozenError: If the table was frozen by freeze()
        """
        if self._frozen:
            raise RouteTableFrozenError(method, pattern)
        route = Route(method=method, pattern=pattern, handler=handler)
        self._routes.append(route)
        return route

    def all(self) -> tuple[Route, ...]:
        """Return the routes in registration order as a read-only snapshot."""
        return tuple(self._routes)

    def freeze(self) -> None:
        """End the registration phase. Idempotent."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __iter__(self) -> Iterator[Route]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._routes)

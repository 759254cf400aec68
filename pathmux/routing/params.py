"""
Per-request parameter sets and the parameter accessor.

A Params instance is built fresh for every dispatch and attached to the
request handed to the handler. It is a read-only mapping, so a handler cannot
leak state into another request through it.
"""

from collections.abc import Iterator, Mapping
from typing import Any


class Params(Mapping[str, str]):
    """Immutable mapping from parameter name to bound path value."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values) if values else {}

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Params):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self._values == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._values.items()))

    def __repr__(self) -> str:
        return f"Params({self._values!r})"

    def to_dict(self) -> dict[str, str]:
        """Return a plain dict copy."""
        return dict(self._values)


EMPTY_PARAMS = Params()


def get_param(request: Any, name: str) -> str:
    """
    Return the path parameter *name* bound for *request*.

    Returns an empty string when the name was not bound or when the request
    carries no parameter set at all (for example a handler called outside a
    dispatch). Never raises.

    Example:
        # route "/users/:id", request "/users/123"
        get_param(request, "id")  # -> "123"
    """
    params = getattr(request, "params", None)
    if not isinstance(params, Mapping):
        return ""
    value = params.get(name)
    return value if isinstance(value, str) else ""

"""Routing: ordered route table, segment-count matcher and parameter sets."""

from .matcher import (
    Matcher,
    bind_params,
    is_structural_match,
    split_pattern,
    split_request_path,
)
from .params import EMPTY_PARAMS, Params, get_param
from .route import Handler, MatchResult, Route
from .table import RouteTable

__all__ = [
    "EMPTY_PARAMS",
    "Handler",
    "MatchResult",
    "Matcher",
    "Params",
    "Route",
    "RouteTable",
    "bind_params",
    "get_param",
    "is_structural_match",
    "split_pattern",
    "split_request_path",
]

"""Command-line interface."""

from .cli import build_parser, load_router, main

__all__ = ["build_parser", "load_router", "main"]

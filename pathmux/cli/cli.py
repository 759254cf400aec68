#!/usr/bin/env python3
"""
pathmux CLI - serve and inspect routers.

Usage:
    pathmux serve examples.users_api:create_router --address :8080
    pathmux routes examples.users_api:router
    pathmux match examples.users_api:router GET /users/42
    pathmux --help

APP is "module:attribute". The attribute is either a Router or a factory
called as factory(config=MuxConfig, lg=Logger) that returns one.
"""

import argparse
import importlib
import os
import sys
from collections.abc import Sequence
from typing import Any, TextIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

import pathmux

from ..config import Config, MuxConfig
from ..exceptions import MuxError
from ..log import LogConfig, Logger, LoggerFactory
from ..router import Router
from ..routing import Matcher


def load_router(app: str, config: MuxConfig, lg: Logger | None = None) -> Router:
    """
    Import "module:attribute" and return the Router it names.

    Raises:
        MuxError: If the module or attribute cannot be found or is not a router
    """
    module_name, _, attr = app.partition(":")
    attr = attr or "router"
    if os.getcwd() not in sys.path:
        sys.path.insert(0, os.getcwd())
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise MuxError("cannot import application module", app=app, error=e) from e

    target = getattr(module, attr, None)
    if target is None:
        raise MuxError("application attribute not found", app=app)
    if isinstance(target, Router):
        return target
    if callable(target):
        router = target(config=config, lg=lg)
        if isinstance(router, Router):
            return router
    raise MuxError("application is not a Router or Router factory", app=app)


def _load_config(args: argparse.Namespace) -> MuxConfig:
    overrides: dict[str, Any] = {}
    config = Config(args.config)
    if getattr(args, "address", None):
        overrides.setdefault("server", {})["address"] = args.address
    if getattr(args, "literal_segments", False):
        overrides.setdefault("router", {})["literal_segments"] = True
    if getattr(args, "log_level", None):
        overrides.setdefault("logging", {})["level"] = args.log_level
    for section, values in overrides.items():
        current = config.get(section)
        merged = dict(current) if isinstance(current, dict) else {}
        merged.update(values)
        config[section] = merged
    return MuxConfig.from_config(config)


def _cmd_serve(args: argparse.Namespace, console: Console) -> int:
    settings = _load_config(args)
    lg = LoggerFactory.create_root(settings.log)
    router = load_router(args.app, settings, lg)
    if settings.literal_segments and not router.literal_segments:
        # A prebuilt router keeps the matching mode it was created with
        raise MuxError(
            "application router does not match static segments literally",
            app=args.app,
        )
    return router.start(settings.address)


def _cmd_routes(args: argparse.Namespace, console: Console) -> int:
    settings = _load_config(args)
    router = load_router(args.app, settings)
    table = Table(title=f"routes ({args.app})")
    table.add_column("#", justify="right")
    table.add_column("method")
    table.add_column("pattern")
    table.add_column("handler")
    for index, route in enumerate(router.routes, 1):
        table.add_row(
            str(index),
            escape(route.method),
            escape(route.pattern),
            escape(route.handler_name),
        )
    console.print(table)
    return 0


def _cmd_match(args: argparse.Namespace, console: Console) -> int:
    settings = _load_config(args)
    router = load_router(args.app, settings)
    literal = settings.literal_segments or router.literal_segments
    result = Matcher(router.table, literal_segments=literal).match(
        args.method, args.path
    )
    if result is None:
        console.print(
            f"{args.method} {args.path}: no route matched (404)",
            markup=False,
            emoji=False,
        )
        return 1
    console.print(
        f"{args.method} {args.path} -> {result.route.method} {result.route.pattern} "
        f"({result.route.handler_name})",
        markup=False,
        emoji=False,
    )
    for name, value in result.params.items():
        console.print(f"  {name} = {value!r}", markup=False, emoji=False)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathmux", description="Serve and inspect pathmux routers"
    )
    parser.add_argument(
        "--version", action="version", version=f"pathmux {pathmux.__version__}"
    )
    parser.add_argument("-c", "--config", help="YAML configuration file")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="serve an application")
    serve.add_argument("app", help="module:attribute of a Router or factory")
    serve.add_argument("-a", "--address", help="listen address, e.g. :8080")
    serve.add_argument("-l", "--log-level", help="log level (trace, debug, info, ...)")
    serve.add_argument(
        "--literal-segments",
        action="store_true",
        help="require static pattern segments to match literally",
    )
    serve.set_defaults(func=_cmd_serve)

    routes = sub.add_parser("routes", help="list registered routes")
    routes.add_argument("app", help="module:attribute of a Router or factory")
    routes.set_defaults(func=_cmd_routes)

    match = sub.add_parser("match", help="show which route a request selects")
    match.add_argument("app", help="module:attribute of a Router or factory")
    match.add_argument("method", help="request method, case-sensitive")
    match.add_argument("path", help="request path")
    match.add_argument(
        "--literal-segments",
        action="store_true",
        help="require static pattern segments to match literally",
    )
    match.set_defaults(func=_cmd_match)

    return parser


def main(argv: Sequence[str] | None = None, stdout: TextIO | None = None) -> int:
    """Main entry point for the pathmux CLI."""
    args = build_parser().parse_args(argv)
    console = Console(file=stdout if stdout is not None else sys.stdout)
    try:
        return int(args.func(args, console))
    except MuxError as e:
        lg = LoggerFactory.create("/pathmux/cli", LogConfig(colors=False))
        lg.error("command failed", extra={"command": args.command, "error": e})
        return 2


if __name__ == "__main__":
    sys.exit(main())

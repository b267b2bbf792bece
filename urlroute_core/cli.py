"""urlroute CLI - inspect, parse and redact URLs against a route table.

Entry point registered as ``urlroute`` in ``pyproject.toml``::

    [project.scripts]
    urlroute = "urlroute_core.cli:main"
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from typing import List, Optional

from urlroute_core.config import ConfigError, build_parser, build_redactor, load_config
from urlroute_core.metrics.collector import MetricsCollector
from urlroute_core.redaction.logging import configure_logging
from urlroute_core.redaction.redactor import Redacted
from urlroute_core.routing.router import RouteAction, RouteParser

logger = logging.getLogger(__name__)

SAMPLE_URLS = (
    "/feature/123",
    "/feature/456",
    "/feature/789",
    "/profile",
    "/settings",
)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for the ``urlroute`` command."""
    parser = argparse.ArgumentParser(
        prog="urlroute",
        description="Resolve and redact URLs against a fixed route table.",
    )
    parser.add_argument("--config", default=None, help="YAML or JSON config file")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("routes", help="List the active route table")

    parse_parser = subparsers.add_parser("parse", help="Resolve URLs to routes")
    parse_parser.add_argument("urls", nargs="+", help="Paths or full URLs")
    parse_parser.add_argument("--json", action="store_true", help="Emit JSON lines")

    redact_parser = subparsers.add_parser("redact", help="Print redacted URLs")
    redact_parser.add_argument("urls", nargs="+", help="Paths or full URLs")

    bench_parser = subparsers.add_parser(
        "bench", help="Time a parse-once update/log/check cycle"
    )
    bench_parser.add_argument("--rounds", type=int, default=1000, help="Cycles per URL")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = load_config(args.config)
    except (ConfigError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    metrics = MetricsCollector()
    try:
        route_parser = build_parser(config, metrics)
        redactor = build_redactor(config, route_parser, metrics)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    configure_logging(config.log_level, config.log_format, redactor)

    if args.command == "routes":
        return _run_routes(route_parser)
    if args.command == "parse":
        return _run_parse(route_parser, args.urls, args.json)
    if args.command == "redact":
        for url in args.urls:
            result = redactor.redact(url)
            print(result.value if isinstance(result, Redacted) else "-")
        return 0
    return _run_bench(route_parser, metrics, args.rounds)


def _run_routes(route_parser: RouteParser) -> int:
    rows = route_parser.describe()
    if not rows:
        print("No routes registered.")
        return 1

    width = max(len(row["template"]) for row in rows)
    width = max(width, 8)  # "TEMPLATE" header
    print(f"{'TEMPLATE':<{width}}  PATTERN")
    for row in rows:
        print(f"{row['template']:<{width}}  {row['pattern']}")
    for rejected in route_parser.rejected:
        print(f"rejected #{rejected.position}: {rejected.error}", file=sys.stderr)
    return 0


def _run_parse(route_parser: RouteParser, urls: List[str], as_json: bool) -> int:
    for url in urls:
        route = route_parser.parse(url)
        if as_json:
            print(json.dumps({
                "url": url,
                "route": route.path if route else None,
                "parameters": dict(route.parameters) if route else {},
            }))
        elif route is None:
            print(f"{url} -> (no match)")
        else:
            params = " ".join(f"{k}={v}" for k, v in route.parameters.items())
            print(f"{url} -> {route.path} {params}".rstrip())
    return 0


def _update(action: RouteAction) -> None:
    if action.route:
        logger.debug(f"Updated to route {action.route.path}")


def _log_tap(action: RouteAction) -> None:
    if action.route:
        logger.debug(f"Logged tap on {action.route.path}")


def _check_permissions(action: RouteAction) -> None:
    if action.route:
        logger.debug(f"Checked permissions for {action.route.path}")


def _run_bench(route_parser: RouteParser, metrics: MetricsCollector, rounds: int) -> int:
    if rounds < 1:
        print("Error: --rounds must be positive", file=sys.stderr)
        return 1

    start = time.perf_counter()
    for url in SAMPLE_URLS:
        for _ in range(rounds):
            action = route_parser.action(url)
            _update(action)
            _log_tap(action)
            _check_permissions(action)
    elapsed_ms = (time.perf_counter() - start) * 1000

    cycles = rounds * len(SAMPLE_URLS)
    parses = sum(metrics.parses.get_all().values())
    print(f"Cycles: {cycles}")
    print(f"Parses: {int(parses)}")
    print(f"Total time: {elapsed_ms:.2f}ms")
    print(f"Average per cycle: {elapsed_ms / cycles * 1000:.2f}us")
    return 0


__all__ = ["main"]

"""urlroute - URL route resolution and redaction.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

urlroute resolves URLs against a fixed, ordered route table:
- Patterns compiled once, at construction
- First declared match wins
- Named parameter extraction
- Single-pass URL redaction
- Parse-once action bundles for dependent operations

Architecture Overview:
┌─────────────────────────────────────────────────────────────────────────────┐
│                               urlroute                                       │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                              │
│  ┌───────────────────────────────────────────────────────────────────────┐  │
│  │                          Resolution Path                               │  │
│  │   URL ──▶ path ──▶ RouteMatcher 1..n (in order) ──▶ Route | None      │  │
│  └───────────────────────────────────────────────────────────────────────┘  │
│                                                                              │
│  ┌─────────────────┐  ┌─────────────────┐  ┌─────────────────────────────┐ │
│  │    Routing      │  │   Redaction     │  │        Ambient              │ │
│  │                 │  │                 │  │                             │ │
│  │ - Compiler      │  │ - URLRedactor   │  │ - Config (YAML/JSON/env)    │ │
│  │ - RouteMatcher  │  │ - ClientRoute   │  │ - Counters                  │ │
│  │ - RouteParser   │  │ - Aggregate     │  │ - Redacting log filter      │ │
│  │ - Route/Action  │  │ - Redacted/N.A. │  │ - CLI                       │ │
│  └─────────────────┘  └─────────────────┘  └─────────────────────────────┘ │
│                                                                              │
└─────────────────────────────────────────────────────────────────────────────┘

Usage:
    from urlroute_core import RouteParser, ClientRouteRedactor, AggregateRedactor

    parser = RouteParser(["/home", "/feature/:id"])
    parser.parse("https://example.com/feature/123")
    # Route(path='/feature/:id', parameters={'id': '123'})

    redactor = AggregateRedactor([ClientRouteRedactor(parser)])
    redactor.redact("/feature/123")   # Redacted(value='/feature/:id')
    redactor.redact("/unknown")       # NotApplicable
"""

__version__ = "0.1.0"
__author__ = "BlackRoad OS, Inc."

# Routing
from urlroute_core.routing.router import (
    DEFAULT_ROUTES,
    Route,
    RouteAction,
    RouteDefinition,
    RouteParser,
)
from urlroute_core.routing.matcher import (
    CompiledPattern,
    PatternCompileError,
    PatternCompiler,
    RouteMatcher,
)

# Redaction
from urlroute_core.redaction.redactor import (
    ClientRouteRedactor,
    NotApplicable,
    Redacted,
    RedactionResult,
    URLRedactor,
)
from urlroute_core.redaction.aggregate import AggregateRedactor
from urlroute_core.redaction.logging import RedactingFilter, configure_logging

# Metrics
from urlroute_core.metrics.collector import MetricsCollector

# Config
from urlroute_core.config import (
    Config,
    ConfigError,
    build_parser,
    build_redactor,
    load_config,
)

__all__ = [
    # Version
    "__version__",
    # Routing
    "DEFAULT_ROUTES",
    "Route",
    "RouteAction",
    "RouteDefinition",
    "RouteParser",
    "CompiledPattern",
    "PatternCompileError",
    "PatternCompiler",
    "RouteMatcher",
    # Redaction
    "URLRedactor",
    "ClientRouteRedactor",
    "AggregateRedactor",
    "Redacted",
    "NotApplicable",
    "RedactionResult",
    "RedactingFilter",
    "configure_logging",
    # Metrics
    "MetricsCollector",
    # Config
    "Config",
    "ConfigError",
    "load_config",
    "build_parser",
    "build_redactor",
]

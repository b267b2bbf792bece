"""Routing module - Route compilation and resolution."""

from urlroute_core.routing.matcher import (
    CompiledPattern,
    PatternCompileError,
    PatternCompiler,
    RouteMatcher,
    compile_template,
)
from urlroute_core.routing.router import (
    DEFAULT_ROUTES,
    RejectedRoute,
    Route,
    RouteAction,
    RouteDefinition,
    RouteParser,
)

__all__ = [
    "CompiledPattern",
    "PatternCompileError",
    "PatternCompiler",
    "RouteMatcher",
    "compile_template",
    "DEFAULT_ROUTES",
    "RejectedRoute",
    "Route",
    "RouteAction",
    "RouteDefinition",
    "RouteParser",
]

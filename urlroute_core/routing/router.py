"""Router - Ordered route resolution.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from urlroute_core.metrics.collector import MetricsCollector
from urlroute_core.routing.matcher import (
    PatternCompileError,
    PatternCompiler,
    RouteMatcher,
    compile_template,
)
from urlroute_core.utils.helpers import extract_path, render_template, template_parameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Route:
    """A resolved route: template path plus extracted parameters."""

    path: str
    parameters: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    def __hash__(self) -> int:
        return hash((self.path, frozenset(self.parameters.items())))

    def __repr__(self) -> str:
        return f"Route(path={self.path!r}, parameters={dict(self.parameters)!r})"

    @property
    def url(self) -> str:
        """Concrete path rebuilt from the template and parameter values."""
        return render_template(self.path, values=self.parameters)


@dataclass(frozen=True)
class RouteAction:
    """A triggering event bundled with its parsed route.

    Built once per event by RouteParser.action() and handed to every
    dependent operation (state update, analytics, permission check).
    """

    url: str
    route: Optional[Route]
    payload: Any = None

    @property
    def is_resolved(self) -> bool:
        return self.route is not None


@dataclass(frozen=True)
class RouteDefinition:
    """Construction input for one matcher.

    When ``pattern`` is omitted it is derived from the template. When
    ``parameter_names`` is omitted the template's ``:name`` segments are
    used, in order.
    """

    template: str
    pattern: Optional[str] = None
    parameter_names: Optional[Tuple[str, ...]] = None

    @classmethod
    def coerce(cls, entry: "RouteEntry") -> "RouteDefinition":
        """Build a definition from any accepted route entry form.

        Accepted forms:
        - RouteDefinition
        - "/feature/:id" (template only)
        - (pattern, template)
        - (pattern, parameter_names, template)
        """
        if isinstance(entry, RouteDefinition):
            return entry
        if isinstance(entry, str):
            return cls(template=entry)
        if isinstance(entry, (tuple, list)):
            if len(entry) == 2:
                pattern, template = entry
                return cls(template=template, pattern=pattern)
            if len(entry) == 3:
                pattern, names, template = entry
                if isinstance(names, str):
                    names = (names,)
                return cls(template=template, pattern=pattern, parameter_names=tuple(names))
        raise PatternCompileError(entry, "unsupported route entry")

    def build(self, compiler: PatternCompiler) -> RouteMatcher:
        """Compile this definition into a matcher."""
        if not isinstance(self.template, str):
            raise PatternCompileError(self.template, "template must be a string")

        if self.pattern is None:
            pattern_text, names = compile_template(self.template)
        else:
            pattern_text, names = self.pattern, template_parameters(self.template)

        if self.parameter_names is not None:
            names = list(self.parameter_names)

        return RouteMatcher(compiler.compile(pattern_text), self.template, names)


RouteEntry = Union[RouteDefinition, str, Tuple[str, str], Tuple[str, Sequence[str], str]]


@dataclass(frozen=True)
class RejectedRoute:
    """A route entry dropped at construction."""

    position: int
    entry: Any
    error: PatternCompileError


DEFAULT_ROUTES: Tuple[RouteDefinition, ...] = (
    RouteDefinition("/home", r"^/home$"),
    RouteDefinition("/profile", r"^/profile$"),
    RouteDefinition("/settings", r"^/settings$"),
    RouteDefinition("/feature/:id", r"^/feature/([^/]+)$", ("id",)),
    RouteDefinition("/help", r"^/help$"),
)


class RouteParser:
    """Resolves URLs to routes.

    Features:
    - Literal routes (/home)
    - Single-segment parameters (/feature/:id)
    - Raw regex patterns with positional parameter names
    - Full URLs and bare paths (query and fragment are ignored)

    Matchers are compiled once here and tried in declaration order; the
    first match wins. Entries whose pattern fails to compile are dropped
    with a warning and listed in ``rejected``.

    Usage:
        parser = RouteParser([
            "/home",
            "/feature/:id",
            (r"^/u/(\\w+)$", ["user"], "/u/:user"),
        ])

        parser.parse("/feature/42")
        # Route(path='/feature/:id', parameters={'id': '42'})
    """

    def __init__(
        self,
        routes: Iterable[RouteEntry] = (),
        compiler: Optional[PatternCompiler] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self._compiler = compiler or PatternCompiler()
        self._metrics = metrics

        matchers: List[RouteMatcher] = []
        rejected: List[RejectedRoute] = []

        for position, entry in enumerate(routes):
            try:
                matcher = RouteDefinition.coerce(entry).build(self._compiler)
            except PatternCompileError as e:
                logger.warning(f"Dropping route #{position}: {e}")
                rejected.append(RejectedRoute(position, entry, e))
                if self._metrics:
                    self._metrics.compile_failures.inc()
                continue
            matchers.append(matcher)

        self._matchers: Tuple[RouteMatcher, ...] = tuple(matchers)
        self._rejected: Tuple[RejectedRoute, ...] = tuple(rejected)

        logger.debug(
            f"Route parser ready: {len(self._matchers)} active, "
            f"{len(self._rejected)} rejected"
        )

    @classmethod
    def default(cls, metrics: Optional[MetricsCollector] = None) -> "RouteParser":
        """Parser over the built-in route table."""
        return cls(DEFAULT_ROUTES, metrics=metrics)

    @property
    def matchers(self) -> Tuple[RouteMatcher, ...]:
        return self._matchers

    @property
    def rejected(self) -> Tuple[RejectedRoute, ...]:
        return self._rejected

    @property
    def templates(self) -> List[str]:
        return [m.template for m in self._matchers]

    def parse(self, url: str) -> Optional[Route]:
        """Resolve a URL to a route.

        Args:
            url: Bare path or full URL

        Returns:
            Route if a matcher accepts the path, None otherwise
        """
        path = extract_path(url)
        if path is None:
            self._record("invalid")
            return None

        for matcher in self._matchers:
            params = matcher.resolve(path)
            if params is not None:
                self._record("hit")
                return Route(path=matcher.template, parameters=params)

        self._record("miss")
        return None

    def action(self, url: str, payload: Any = None) -> RouteAction:
        """Parse once and bundle the result with the triggering event."""
        return RouteAction(url=url, route=self.parse(url), payload=payload)

    def describe(self) -> List[Dict[str, Any]]:
        """Get the active route table."""
        return [
            {
                "template": m.template,
                "pattern": m.pattern,
                "parameters": list(m.parameter_names),
            }
            for m in self._matchers
        ]

    def _record(self, result: str) -> None:
        if self._metrics:
            self._metrics.parses.inc(labels={"result": result})

    def __len__(self) -> int:
        return len(self._matchers)


__all__ = [
    "Route",
    "RouteAction",
    "RouteDefinition",
    "RouteParser",
    "RejectedRoute",
    "DEFAULT_ROUTES",
]

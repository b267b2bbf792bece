"""URL Redactor - Privacy-safe URL rendering.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import string
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Union

from urlroute_core.metrics.collector import MetricsCollector
from urlroute_core.routing.router import RouteParser
from urlroute_core.utils.helpers import render_template

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER = ":{name}"


@dataclass(frozen=True)
class Redacted:
    """A URL rewritten with identifying values replaced."""

    value: str

    @property
    def is_redacted(self) -> bool:
        return True


class _NotApplicableType:
    """The redactor does not recognize the URL."""

    _instance: Optional["_NotApplicableType"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def is_redacted(self) -> bool:
        return False

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NotApplicable"

    def __reduce__(self):
        return (_NotApplicableType, ())


NotApplicable = _NotApplicableType()

RedactionResult = Union[Redacted, _NotApplicableType]


def _check_placeholder(placeholder: str) -> None:
    """Allow only literal text and bare ``{name}`` fields."""
    if not isinstance(placeholder, str):
        raise ValueError(f"Placeholder must be a string, got {type(placeholder).__name__}")

    try:
        for _, field_name, _, _ in string.Formatter().parse(placeholder):
            if field_name is not None and field_name != "name":
                raise ValueError(f"only {{name}} fields are allowed, got {{{field_name}}}")
        placeholder.format(name="id")
    except (KeyError, IndexError, ValueError) as e:
        raise ValueError(f"Invalid placeholder {placeholder!r}: {e}") from e


class URLRedactor(ABC):
    """Abstract URL redactor.

    A single call decides applicability and produces the output; there is
    no separate capability check.
    """

    @abstractmethod
    def redact(self, url: str) -> RedactionResult:
        """Redact a URL.

        Returns:
            Redacted with the safe form, or NotApplicable
        """
        pass


class ClientRouteRedactor(URLRedactor):
    """Redacts URLs that resolve to a known client route.

    The output is the route template with every ``:name`` segment rendered
    from ``placeholder``. Captured values are never copied into it.

    Usage:
        redactor = ClientRouteRedactor(RouteParser.default())
        redactor.redact("/feature/123")   # Redacted(value='/feature/:id')
        redactor.redact("/unknown")       # NotApplicable
    """

    def __init__(
        self,
        parser: RouteParser,
        placeholder: str = DEFAULT_PLACEHOLDER,
        metrics: Optional[MetricsCollector] = None,
    ):
        _check_placeholder(placeholder)

        self.parser = parser
        self.placeholder = placeholder
        self._metrics = metrics

    def redact(self, url: str) -> RedactionResult:
        """Parse once and render the matched template."""
        route = self.parser.parse(url)
        if route is None:
            self._record("not_applicable")
            return NotApplicable

        self._record("redacted")
        return Redacted(render_template(route.path, self.placeholder))

    def _record(self, result: str) -> None:
        if self._metrics:
            self._metrics.redactions.inc(labels={"result": result, "redactor": "client_route"})


__all__ = [
    "URLRedactor",
    "ClientRouteRedactor",
    "Redacted",
    "NotApplicable",
    "RedactionResult",
    "DEFAULT_PLACEHOLDER",
]

"""Aggregate Redactor - Ordered redactor chain.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

from urlroute_core.metrics.collector import MetricsCollector
from urlroute_core.redaction.redactor import (
    NotApplicable,
    Redacted,
    RedactionResult,
    URLRedactor,
)

logger = logging.getLogger(__name__)


class AggregateRedactor(URLRedactor):
    """Tries each redactor in order; the first Redacted result wins.

    Each member is asked exactly once per call, and members after the
    first success are not asked at all.
    """

    def __init__(
        self,
        redactors: Iterable[URLRedactor],
        metrics: Optional[MetricsCollector] = None,
    ):
        self._redactors: Tuple[URLRedactor, ...] = tuple(redactors)
        self._metrics = metrics

    @property
    def redactors(self) -> Tuple[URLRedactor, ...]:
        return self._redactors

    def redact(self, url: str) -> RedactionResult:
        for redactor in self._redactors:
            result = redactor.redact(url)
            if isinstance(result, Redacted):
                self._record("redacted")
                return result

        self._record("not_applicable")
        return NotApplicable

    def _record(self, result: str) -> None:
        if self._metrics:
            self._metrics.redactions.inc(labels={"result": result, "redactor": "aggregate"})

    def __len__(self) -> int:
        return len(self._redactors)


__all__ = [
    "AggregateRedactor",
]

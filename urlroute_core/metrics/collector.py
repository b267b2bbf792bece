"""Metrics Collector - Route resolution counters.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class MetricLabels:
    """Metric labels."""

    labels: Dict[str, str] = field(default_factory=dict)

    def to_key(self) -> str:
        """Convert to hashable key."""
        if not self.labels:
            return ""
        return ",".join(f"{k}={v}" for k, v in sorted(self.labels.items()))


class Counter:
    """Counter metric - monotonically increasing value."""

    def __init__(
        self,
        name: str,
        description: str = "",
        labels: Optional[List[str]] = None,
    ):
        self.name = name
        self.description = description
        self.label_names = labels or []
        self._values: Dict[str, float] = {}
        self._lock = threading.RLock()

    def inc(self, value: float = 1.0, labels: Optional[Dict[str, str]] = None) -> None:
        """Increment counter."""
        if value < 0:
            raise ValueError("Counter can only increase")
        key = MetricLabels(labels or {}).to_key()
        with self._lock:
            self._values[key] = self._values.get(key, 0) + value

    def get(self, labels: Optional[Dict[str, str]] = None) -> float:
        """Get counter value."""
        key = MetricLabels(labels or {}).to_key()
        with self._lock:
            return self._values.get(key, 0)

    def get_all(self) -> Dict[str, float]:
        """Get all counter values."""
        with self._lock:
            return self._values.copy()

    def reset(self) -> None:
        with self._lock:
            self._values.clear()


class MetricsCollector:
    """Registry of route resolution counters.

    Usage:
        metrics = MetricsCollector()
        parser = RouteParser(DEFAULT_ROUTES, metrics=metrics)
        parser.parse("/feature/42")

        metrics.parses.get({"result": "hit"})  # 1.0
    """

    def __init__(self, prefix: str = ""):
        self.prefix = prefix
        self._counters: Dict[str, Counter] = {}
        self._lock = threading.RLock()

        self.parses = self.counter(
            "route_parse_total",
            "Route parse calls by outcome",
            labels=["result"],
        )
        self.compile_failures = self.counter(
            "route_compile_failures_total",
            "Route patterns rejected at construction",
        )
        self.redactions = self.counter(
            "url_redaction_total",
            "Redaction calls by outcome",
            labels=["result", "redactor"],
        )

    def counter(
        self,
        name: str,
        description: str = "",
        labels: Optional[List[str]] = None,
    ) -> Counter:
        """Get or create a counter."""
        full_name = f"{self.prefix}{name}"
        with self._lock:
            if full_name not in self._counters:
                self._counters[full_name] = Counter(full_name, description, labels)
            return self._counters[full_name]

    def get_counter(self, name: str) -> Optional[Counter]:
        return self._counters.get(f"{self.prefix}{name}")

    def snapshot(self) -> Dict[str, Any]:
        """Get all metric values as a plain dict."""
        with self._lock:
            return {
                name: {
                    "type": "counter",
                    "description": counter.description,
                    "values": counter.get_all(),
                }
                for name, counter in self._counters.items()
            }

    def reset(self) -> None:
        """Reset all counters."""
        with self._lock:
            for counter in self._counters.values():
                counter.reset()


__all__ = [
    "MetricsCollector",
    "Counter",
    "MetricLabels",
]

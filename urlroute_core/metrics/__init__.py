"""Metrics module - Route resolution counters."""

from urlroute_core.metrics.collector import (
    MetricsCollector,
    Counter,
)

__all__ = [
    "MetricsCollector",
    "Counter",
]

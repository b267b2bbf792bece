"""Redaction module - Privacy-safe URL rendering."""

from urlroute_core.redaction.redactor import (
    ClientRouteRedactor,
    NotApplicable,
    Redacted,
    RedactionResult,
    URLRedactor,
)
from urlroute_core.redaction.aggregate import AggregateRedactor
from urlroute_core.redaction.logging import RedactingFilter, configure_logging

__all__ = [
    "URLRedactor",
    "ClientRouteRedactor",
    "AggregateRedactor",
    "Redacted",
    "NotApplicable",
    "RedactionResult",
    "RedactingFilter",
    "configure_logging",
]

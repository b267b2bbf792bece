"""Redacting log filter - Keeps raw URL parameters out of logs.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Optional

from urlroute_core.redaction.redactor import Redacted, URLRedactor

UNRECOGNIZED = "<unrecognized>"

_installed_handler: Optional[logging.Handler] = None


class RedactingFilter(logging.Filter):
    """Rewrites the ``url`` attribute of log records.

    Records carry the URL through ``extra``:

        logger.addFilter(RedactingFilter(redactor))
        logger.info("tap", extra={"url": "/feature/123"})
        # record.url == "/feature/:id"

    URLs no redactor recognizes become ``UNRECOGNIZED``.
    """

    def __init__(
        self,
        redactor: URLRedactor,
        attribute: str = "url",
        unrecognized: str = UNRECOGNIZED,
    ):
        super().__init__()
        self.redactor = redactor
        self.attribute = attribute
        self.unrecognized = unrecognized

    def filter(self, record: logging.LogRecord) -> bool:
        url = getattr(record, self.attribute, None)
        if isinstance(url, str):
            result = self.redactor.redact(url)
            if isinstance(result, Redacted):
                setattr(record, self.attribute, result.value)
            else:
                setattr(record, self.attribute, self.unrecognized)
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        url = getattr(record, "url", None)
        if url is not None:
            data["url"] = url
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data)


def configure_logging(
    level: str = "INFO",
    fmt: str = "text",
    redactor: Optional[URLRedactor] = None,
) -> logging.Handler:
    """Install a stderr handler on the root logger.

    Args:
        level: Log level name
        fmt: "json" or "text"
        redactor: Redactor applied to every record's ``url`` attribute
    """
    global _installed_handler

    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    if redactor is not None:
        handler.addFilter(RedactingFilter(redactor))

    root = logging.getLogger()
    if _installed_handler is not None:
        root.removeHandler(_installed_handler)
    root.setLevel(level.upper())
    root.addHandler(handler)
    _installed_handler = handler
    return handler


__all__ = [
    "RedactingFilter",
    "JSONFormatter",
    "configure_logging",
    "UNRECOGNIZED",
]

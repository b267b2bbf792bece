"""Helper utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import re
from typing import Mapping, Optional
from urllib.parse import urlsplit

_TEMPLATE_PARAM = re.compile(r"(?<=/):(\w+)(?=/|$)")


def extract_path(url: str) -> Optional[str]:
    """Reduce a URL or bare path to its path component.

    ``https://example.com/feature/1?x=2#top`` and ``/feature/1?x=2`` both
    give ``/feature/1``. Unparsable input gives None.
    """
    if not isinstance(url, str):
        return None

    try:
        return urlsplit(url).path
    except ValueError:
        return None


def template_parameters(template: str) -> list:
    """List the ``:name`` segments of a route template, in order."""
    return _TEMPLATE_PARAM.findall(template)


def render_template(
    template: str,
    placeholder: str = ":{name}",
    values: Optional[Mapping[str, str]] = None,
) -> str:
    """Fill each ``:name`` segment of a template.

    Segments named in ``values`` get the value; every other segment gets
    ``placeholder`` formatted with the parameter name.
    """
    values = values or {}

    def _fill(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name in values:
            return values[name]
        return placeholder.format(name=name)

    return _TEMPLATE_PARAM.sub(_fill, template)


__all__ = [
    "extract_path",
    "template_parameters",
    "render_template",
]

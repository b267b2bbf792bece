"""Utils module - Utility functions."""

from urlroute_core.utils.helpers import (
    extract_path,
    render_template,
    template_parameters,
)

__all__ = [
    "extract_path",
    "render_template",
    "template_parameters",
]

"""Route Matcher - Pattern compilation and matching.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

# ":name" template segment
_PARAM_SEGMENT = re.compile(r"^:(\w+)$")

# Capture used for each ":name" segment
_SEGMENT_CAPTURE = "([^/]+)"


class PatternCompileError(ValueError):
    """Raised when a route pattern cannot be compiled."""

    def __init__(self, pattern: object, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid route pattern {pattern!r}: {reason}")


@dataclass(frozen=True)
class CompiledPattern:
    """A route pattern compiled once into an executable regex."""

    source: str
    regex: "re.Pattern[str]"

    @property
    def group_count(self) -> int:
        return self.regex.groups


class PatternCompiler:
    """Compiles route pattern text into CompiledPattern objects.

    Pattern text uses Python ``re`` syntax. Anchoring does not depend on the
    pattern: matchers always require the whole path to match, so ``^/home$``
    and ``/home`` behave the same.
    """

    def __init__(self, flags: int = 0):
        self.flags = flags

    def compile(self, pattern_text: str) -> CompiledPattern:
        """Compile pattern text.

        Raises:
            PatternCompileError: If the text is not a valid pattern.
        """
        if not isinstance(pattern_text, str):
            raise PatternCompileError(pattern_text, "pattern must be a string")

        try:
            regex = re.compile(pattern_text, self.flags)
        except re.error as e:
            raise PatternCompileError(pattern_text, str(e)) from e

        logger.debug(f"Compiled route pattern {pattern_text!r} ({regex.groups} groups)")
        return CompiledPattern(source=pattern_text, regex=regex)


def compile_template(template: str) -> Tuple[str, List[str]]:
    """Derive anchored pattern text and parameter names from a template.

    Supports:
    - Literal segments: /home
    - Single-segment parameters: /feature/:id

    Example:
        >>> compile_template("/feature/:id")
        ('^/feature/([^/]+)$', ['id'])
    """
    if not isinstance(template, str):
        raise PatternCompileError(template, "template must be a string")

    param_names: List[str] = []
    regex_parts: List[str] = []

    for segment in template.split("/"):
        if not segment:
            continue

        param = _PARAM_SEGMENT.match(segment)
        if param:
            name = param.group(1)
            if name in param_names:
                raise PatternCompileError(template, f"duplicate parameter {name!r}")
            param_names.append(name)
            regex_parts.append(f"/{_SEGMENT_CAPTURE}")
        elif segment.startswith(":"):
            raise PatternCompileError(template, f"invalid parameter segment {segment!r}")
        else:
            regex_parts.append(f"/{re.escape(segment)}")

    body = "".join(regex_parts) or "/"
    return f"^{body}$", param_names


class RouteMatcher:
    """Matches paths against one precompiled route pattern.

    Parameter names map positionally to capture groups: ``parameter_names[i]``
    is filled from group ``i + 1``. Extra groups are ignored; names without a
    group, or whose optional group did not take part in the match, are left
    out of the extracted mapping.

    Usage:
        compiled = PatternCompiler().compile(r"^/feature/([^/]+)$")
        matcher = RouteMatcher(compiled, "/feature/:id", ["id"])

        matcher.matches("/feature/42")   # True
        matcher.extract("/feature/42")   # {"id": "42"}
        matcher.extract("/profile")      # None
    """

    __slots__ = ("_compiled", "_template", "_parameter_names")

    def __init__(
        self,
        compiled: CompiledPattern,
        template: str,
        parameter_names: Sequence[str] = (),
    ):
        self._compiled = compiled
        self._template = template
        self._parameter_names = tuple(parameter_names)

        if len(self._parameter_names) > compiled.group_count:
            logger.debug(
                f"Route {template!r} declares {len(self._parameter_names)} parameters "
                f"but pattern has {compiled.group_count} groups"
            )

    @classmethod
    def from_template(
        cls,
        template: str,
        compiler: Optional[PatternCompiler] = None,
    ) -> "RouteMatcher":
        """Build a matcher whose pattern is derived from the template."""
        pattern_text, names = compile_template(template)
        compiled = (compiler or PatternCompiler()).compile(pattern_text)
        return cls(compiled, template, names)

    @property
    def pattern(self) -> str:
        return self._compiled.source

    @property
    def template(self) -> str:
        return self._template

    @property
    def parameter_names(self) -> Tuple[str, ...]:
        return self._parameter_names

    def resolve(self, path: str) -> Optional[Dict[str, str]]:
        """Evaluate the pattern once.

        Returns:
            Dict of extracted parameters if the whole path matches, None otherwise
        """
        match = self._compiled.regex.fullmatch(path)
        if match is None:
            return None

        params: Dict[str, str] = {}
        groups = self._compiled.group_count
        for index, name in enumerate(self._parameter_names, start=1):
            if index > groups:
                break
            value = match.group(index)
            if value is not None:
                params[name] = value

        return params

    def matches(self, path: str) -> bool:
        """Check if the whole path matches."""
        return self.resolve(path) is not None

    def extract(self, path: str) -> Optional[Dict[str, str]]:
        """Extract parameters, or None when the path does not match."""
        return self.resolve(path)

    def __repr__(self) -> str:
        return (
            f"RouteMatcher(pattern={self.pattern!r}, template={self._template!r}, "
            f"parameter_names={list(self._parameter_names)!r})"
        )


__all__ = [
    "PatternCompileError",
    "CompiledPattern",
    "PatternCompiler",
    "RouteMatcher",
    "compile_template",
]

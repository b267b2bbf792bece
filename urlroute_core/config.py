"""Configuration utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

import yaml

from urlroute_core.metrics.collector import MetricsCollector
from urlroute_core.redaction.aggregate import AggregateRedactor
from urlroute_core.redaction.redactor import DEFAULT_PLACEHOLDER, ClientRouteRedactor
from urlroute_core.routing.router import DEFAULT_ROUTES, RouteDefinition, RouteParser

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="Config")


class ConfigError(ValueError):
    """Invalid configuration."""
    pass


_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")

_BOOL_FIELDS = frozenset({"metrics_enabled"})
_STR_FIELDS = frozenset({"placeholder", "log_level", "log_format"})
_ENV_FIELDS = _BOOL_FIELDS | _STR_FIELDS


def _check_types(data: Dict[str, Any]) -> None:
    """Reject values of the wrong type before they reach the runtime objects."""
    for key, value in data.items():
        if key in _STR_FIELDS and not isinstance(value, str):
            raise ConfigError(f"'{key}' must be a string, got {type(value).__name__}")
        if key in _BOOL_FIELDS and not isinstance(value, bool):
            raise ConfigError(f"'{key}' must be a boolean, got {type(value).__name__}")
        if key == "routes" and not isinstance(value, list):
            raise ConfigError("'routes' must be a list")


@dataclass
class Config:
    """Route table configuration.

    ``routes`` entries are either template strings (``"/feature/:id"``) or
    mappings with ``template`` and optional ``pattern`` and ``params``.
    An empty list means the built-in table.
    """

    # Routing
    routes: List[Any] = field(default_factory=list)

    # Redaction
    placeholder: str = DEFAULT_PLACEHOLDER

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"

    # Metrics
    metrics_enabled: bool = True

    @classmethod
    def from_dict(cls: Type[T], data: Optional[Dict[str, Any]]) -> T:
        """Create config from dictionary."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")

        # Filter to only valid fields
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        unknown = set(data) - valid_fields
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {sorted(unknown)}")

        _check_types(filtered)
        return cls(**filtered)

    @classmethod
    def from_json(cls: Type[T], path: str) -> T:
        """Load config from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_yaml(cls: Type[T], path: str) -> T:
        """Load config from YAML file."""
        with open(path, "r") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def env_values(cls, prefix: str = "URLROUTE_") -> Dict[str, Any]:
        """Get the scalar settings actually present in the environment."""
        data: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if key.startswith(prefix):
                config_key = key[len(prefix):].lower()
                if config_key not in _ENV_FIELDS:
                    continue

                # Type conversion
                if config_key in _BOOL_FIELDS:
                    flag = value.strip().lower()
                    if flag not in _TRUE_VALUES + _FALSE_VALUES:
                        raise ConfigError(f"{key} must be a boolean, got {value!r}")
                    data[config_key] = flag in _TRUE_VALUES
                else:
                    data[config_key] = value

        return data

    @classmethod
    def from_env(cls: Type[T], prefix: str = "URLROUTE_") -> T:
        """Load scalar settings from environment variables."""
        return cls.from_dict(cls.env_values(prefix))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def merge(self, other: "Config", keys: Optional[Iterable[str]] = None) -> "Config":
        """Merge with another config (other takes precedence).

        When ``keys`` is given only those fields are taken from ``other``.
        """
        data = self.to_dict()
        other_data = other.to_dict()
        for key in other_data if keys is None else keys:
            data[key] = other_data[key]
        return type(self).from_dict(data)

    def route_definitions(self) -> List[Any]:
        """Turn configured routes into parser entries."""
        if not self.routes:
            return list(DEFAULT_ROUTES)

        entries: List[Any] = []
        for position, entry in enumerate(self.routes):
            if isinstance(entry, str):
                entries.append(entry)
            elif isinstance(entry, dict):
                if "template" not in entry:
                    raise ConfigError(f"Route #{position} is missing 'template'")
                template = entry["template"]
                if not isinstance(template, str):
                    raise ConfigError(f"Route #{position} 'template' must be a string")
                pattern = entry.get("pattern")
                if pattern is not None and not isinstance(pattern, str):
                    raise ConfigError(f"Route #{position} 'pattern' must be a string")
                params = entry.get("params")
                if isinstance(params, str):
                    params = [params]
                if params is not None and not (
                    isinstance(params, list) and all(isinstance(p, str) for p in params)
                ):
                    raise ConfigError(
                        f"Route #{position} 'params' must be a string or list of strings"
                    )
                entries.append(
                    RouteDefinition(
                        template=template,
                        pattern=pattern,
                        parameter_names=tuple(params) if params is not None else None,
                    )
                )
            else:
                raise ConfigError(
                    f"Route #{position} must be a string or mapping, "
                    f"got {type(entry).__name__}"
                )
        return entries


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "URLROUTE_",
) -> Config:
    """Load configuration from multiple sources.

    Priority (highest to lowest):
    1. Environment variables
    2. Config file (if provided)
    3. Defaults
    """
    config = Config()

    # Load from file if provided
    if path:
        path_obj = Path(path)
        if not path_obj.exists():
            raise ConfigError(f"Config file not found: {path}")
        if path.endswith(".json"):
            config = Config.from_json(path)
        elif path.endswith((".yaml", ".yml")):
            config = Config.from_yaml(path)
        else:
            logger.warning(f"Unknown config format: {path}")

    # Override with environment variables that are actually set
    env_data = Config.env_values(env_prefix)
    config = config.merge(Config.from_dict(env_data), keys=env_data)

    return config


def build_parser(
    config: Config,
    metrics: Optional[MetricsCollector] = None,
) -> RouteParser:
    """Build the route parser described by a config."""
    if not config.metrics_enabled:
        metrics = None
    return RouteParser(config.route_definitions(), metrics=metrics)


def build_redactor(
    config: Config,
    parser: Optional[RouteParser] = None,
    metrics: Optional[MetricsCollector] = None,
) -> AggregateRedactor:
    """Build the redaction pipeline described by a config."""
    if not config.metrics_enabled:
        metrics = None
    parser = parser or build_parser(config, metrics)
    client = ClientRouteRedactor(parser, placeholder=config.placeholder, metrics=metrics)
    return AggregateRedactor([client], metrics=metrics)


__all__ = [
    "Config",
    "ConfigError",
    "load_config",
    "build_parser",
    "build_redactor",
]

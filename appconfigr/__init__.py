"""Typed configuration loading.

- YAML-first documents in one directory (JSON or custom formats on request)
- `${name}` expansion from properties, environment variables and `.env` files
- Overlay merging and pydantic-backed binding onto typed targets
"""

from __future__ import annotations

from appconfigr.binder import bind
from appconfigr.core import AppConfigr, Builder
from appconfigr.errors import (
    AppConfigrError,
    ConfigBindingError,
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    UnresolvedVariableError,
)
from appconfigr.formats import ConfigFormat, JsonFormat, YamlFormat
from appconfigr.merge import deep_merge
from appconfigr.resolver import Result, VariableResolver

__all__ = [
    "AppConfigr",
    "AppConfigrError",
    "Builder",
    "ConfigBindingError",
    "ConfigError",
    "ConfigFormat",
    "ConfigNotFoundError",
    "ConfigParseError",
    "JsonFormat",
    "Result",
    "UnresolvedVariableError",
    "VariableResolver",
    "YamlFormat",
    "__version__",
    "bind",
    "deep_merge",
]

__version__ = "1.0.0"

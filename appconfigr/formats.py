"""Document formats.

YAML is the default. Any object with `name`, `errors` and `parse(text)` can be
plugged into `Builder.with_format()`.
"""

from __future__ import annotations

import json
from typing import Any, Protocol

import yaml


class ConfigFormat(Protocol):
    name: str
    # Exception types raised by `parse` for malformed input.
    errors: tuple[type[BaseException], ...]

    def parse(self, text: str) -> Any: ...


class YamlFormat:
    name = "yaml"
    errors = (yaml.YAMLError,)

    def parse(self, text: str) -> Any:
        if not text.strip():
            return {}
        loaded = yaml.safe_load(text)
        return {} if loaded is None else loaded


class JsonFormat:
    name = "json"
    errors = (json.JSONDecodeError,)

    def parse(self, text: str) -> Any:
        if not text.strip():
            return {}
        return json.loads(text)


_FORMATS: dict[str, ConfigFormat] = {
    "yaml": YamlFormat(),
    "yml": YamlFormat(),
    "json": JsonFormat(),
}


def register_format(fmt: ConfigFormat, *aliases: str) -> None:
    for key in (fmt.name, *aliases):
        _FORMATS[key.lower()] = fmt


def get_format(name: str) -> ConfigFormat:
    try:
        return _FORMATS[name.lower()]
    except KeyError:
        known = ", ".join(sorted(_FORMATS))
        raise ValueError(f"Unknown config format {name!r} (known: {known})") from None


def available_formats() -> list[str]:
    return sorted(_FORMATS)

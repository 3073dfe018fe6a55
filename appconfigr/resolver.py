"""Variable resolvers.

A resolver returns the value for a variable name and is used by `AppConfigr`
to replace `${name}` expressions in configuration files. Ready-made resolvers:

- `VariableResolver.from_properties(mapping)`: explicit key/value pairs.
- `VariableResolver.from_environment()`: process environment variables.
- `VariableResolver.from_dotenv(path)`: a `.env` file, read without touching
  `os.environ`.

Resolvers chain with `with_fallback()`.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import dotenv_values

from appconfigr.errors import ConfigError


@dataclass(frozen=True, slots=True)
class Result:
    """Outcome of a single lookup: either a value or a message saying why not."""

    value: str | None = None
    message: str = ""

    @classmethod
    def some(cls, value: str) -> "Result":
        return cls(value=value)

    @classmethod
    def none(cls, message: str) -> "Result":
        return cls(value=None, message=message)

    def __bool__(self) -> bool:
        return self.value is not None

    def get(self) -> str:
        if self.value is None:
            raise ConfigError(self.message)
        return self.value


class VariableResolver(ABC):
    @abstractmethod
    def resolve(self, name: str) -> Result:
        """Look up `name`.

        Implementations must not raise for a missing variable; return
        `Result.none(...)` with a describing message instead.
        """

    def get(self, name: str) -> str:
        """Return the value for `name`.

        Raises:
            TypeError: If `name` is None.
            ConfigError: If the variable cannot be resolved.
        """

        if name is None:
            raise TypeError("Variable name must not be None")
        return self.resolve(name).get()

    def with_fallback(self, fallback: "VariableResolver") -> "VariableResolver":
        """Resolve with `self` first, then `fallback`.

        When neither can resolve, the failure message combines both messages.
        """

        if fallback is None:
            raise TypeError("fallback resolver must not be None")
        return _FallbackResolver(self, fallback)

    @staticmethod
    def from_environment() -> "VariableResolver":
        return _EnvironmentResolver()

    @staticmethod
    def from_properties(properties: Mapping[str, str]) -> "VariableResolver":
        if properties is None:
            raise TypeError("properties must not be None")
        return _MappingResolver(dict(properties), source="properties")

    @staticmethod
    def from_dotenv(path: str | os.PathLike[str] | None = None) -> "VariableResolver":
        env_path = Path(path) if path is not None else Path.cwd() / ".env"
        values: dict[str, str] = {}
        if env_path.is_file():
            # Keys declared without a value (`KEY` alone) come back as None.
            values = {k: v for k, v in dotenv_values(env_path).items() if v is not None}
        return _MappingResolver(values, source=f"dotenv file {env_path}")


class _EnvironmentResolver(VariableResolver):
    def resolve(self, name: str) -> Result:
        value = os.environ.get(name)
        if value is None:
            return Result.none(f"[{name}] can not be resolved from the environment variables.")
        return Result.some(value)


class _MappingResolver(VariableResolver):
    def __init__(self, values: Mapping[str, str], *, source: str) -> None:
        self._values = values
        self._source = source

    def resolve(self, name: str) -> Result:
        value = self._values.get(name)
        if value is None:
            return Result.none(f"[{name}] can not be resolved from the {self._source}.")
        return Result.some(str(value))


class _FallbackResolver(VariableResolver):
    def __init__(self, primary: VariableResolver, fallback: VariableResolver) -> None:
        self._primary = primary
        self._fallback = fallback

    def resolve(self, name: str) -> Result:
        result = self._primary.resolve(name)
        if result:
            return result
        other = self._fallback.resolve(name)
        if other:
            return other
        return Result.none(f"{result.message} {other.message}")

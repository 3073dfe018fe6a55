from __future__ import annotations

from typing import Sequence


class AppConfigrError(Exception):
    """Base exception for this project."""


class ConfigError(AppConfigrError):
    """Raised when configuration is invalid, incomplete or cannot be resolved."""

    def __init__(self, message: str, *, path: str | None = None):
        super().__init__(f"{path}: {message}" if path else message)
        self.message = message
        self.path = path


class ConfigNotFoundError(ConfigError):
    pass


class ConfigParseError(ConfigError):
    pass


class UnresolvedVariableError(ConfigError):
    """One or more `${...}` expressions could not be resolved."""

    def __init__(self, message: str, *, variables: Sequence[str], path: str | None = None):
        super().__init__(message, path=path)
        self.variables = list(variables)


class ConfigBindingError(ConfigError):
    """The config tree does not fit the requested target type.

    `errors` holds `(key_path, reason)` pairs, one per problem.
    """

    def __init__(self, message: str, *, errors: Sequence[tuple[str, str]], path: str | None = None):
        super().__init__(message, path=path)
        self.errors = list(errors)

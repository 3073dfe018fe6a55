"""Access point for all configuration files in a directory.

Basic usage::

    config = AppConfigr.from_directory("config").build()
    server = config.get_config(ServerConfig)  # reads config/server-config.conf

Loading a document:
- The document is parsed first; `${name}` expressions are then replaced
  inside string values only, so substituted values stay strings and binding
  coerces them (`port: ${PORT}` binds onto an `int` field).
- Variables resolve from properties first, then environment variables, then
  an optional `.env` file. Unresolved variables are errors.
- Overlay documents are deep-merged on top, later ones win.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping, Sequence, TypeVar

from appconfigr import variables as _variables
from appconfigr.binder import bind
from appconfigr.errors import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    UnresolvedVariableError,
)
from appconfigr.formats import ConfigFormat, YamlFormat, get_format
from appconfigr.merge import merge_all
from appconfigr.naming import config_name_for
from appconfigr.resolver import VariableResolver
from appconfigr.variables import Expression


logger = logging.getLogger(__name__)

T = TypeVar("T")

CONFIG_DIR_ENV = "APPCONFIGR_CONFIG_DIR"
DEFAULT_SUB_DIRECTORY = "config"


def _require_path(path: str | os.PathLike[str]) -> Path:
    if path is None:
        raise TypeError("path must not be None")
    return Path(path)


class AppConfigr:
    """Loads, merges and binds configuration documents from one base directory.

    Create instances through `from_directory()` or `from_default_directory()`.
    """

    def __init__(self, base_path: Path, fmt: ConfigFormat, resolver: VariableResolver) -> None:
        self._base_path = base_path
        self._format = fmt
        self._resolver = resolver

    @classmethod
    def from_directory(cls, path: str | os.PathLike[str]) -> "Builder":
        """Start building an instance that looks up files under `path`.

        Raises:
            TypeError: If `path` is None.
        """

        return Builder(_require_path(path))

    @classmethod
    def from_default_directory(cls) -> "Builder":
        """Start building with the default directory.

        `$APPCONFIGR_CONFIG_DIR` when set, otherwise `<cwd>/config`.
        """

        override = os.environ.get(CONFIG_DIR_ENV)
        base = Path(override) if override else Path.cwd() / DEFAULT_SUB_DIRECTORY
        return cls.from_directory(Path(os.path.normpath(base.absolute())))

    @property
    def base_path(self) -> Path:
        return self._base_path

    @property
    def format(self) -> ConfigFormat:
        return self._format

    @property
    def resolver(self) -> VariableResolver:
        return self._resolver

    def path_for(self, name: str) -> Path:
        if name is None:
            raise TypeError("config name must not be None")
        return self._base_path / name

    def get_config(self, target: type[T], name: str | None = None, *, overlays: Sequence[str] = ()) -> T:
        """Load the document for `target` and bind it.

        Args:
            target: Type to bind onto (dataclass, pydantic model, TypedDict...).
            name: File name relative to the base directory. Derived from
                `target` when omitted (`SampleConfig` -> `sample-config.conf`).
            overlays: Additional file names merged on top, in order.

        Raises:
            ConfigError: If a file is missing or malformed, a variable cannot
                be resolved, or the content does not fit `target`.
        """

        if target is None:
            raise TypeError("target must not be None")
        config_name = name if name is not None else config_name_for(target)
        tree = self.load_tree(config_name, *overlays)
        source = ",".join(str(self.path_for(n)) for n in (config_name, *overlays))
        return bind(tree, target, source=source)

    def load_tree(self, name: str, *overlays: str) -> Any:
        """Load `name` (and overlays) without binding and return the merged tree."""

        base = self._load_document(name)
        if not overlays:
            return base

        documents = [base, *(self._load_document(o) for o in overlays)]
        for doc_name, doc in zip((name, *overlays), documents):
            if not isinstance(doc, Mapping):
                raise ConfigError(
                    "Top-level document must be a mapping to merge overlays",
                    path=str(self.path_for(doc_name)),
                )
        return merge_all(documents)

    def variables(self, name: str) -> list[Expression]:
        """Return the `${...}` expressions in a document's string values, in order.

        Comments and keys are not scanned.
        """

        return _variables.find_in_tree(self._parse(self._locate(name)))

    def _check_directory(self) -> None:
        if not self._base_path.is_dir():
            raise ConfigError("The configured base path is not a valid directory", path=str(self._base_path))

    def _locate(self, name: str) -> Path:
        self._check_directory()
        path = self.path_for(name)
        if not path.is_file():
            raise ConfigNotFoundError("Config file not found", path=str(path))
        return path

    @staticmethod
    def _read(path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Failed to read config file: {e}", path=str(path)) from e

    def _parse(self, path: Path) -> Any:
        try:
            return self._format.parse(self._read(path))
        except self._format.errors as e:
            raise ConfigParseError(f"Failed to parse {self._format.name} document: {e}", path=str(path)) from e

    def _load_document(self, name: str) -> Any:
        path = self._locate(name)
        tree = self._expand(self._parse(path), path=path)

        logger.debug(
            "config_loaded",
            extra={"config_file": str(path), "format": self._format.name},
        )
        return tree

    def _expand(self, tree: Any, *, path: Path) -> Any:
        values: dict[str, str] = {}
        # name -> (message, key paths referencing it)
        unresolved: dict[str, tuple[str, list[str]]] = {}
        for key_path, text in _variables.iter_strings(tree):
            for expr in _variables.find(text):
                var = expr.value
                if var in values:
                    continue
                if var in unresolved:
                    unresolved[var][1].append(key_path or "<root>")
                    continue
                result = self._resolver.resolve(var)
                if result:
                    values[var] = result.get()
                else:
                    unresolved[var] = (result.message, [key_path or "<root>"])

        if unresolved:
            lines = ["Unresolved variables in config:"]
            for var, (msg, where) in unresolved.items():
                lines.append(f"- ${{{var}}} at {', '.join(where)}: {msg}")
            raise UnresolvedVariableError(
                "\n".join(lines),
                variables=list(unresolved),
                path=str(path),
            )

        if not values:
            return tree

        logger.debug(
            "variables_resolved",
            extra={"config_file": str(path), "variables": list(values)},
        )
        return _variables.expand(tree, values)


class Builder:
    """Configures and creates an `AppConfigr` instance."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._check_directory = True
        self._format: ConfigFormat = YamlFormat()
        self._properties: dict[str, str] = {}
        self._dotenv_path: Path | None = None
        self._use_dotenv = False
        self._resolver: VariableResolver | None = None

    def no_check(self) -> "Builder":
        """Skip the directory check at build time.

        The check is then done when the first configuration is requested.
        """

        self._check_directory = False
        return self

    def with_format(self, fmt: ConfigFormat | str) -> "Builder":
        """Replace the document format (YAML by default).

        Accepts a format object or a registered name such as `"json"`.
        """

        if fmt is None:
            raise TypeError("The given config format must not be None")
        self._format = get_format(fmt) if isinstance(fmt, str) else fmt
        return self

    def with_properties(self, properties: Mapping[str, Any] | None = None, **kwargs: Any) -> "Builder":
        """Add properties; they take precedence over environment variables.

        A `None` value removes the property, so lookups fall through to the
        environment.
        """

        for k, v in {**(properties or {}), **kwargs}.items():
            if v is None:
                self._properties.pop(str(k), None)
            else:
                self._properties[str(k)] = str(v)
        return self

    def with_dotenv(self, path: str | os.PathLike[str] | None = None) -> "Builder":
        """Use a `.env` file as the last fallback for variables (default `<cwd>/.env`)."""

        self._use_dotenv = True
        self._dotenv_path = Path(path) if path is not None else None
        return self

    def with_resolver(self, resolver: VariableResolver) -> "Builder":
        """Replace the whole variable lookup chain."""

        if resolver is None:
            raise TypeError("The given resolver must not be None")
        self._resolver = resolver
        return self

    def _default_resolver(self) -> VariableResolver:
        resolver = VariableResolver.from_properties(self._properties).with_fallback(
            VariableResolver.from_environment()
        )
        if self._use_dotenv:
            resolver = resolver.with_fallback(VariableResolver.from_dotenv(self._dotenv_path))
        return resolver

    def build(self) -> AppConfigr:
        """Create the instance.

        Raises:
            ValueError: If the path is not a directory and `no_check()` was not called.
        """

        if self._check_directory and not self._path.is_dir():
            raise ValueError(
                f"The given path is not a valid directory [{self._path}]. "
                "This error can be suppressed by calling no_check() on the builder."
            )
        resolver = self._resolver if self._resolver is not None else self._default_resolver()
        return AppConfigr(self._path, self._format, resolver)

from __future__ import annotations

import re


DEFAULT_EXTENSION = ".conf"

_ACRONYM_BOUNDARY_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])")


def to_kebab_case(name: str) -> str:
    """`SampleConfig` -> `sample-config`, `HTTPServerConfig` -> `http-server-config`."""

    s = _ACRONYM_BOUNDARY_RE.sub(r"\1-\2", name)
    s = _WORD_BOUNDARY_RE.sub(r"\1-\2", s)
    return s.replace("_", "-").lower()


def config_name_for(target: object, extension: str = DEFAULT_EXTENSION) -> str:
    """Return the default file name for a binding target.

    A class may set `__config_name__` to pick its own file name.
    """

    explicit = getattr(target, "__config_name__", None)
    if isinstance(explicit, str) and explicit:
        return explicit

    name = getattr(target, "__name__", None)
    if not isinstance(name, str) or not name:
        raise TypeError(f"Cannot derive a config name from {target!r}; pass a name explicitly")
    return to_kebab_case(name) + extension

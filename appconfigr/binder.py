"""Bind a config tree onto a typed target.

Validation is delegated to pydantic, so targets can be stdlib dataclasses,
pydantic models, TypedDicts or plain container types. Coercion runs in lax
mode (`"20"` -> `20`). Constraints declared with `Field(...)`, `Annotated`
validators or model validators are checked before the instance is returned.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence, TypeVar

from pydantic import TypeAdapter, ValidationError

from appconfigr.errors import ConfigBindingError


logger = logging.getLogger(__name__)

T = TypeVar("T")


def _key_path(loc: Sequence[int | str]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path or "<root>"


def _binding_error(exc: ValidationError, *, target: Any, source: str | None) -> ConfigBindingError:
    problems = [(_key_path(err["loc"]), err["msg"]) for err in exc.errors()]
    target_name = getattr(target, "__name__", repr(target))
    lines = [f"Config does not match {target_name}:"]
    lines.extend(f"- {where}: {reason}" for where, reason in problems)
    return ConfigBindingError("\n".join(lines), errors=problems, path=source)


def bind(tree: Any, target: type[T], *, source: str | None = None) -> T:
    """Validate `tree` against `target` and return the bound instance.

    Raises:
        ConfigBindingError: If required fields are missing, values cannot be
            coerced, or a constraint fails.
    """

    adapter = TypeAdapter(target)
    try:
        bound = adapter.validate_python(tree)
    except ValidationError as e:
        raise _binding_error(e, target=target, source=source) from e

    logger.debug(
        "config_bound",
        extra={"target": getattr(target, "__name__", repr(target)), "source": source},
    )
    return bound

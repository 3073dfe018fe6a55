"""Find and substitute `${name}` expressions in document text and parsed trees."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterator, Mapping


_VAR_PATTERN = re.compile(r"\$\{(?P<name>[\w.]+)\}")


@dataclass(frozen=True, slots=True)
class Expression:
    """A single `${name}` occurrence."""

    value: str

    def __str__(self) -> str:
        return "${" + self.value + "}"


def find(content: str) -> list[Expression]:
    """Return every expression in `content`, in order of appearance.

    Duplicates are kept. Malformed expressions (`${}`, `${a-b}`) are not matched.
    """

    if content is None:
        raise TypeError("content must not be None")
    return [Expression(m.group("name")) for m in _VAR_PATTERN.finditer(content)]


def names(content: str) -> list[str]:
    """Distinct variable names in order of first appearance."""

    seen: dict[str, None] = {}
    for expr in find(content):
        seen.setdefault(expr.value, None)
    return list(seen)


def substitute(content: str, values: Mapping[str, str]) -> str:
    def repl(match: re.Match[str]) -> str:
        return values[match.group("name")]

    return _VAR_PATTERN.sub(repl, content)


def iter_strings(tree: Any, key_path: str = "") -> Iterator[tuple[str, str]]:
    """Yield `(key_path, value)` for every string leaf of a parsed document.

    Key paths use the `a.b[0]` notation.
    """

    if isinstance(tree, str):
        yield key_path, tree
    elif isinstance(tree, Mapping):
        for k, v in tree.items():
            yield from iter_strings(v, f"{key_path}.{k}" if key_path else str(k))
    elif isinstance(tree, list):
        for i, v in enumerate(tree):
            yield from iter_strings(v, f"{key_path}[{i}]")


def find_in_tree(tree: Any) -> list[Expression]:
    """Expressions in the string values of a parsed document, in document order."""

    return [expr for _, value in iter_strings(tree) for expr in find(value)]


def expand(tree: Any, values: Mapping[str, str]) -> Any:
    """Return a copy of `tree` with expressions in string leaves replaced.

    Only string values change; a substituted value stays a string.
    """

    if isinstance(tree, str):
        return substitute(tree, values)
    if isinstance(tree, Mapping):
        return {k: expand(v, values) for k, v in tree.items()}
    if isinstance(tree, list):
        return [expand(v, values) for v in tree]
    return tree

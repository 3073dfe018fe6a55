from __future__ import annotations

from typing import Any, Iterable, Mapping


def deep_merge(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two mappings into a new dict.

    - Mappings are merged recursively.
    - Other values (lists included) are replaced by the overlay's.
    """

    merged: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        current = merged.get(k)
        if isinstance(v, Mapping) and isinstance(current, Mapping):
            merged[k] = deep_merge(current, v)
        else:
            merged[k] = v
    return merged


def merge_all(documents: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
    """Merge documents left to right; later documents win."""

    merged: dict[str, Any] = {}
    for doc in documents:
        merged = deep_merge(merged, doc)
    return merged

from __future__ import annotations

from appconfigr.merge import deep_merge, merge_all


def test_nested_mappings_merge_and_scalars_override() -> None:
    base = {"server": {"host": "localhost", "port": 8080}, "name": "app"}
    overlay = {"server": {"port": 9090}, "debug": True}

    merged = deep_merge(base, overlay)

    assert merged == {"server": {"host": "localhost", "port": 9090}, "name": "app", "debug": True}


def test_lists_are_replaced_not_concatenated() -> None:
    merged = deep_merge({"tags": ["a", "b"]}, {"tags": ["c"]})

    assert merged == {"tags": ["c"]}


def test_mapping_replaces_scalar_and_vice_versa() -> None:
    assert deep_merge({"x": 1}, {"x": {"y": 2}}) == {"x": {"y": 2}}
    assert deep_merge({"x": {"y": 2}}, {"x": None}) == {"x": None}


def test_inputs_are_not_mutated() -> None:
    base = {"a": {"b": 1}}
    overlay = {"a": {"c": 2}}

    deep_merge(base, overlay)

    assert base == {"a": {"b": 1}}
    assert overlay == {"a": {"c": 2}}


def test_merge_all_later_documents_win() -> None:
    merged = merge_all([{"level": "base", "keep": 1}, {"level": "dev"}, {"level": "local"}])

    assert merged == {"level": "local", "keep": 1}


def test_merge_all_of_nothing_is_empty() -> None:
    assert merge_all([]) == {}

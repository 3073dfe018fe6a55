from __future__ import annotations

import pytest

from appconfigr.naming import config_name_for, to_kebab_case


class SampleConfig:
    pass


class HTTPServerConfig:
    pass


class Named:
    __config_name__ = "settings.yaml"


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("SampleConfig", "sample-config"),
        ("HTTPServerConfig", "http-server-config"),
        ("Db2Settings", "db2-settings"),
        ("snake_case_config", "snake-case-config"),
    ],
)
def test_to_kebab_case(name: str, expected: str) -> None:
    assert to_kebab_case(name) == expected


def test_config_name_for_class() -> None:
    assert config_name_for(SampleConfig) == "sample-config.conf"
    assert config_name_for(HTTPServerConfig, ".yaml") == "http-server-config.yaml"


def test_config_name_override() -> None:
    assert config_name_for(Named) == "settings.yaml"


def test_config_name_for_nameless_target() -> None:
    with pytest.raises(TypeError):
        config_name_for(object())

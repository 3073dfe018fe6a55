from __future__ import annotations

from dataclasses import dataclass, field

import pytest
from pydantic import BaseModel, Field, field_validator
from typing_extensions import TypedDict

from appconfigr.binder import bind
from appconfigr.errors import ConfigBindingError, ConfigError


@dataclass
class Endpoint:
    host: str
    port: int = 80


@dataclass
class Service:
    name: str
    endpoints: list[Endpoint] = field(default_factory=list)
    enabled: bool = True


class Limits(BaseModel):
    max_connections: int = Field(ge=1)
    timeout_s: float = 30.0

    @field_validator("timeout_s")
    @classmethod
    def _positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be > 0")
        return v


class Credentials(TypedDict):
    user: str
    password: str


def test_binds_nested_dataclasses_with_defaults() -> None:
    svc = bind({"name": "api", "endpoints": [{"host": "a"}, {"host": "b", "port": 8080}]}, Service)

    assert svc == Service(name="api", endpoints=[Endpoint("a", 80), Endpoint("b", 8080)], enabled=True)


def test_lax_coercion_of_strings() -> None:
    svc = bind({"name": "api", "enabled": "false", "endpoints": [{"host": "a", "port": "443"}]}, Service)

    assert svc.enabled is False
    assert svc.endpoints[0].port == 443


def test_unknown_keys_are_ignored() -> None:
    svc = bind({"name": "api", "extra": 1}, Service)

    assert svc.name == "api"


def test_missing_required_field_names_key_path() -> None:
    with pytest.raises(ConfigBindingError) as ei:
        bind({"endpoints": [{"port": 1}]}, Service, source="service.conf")

    paths = [where for where, _ in ei.value.errors]
    assert "name" in paths
    assert "endpoints[0].host" in paths
    assert str(ei.value).startswith("service.conf: Config does not match Service:")


def test_model_constraints_are_checked() -> None:
    with pytest.raises(ConfigBindingError) as ei:
        bind({"max_connections": 0, "timeout_s": -1}, Limits)

    paths = [where for where, _ in ei.value.errors]
    assert paths == ["max_connections", "timeout_s"]
    assert "must be > 0" in str(ei.value)


def test_binding_error_is_a_config_error() -> None:
    with pytest.raises(ConfigError):
        bind({"max_connections": "many"}, Limits)


def test_binds_typed_dict_and_containers() -> None:
    creds = bind({"user": "u", "password": "p"}, Credentials)
    ports = bind({"http": "80", "https": 443}, dict[str, int])

    assert creds == {"user": "u", "password": "p"}
    assert ports == {"http": 80, "https": 443}


def test_root_type_mismatch_reports_root() -> None:
    with pytest.raises(ConfigBindingError) as ei:
        bind(["not", "a", "mapping"], Limits)

    assert ei.value.errors[0][0] == "<root>"

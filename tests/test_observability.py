from __future__ import annotations

import io
import json
import logging
from pathlib import Path
from typing import Iterator

import pytest

from appconfigr import AppConfigr
from appconfigr.observability import JsonFormatter, configure_logging


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.LogRecord("appconfigr.core", logging.INFO, __file__, 1, "config_loaded", None, None)
    record.config_file = "/etc/app/app.conf"
    record.path_obj = Path("/x")

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "appconfigr.core"
    assert payload["message"] == "config_loaded"
    assert payload["config_file"] == "/etc/app/app.conf"
    assert payload["path_obj"] == repr(Path("/x"))


def test_configure_logging_is_idempotent() -> None:
    stream = io.StringIO()
    configure_logging(level="debug", stream=stream)
    configure_logging(level="debug", stream=stream)

    assert len(logging.getLogger().handlers) == 1
    assert logging.getLogger().level == logging.DEBUG


def test_loading_emits_structured_events(sample_configs_dir: Path) -> None:
    stream = io.StringIO()
    configure_logging(level="DEBUG", stream=stream)

    AppConfigr.from_directory(sample_configs_dir).build().load_tree("sample-config.conf")

    events = [json.loads(line) for line in stream.getvalue().splitlines()]
    loaded = [e for e in events if e["message"] == "config_loaded"]
    assert loaded
    assert loaded[0]["config_file"].endswith("sample-config.conf")
    assert loaded[0]["format"] == "yaml"


def test_json_formatter_survives_circular_extra() -> None:
    loop: list[object] = []
    loop.append(loop)
    record = logging.LogRecord("appconfigr", logging.INFO, __file__, 1, "circular", None, None)
    record.payload = loop

    payload = json.loads(JsonFormatter().format(record))

    assert payload["payload"] == repr(loop)

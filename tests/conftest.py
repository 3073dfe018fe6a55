from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    root = Path(__file__).resolve().parents[1]
    if (root / "appconfigr").exists():
        sys.path.insert(0, str(root))


@pytest.fixture
def sample_configs_dir() -> Path:
    return Path(__file__).resolve().parent / "sample-configs"

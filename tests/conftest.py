from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def pytest_configure() -> None:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def programs_dir() -> Path:
    return PROJECT_ROOT / "programs"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CRUST_DEBUG", raising=False)
    monkeypatch.delenv("CRUST_LOG_LEVEL", raising=False)

"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_FRISK_ENV_VARS = ("FRISK_SOURCE_URL", "FRISK_REQUEST_TIMEOUT", "FRISK_DATA_ROOT")


def pytest_sessionstart() -> None:
    """Add src and the project root to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    for import_root in (project_root / "src", project_root):
        if str(import_root) not in sys.path:
            sys.path.insert(0, str(import_root))


@pytest.fixture(autouse=True)
def _isolate_frisk_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test from default runtime configuration."""
    for name in _FRISK_ENV_VARS:
        monkeypatch.delenv(name, raising=False)

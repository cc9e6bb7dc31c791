"""Unit tests for core config parsing."""

from __future__ import annotations

import os

import pytest

from core.config import FriskConfig
from core.constants import DEFAULT_SOURCE_URL
from core.errors import ConfigError


def test_from_env_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fall back to the built-in source and timeout."""
    monkeypatch.delenv("FRISK_SOURCE_URL", raising=False)
    monkeypatch.delenv("FRISK_REQUEST_TIMEOUT", raising=False)

    config = FriskConfig.from_env()

    assert config.source_url == DEFAULT_SOURCE_URL
    assert config.request_timeout == 30.0


def test_from_env_reads_data_root(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve data root from environment."""
    monkeypatch.setenv("FRISK_DATA_ROOT", "./.tmp-frisk")

    config = FriskConfig.from_env()

    assert config.data_root.name == ".tmp-frisk"
    assert config.data_root.is_absolute()


@pytest.mark.parametrize("raw_timeout", ["soon", "0", "-3"])
def test_from_env_raises_for_invalid_timeout(
    monkeypatch: pytest.MonkeyPatch,
    raw_timeout: str,
) -> None:
    """Config should fail for non-numeric or non-positive timeouts."""
    monkeypatch.setenv("FRISK_REQUEST_TIMEOUT", raw_timeout)

    with pytest.raises(ConfigError):
        FriskConfig.from_env()

    assert os.getenv("FRISK_REQUEST_TIMEOUT") == raw_timeout


def test_from_env_raises_for_blank_source(monkeypatch: pytest.MonkeyPatch) -> None:
    """An empty source override is rejected."""
    monkeypatch.setenv("FRISK_SOURCE_URL", "   ")

    with pytest.raises(ConfigError):
        FriskConfig.from_env()

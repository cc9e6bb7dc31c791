"""Runtime configuration model for friskstat.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DATA_ROOT,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_SOURCE_URL,
)
from core.errors import ConfigError


@dataclass(frozen=True)
class FriskConfig:
    """Validated runtime configuration.

    Attributes:
        source_url: Page holding the stop-and-frisk list.
        request_timeout: Seconds allowed for the source fetch.
        data_root: Directory relative CSV paths are resolved against.
    """

    source_url: str
    request_timeout: float
    data_root: Path

    @classmethod
    def from_env(cls) -> "FriskConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            ConfigError: If environment values are invalid.
        """
        source_url = os.getenv("FRISK_SOURCE_URL", DEFAULT_SOURCE_URL).strip()
        timeout_value = os.getenv("FRISK_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT_SECONDS))
        data_root_value = os.getenv("FRISK_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        if not source_url:
            raise ConfigError(
                "FRISK_SOURCE_URL is set but empty. Unset it or provide a URL or file path."
            )
        return cls(
            source_url=source_url,
            request_timeout=_parse_request_timeout(timeout_value),
            data_root=Path(data_root_value).expanduser().resolve(),
        )


def _parse_request_timeout(raw_value: str) -> float:
    """Parse the request timeout environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Positive timeout in seconds.

    Raises:
        ConfigError: If value is not a positive number.
    """
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise ConfigError(
            "Invalid FRISK_REQUEST_TIMEOUT value: "
            f"expected number of seconds, got '{raw_value}'. "
            "Set FRISK_REQUEST_TIMEOUT to a positive number."
        ) from error
    if timeout <= 0:
        raise ConfigError(
            f"Invalid FRISK_REQUEST_TIMEOUT value {raw_value}: must be greater than zero."
        )
    return timeout

"""Raw text line readers.

This module loads the stop-and-frisk page from a local file or over
HTTP. It returns lines only; all interpretation happens downstream.
"""

from __future__ import annotations

from pathlib import Path

import requests

from core.config import FriskConfig
from core.errors import IngestError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


def read_source_lines(source_uri: str, config: FriskConfig) -> tuple[str, ...]:
    """Load raw text lines from a local path or URL.

    Args:
        source_uri: Local file path or ``http(s)://`` URL.
        config: Runtime configuration for the request timeout.

    Returns:
        Lines in document order, line endings removed.

    Raises:
        IngestError: If the source cannot be read.
    """
    if source_uri.startswith(("http://", "https://")):
        text = _fetch_url_text(source_uri, config.request_timeout)
    else:
        text = _read_file_text(Path(source_uri).expanduser())
    lines = tuple(text.splitlines())
    _LOGGER.info("source_lines_loaded", source_uri=source_uri, line_count=len(lines))
    return lines


def _fetch_url_text(url: str, timeout: float) -> str:
    """Fetch a page body with requests.

    Raises:
        IngestError: On connection errors or non-2xx responses.
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as error:
        raise IngestError(
            f"Failed to fetch {url}: {error}. Check connectivity or set "
            "FRISK_SOURCE_URL to a saved copy of the page."
        ) from error
    return response.text


def _read_file_text(source_path: Path) -> str:
    if not source_path.is_file():
        raise IngestError(
            f"Failed to read source at {source_path}: file does not exist. "
            "Provide an existing HTML file or an http(s) URL."
        )
    try:
        return source_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise IngestError(f"Failed to read source at {source_path}: {error}.") from error

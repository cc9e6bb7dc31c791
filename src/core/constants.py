"""Core constants used across friskstat modules.

This module centralizes schema names, patterns and defaults.
Keeping values here avoids magic literals in pipeline stages.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path("data")
DEFAULT_SOURCE_URL = "https://www.nyclu.org/en/stop-and-frisk-data"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0
STOP_AND_FRISK_FIELDS = (
    "year",
    "stops",
    "innocent",
    "innocent_pct",
    "black",
    "black_pct",
    "latinx",
    "latinx_pct",
    "white",
    "white_pct",
    "youth",
    "youth_pct",
)
STOP_AND_FRISK_PERIOD_FIELD = "year"
STOP_AND_FRISK_TOTAL_FIELDS = ("black", "latinx", "white")
STOP_AND_FRISK_PERCENT_FIELDS = ("black_pct", "latinx_pct", "white_pct")
LIST_ITEM_PATTERN = r"<li\b[^>]*>(.*?)</li\s*>"
NESTED_LINK_PATTERN = r"<a\b"
HTML_TAG_PATTERN = r"<[^>]+>"
TOKEN_PATTERN = (
    r"\b\d{4}\b(?![.,]\d)"
    r"|\b\d+(?=\s*percent\b)"
    r"|\b\d{1,3}(?:,\d{3})+(?:\.\d+)?\b"
    r"|\b\d+\.\d+\b"
)
NUMERIC_STRIP_CHARACTERS = ",$%_ \t"
NULL_CELL_MARKERS = ("", "n/a", "na", "-", "--", "null", "none")
METRIC_TOTAL = "total"
METRIC_PERCENT = "percent"
SUPPORTED_METRIC_KINDS = (METRIC_TOTAL, METRIC_PERCENT)
JOIN_INNER = "inner"
JOIN_OUTER = "outer"
SUPPORTED_CONCAT_MODES = (JOIN_INNER, JOIN_OUTER)
SHARE_SUM_TOLERANCE = 1e-9
DEFAULT_CATEGORY_MAP = {
    "black or african american": "black",
    "african american": "black",
    "hispanic": "latinx",
    "hispanic or latino": "latinx",
    "latino": "latinx",
    "white alone": "white",
    "white non-hispanic": "white",
}

"""Friskstat exception hierarchy.

Fatal failures raise one of these types. Row-level problems (bad cells,
malformed fragments, dropped join keys, undefined shares) are never raised; they travel as
diagnostics next to a best-effort table.
"""

from __future__ import annotations


class FriskError(Exception):
    """Base exception for all friskstat failures."""


class ConfigError(FriskError):
    """Raised for invalid runtime configuration."""


class IngestError(FriskError):
    """Raised when a raw text or CSV source cannot be read."""


class SchemaMismatchError(FriskError):
    """Raised when declared columns do not match the input table."""


class PipelineSpecError(FriskError):
    """Raised for invalid or unsupported pipeline-spec configuration."""

"""Structured logging configuration.

This module initializes structlog loggers with a stable JSON format
so stage events and diagnostics render as one line per event.
"""

from __future__ import annotations

from typing import Any

import structlog

from core.types import Diagnostic


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with JSON output.
    """
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        cache_logger_on_first_use=True,
    )
    return structlog.get_logger(name)


def log_diagnostics(logger: Any, stage: str, diagnostics: tuple[Diagnostic, ...]) -> None:
    """Emit one warning event per diagnostic.

    Args:
        logger: Logger returned by ``get_logger``.
        stage: Stage name attached to every event.
        diagnostics: Diagnostics to report.
    """
    for diagnostic in diagnostics:
        logger.warning(
            diagnostic.kind,
            stage=stage,
            detail=diagnostic.message,
            **dict(diagnostic.context),
        )

"""Numeric cell coercion transform.

This module turns text cells into numbers. Thousands separators and
other punctuation are stripped first; cells that still fail to parse
become None and are reported as ``parse_error`` diagnostics.
"""

from __future__ import annotations

import math
from typing import Iterable

from core.constants import NULL_CELL_MARKERS, NUMERIC_STRIP_CHARACTERS
from core.logging_config import get_logger, log_diagnostics
from core.types import CellValue, Diagnostic, StageResult, WideRecord, WideTable

_LOGGER = get_logger(__name__)
_STRIP_TABLE = str.maketrans("", "", NUMERIC_STRIP_CHARACTERS)


def coerce_columns(table: WideTable, columns: Iterable[str]) -> StageResult[WideTable]:
    """Coerce the named columns of a wide table to numbers.

    Args:
        table: Input wide table.
        columns: Column names to coerce.

    Returns:
        New table with coerced cells, plus one diagnostic per cell that
        failed to parse. Rows are always retained.

    Raises:
        SchemaMismatchError: If a named column is not in the table.
    """
    target_indices = sorted({table.column_index(column) for column in columns})
    diagnostics: list[Diagnostic] = []
    records: list[WideRecord] = []
    for record in table.records:
        values = list(record.values)
        for index in target_indices:
            parsed, failed = parse_numeric_cell(values[index])
            if failed:
                diagnostics.append(
                    _parse_error(table.columns[index], record.position, values[index])
                )
            values[index] = parsed
        records.append(WideRecord(values=tuple(values), position=record.position))
    log_diagnostics(_LOGGER, "coerce_columns", tuple(diagnostics))
    return StageResult(
        table=WideTable(columns=table.columns, records=tuple(records)),
        diagnostics=tuple(diagnostics),
    )


def parse_numeric_cell(value: CellValue) -> tuple[int | float | None, bool]:
    """Parse one cell.

    Args:
        value: Raw or already-numeric cell.

    Returns:
        ``(number_or_none, failed)``. ``failed`` is True only when a
        non-empty text cell could not be parsed.
    """
    if value is None:
        return None, False
    if isinstance(value, bool):
        return int(value), False
    if isinstance(value, (int, float)):
        return value, False
    text = value.strip()
    if text.casefold() in NULL_CELL_MARKERS:
        return None, text != ""
    cleaned = text.translate(_STRIP_TABLE)
    try:
        return int(cleaned), False
    except ValueError:
        pass
    try:
        number = float(cleaned)
    except ValueError:
        return None, True
    if not math.isfinite(number):
        return None, True
    return number, False


def _parse_error(column: str, position: int, raw_value: CellValue) -> Diagnostic:
    return Diagnostic(
        kind="parse_error",
        message=f"Cell '{raw_value}' in column '{column}' at row {position} is not numeric.",
        context={"column": column, "position": position, "raw_value": raw_value},
    )

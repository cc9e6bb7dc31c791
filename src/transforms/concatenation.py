"""Schema-checked column-wise concatenation of wide tables.

This module aligns two wide tables on declared key columns. Row counts
are computed from the keys; unmatched keys are dropped (inner) or padded
with None (outer), and each one is reported.
"""

from __future__ import annotations

from typing import Sequence

from core.constants import JOIN_INNER, SUPPORTED_CONCAT_MODES
from core.errors import SchemaMismatchError
from core.logging_config import get_logger, log_diagnostics
from core.types import CellValue, Diagnostic, StageResult, WideRecord, WideTable

_LOGGER = get_logger(__name__)


def concatenate_wide_tables(
    left: WideTable,
    right: WideTable,
    key_columns: Sequence[str],
    how: str = JOIN_INNER,
) -> StageResult[WideTable]:
    """Join two wide tables column-wise on key columns.

    Args:
        left: Table whose row order and key columns lead the output.
        right: Table whose non-key columns are appended.
        key_columns: Columns identifying a row in both tables.
        how: ``inner`` drops unmatched keys, ``outer`` pads them.

    Returns:
        Concatenated table plus one ``row_mismatch`` diagnostic per
        dropped or padded key.

    Raises:
        SchemaMismatchError: If modes, keys, key cell types or column names
            conflict.
    """
    if how not in SUPPORTED_CONCAT_MODES:
        raise SchemaMismatchError(
            f"Unsupported concatenation mode '{how}'. "
            f"Choose one of: {', '.join(SUPPORTED_CONCAT_MODES)}."
        )
    if not key_columns:
        raise SchemaMismatchError("Concatenation requires at least one key column.")
    _check_key_types(left, right, key_columns)
    left_rows = _index_by_key(left, key_columns, "left")
    right_rows = _index_by_key(right, key_columns, "right")
    left_extra = [column for column in left.columns if column not in key_columns]
    right_extra = [column for column in right.columns if column not in key_columns]
    collisions = sorted(set(left_extra) & set(right_extra))
    if collisions:
        raise SchemaMismatchError(
            f"Columns {collisions} exist in both tables. Rename them before concatenating."
        )
    columns = tuple(key_columns) + tuple(left_extra) + tuple(right_extra)
    keys = list(left_rows) + [key for key in right_rows if key not in left_rows]
    records: list[WideRecord] = []
    diagnostics: list[Diagnostic] = []
    for key in keys:
        left_record = left_rows.get(key)
        right_record = right_rows.get(key)
        if left_record is None or right_record is None:
            diagnostics.append(_row_mismatch(key, key_columns, left_record is None, how))
            if how == JOIN_INNER:
                continue
        values = (
            key
            + _cells(left, left_record, left_extra)
            + _cells(right, right_record, right_extra)
        )
        position = left_record.position if left_record is not None else len(records)
        records.append(WideRecord(values=values, position=position))
    log_diagnostics(_LOGGER, "concatenate_wide_tables", tuple(diagnostics))
    _LOGGER.info(
        "tables_concatenated",
        mode=how,
        left_rows=len(left.records),
        right_rows=len(right.records),
        output_rows=len(records),
    )
    return StageResult(
        table=WideTable(columns=columns, records=tuple(records)),
        diagnostics=tuple(diagnostics),
    )


def _check_key_types(left: WideTable, right: WideTable, key_columns: Sequence[str]) -> None:
    for column in key_columns:
        left_types = _cell_type_names(left, column)
        right_types = _cell_type_names(right, column)
        if left_types and right_types and left_types != right_types:
            raise SchemaMismatchError(
                f"Key column '{column}' holds {left_types} cells in the left table and "
                f"{right_types} cells in the right table. Coerce both sides to one type."
            )


def _cell_type_names(table: WideTable, column: str) -> list[str]:
    return sorted(
        {type(value).__name__ for value in table.column_values(column) if value is not None}
    )


def _index_by_key(
    table: WideTable,
    key_columns: Sequence[str],
    side: str,
) -> dict[tuple[CellValue, ...], WideRecord]:
    indices = [table.column_index(column) for column in key_columns]
    rows: dict[tuple[CellValue, ...], WideRecord] = {}
    for record in table.records:
        key = tuple(record.values[index] for index in indices)
        if key in rows:
            raise SchemaMismatchError(
                f"Duplicate key {list(key)} in {side} table for key columns "
                f"{list(key_columns)}. Keys must identify one row."
            )
        rows[key] = record
    return rows


def _cells(
    table: WideTable,
    record: WideRecord | None,
    columns: Sequence[str],
) -> tuple[CellValue, ...]:
    if record is None:
        return tuple(None for _ in columns)
    return tuple(record.values[table.column_index(column)] for column in columns)


def _row_mismatch(
    key: tuple[CellValue, ...],
    key_columns: Sequence[str],
    missing_left: bool,
    how: str,
) -> Diagnostic:
    missing_side = "left" if missing_left else "right"
    action = "dropped" if how == JOIN_INNER else "padded"
    return Diagnostic(
        kind="row_mismatch",
        message=f"Key {list(key)} is missing from the {missing_side} table and was {action}.",
        context={
            "key": dict(zip(key_columns, key)),
            "missing_side": missing_side,
            "action": action,
        },
    )

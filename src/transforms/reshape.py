"""Wide-to-long reshaping transform.

This module melts selected value columns of a wide table into one
observation per (row, value column). Missing cells become None values;
rows are never dropped.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from core.constants import METRIC_TOTAL, SUPPORTED_METRIC_KINDS
from core.errors import SchemaMismatchError
from core.logging_config import get_logger
from core.types import LongObservation, LongTable, MetricKind, WideTable

_LOGGER = get_logger(__name__)


def melt_wide_table(
    table: WideTable,
    identifier_columns: Sequence[str],
    value_columns: Sequence[str],
    metric_kind: MetricKind = METRIC_TOTAL,
    category_labels: Mapping[str, str] | None = None,
) -> LongTable:
    """Reshape a wide table into long form.

    Args:
        table: Input wide table.
        identifier_columns: Columns copied onto every output row.
        value_columns: Columns melted into ``category``/``value`` pairs.
        metric_kind: Kind recorded on every produced observation.
        category_labels: Optional value-column to category-label mapping;
            unmapped columns use their own name.

    Returns:
        Long table with ``len(table.records) * len(value_columns)`` rows,
        ordered by input row then value column.

    Raises:
        SchemaMismatchError: If a column is missing, listed twice, or is
            both an identifier and a value column.
    """
    _validate_columns(identifier_columns, value_columns, metric_kind)
    identifier_indices = [table.column_index(column) for column in identifier_columns]
    value_indices = [table.column_index(column) for column in value_columns]
    labels = dict(category_labels or {})
    observations: list[LongObservation] = []
    for record in table.records:
        identifiers = tuple(
            (column, record.values[index])
            for column, index in zip(identifier_columns, identifier_indices)
        )
        for column, index in zip(value_columns, value_indices):
            observations.append(
                LongObservation(
                    identifiers=identifiers,
                    category=labels.get(column, column),
                    metric_kind=metric_kind,
                    value=_numeric_or_none(record.values[index], column, record.position),
                )
            )
    _LOGGER.info(
        "table_reshaped",
        input_rows=len(table.records),
        value_columns=len(value_columns),
        output_rows=len(observations),
        metric_kind=metric_kind,
    )
    return LongTable(identifier_columns=tuple(identifier_columns), observations=tuple(observations))


def _validate_columns(
    identifier_columns: Sequence[str],
    value_columns: Sequence[str],
    metric_kind: str,
) -> None:
    if metric_kind not in SUPPORTED_METRIC_KINDS:
        raise SchemaMismatchError(
            f"Unsupported metric kind '{metric_kind}'. "
            f"Choose one of: {', '.join(SUPPORTED_METRIC_KINDS)}."
        )
    if not value_columns:
        raise SchemaMismatchError("Reshape requires at least one value column.")
    for label, columns in (("identifier", identifier_columns), ("value", value_columns)):
        if len(set(columns)) != len(columns):
            raise SchemaMismatchError(f"Duplicate {label} columns in {list(columns)}.")
    overlap = sorted(set(identifier_columns) & set(value_columns))
    if overlap:
        raise SchemaMismatchError(
            f"Columns {overlap} are declared both as identifier and value columns."
        )


def _numeric_or_none(value: object, column: str, position: int) -> int | float | None:
    if value is None or isinstance(value, (int, float)):
        return value
    raise SchemaMismatchError(
        f"Value column '{column}' holds non-numeric cell '{value}' at row {position}. "
        "Coerce value columns before reshaping."
    )

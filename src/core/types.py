"""Shared typed models.

This module defines the immutable tables passed between pipeline stages.
Every stage builds new instances; nothing here is mutated after creation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Literal, Mapping, TypeVar, Union

from core.errors import SchemaMismatchError

CellValue = Union[str, int, float, None]
MetricKind = Literal["total", "percent"]
DiagnosticKind = Literal[
    "parse_error",
    "malformed_record",
    "join_mismatch",
    "row_mismatch",
    "undefined_share",
]
TableT = TypeVar("TableT")


@dataclass(frozen=True)
class RawFragment:
    """Candidate list-item text.

    Attributes:
        text: Inner text of the list item, markup included.
        position: Zero-based index of the source line.
    """

    text: str
    position: int


@dataclass(frozen=True)
class TokenSet:
    """Numeric substrings extracted from one fragment.

    Attributes:
        fragment: Fragment the tokens were read from.
        tokens: Tokens in order of appearance.
    """

    fragment: RawFragment
    tokens: tuple[str, ...]


@dataclass(frozen=True)
class ExtractionSchema:
    """Ordered field names expected from every well-formed fragment."""

    field_names: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.field_names:
            raise SchemaMismatchError(
                "Extraction schema must declare at least one field name."
            )
        if len(set(self.field_names)) != len(self.field_names):
            raise SchemaMismatchError(
                f"Extraction schema has duplicate field names: {list(self.field_names)}."
            )

    @property
    def field_count(self) -> int:
        """Return the expected token count per fragment."""
        return len(self.field_names)


@dataclass(frozen=True)
class WideRecord:
    """One wide-table row.

    Attributes:
        values: Cells aligned with the owning table's columns.
        position: Source position of the row (line or CSV row index).
    """

    values: tuple[CellValue, ...]
    position: int


@dataclass(frozen=True)
class WideTable:
    """Wide table with declared column names.

    Attributes:
        columns: Ordered column names.
        records: Rows; each has exactly ``len(columns)`` cells.
    """

    columns: tuple[str, ...]
    records: tuple[WideRecord, ...] = ()

    def __post_init__(self) -> None:
        width = len(self.columns)
        for record in self.records:
            if len(record.values) != width:
                raise SchemaMismatchError(
                    f"Row at position {record.position} has {len(record.values)} cells, "
                    f"expected {width} for columns {list(self.columns)}."
                )

    def column_index(self, column: str) -> int:
        """Return the position of a declared column.

        Raises:
            SchemaMismatchError: If the column is not declared.
        """
        try:
            return self.columns.index(column)
        except ValueError as error:
            raise SchemaMismatchError(
                f"Column '{column}' is not present in table columns {list(self.columns)}. "
                "Fix the declared column list."
            ) from error

    def column_values(self, column: str) -> tuple[CellValue, ...]:
        """Return every cell of one column in row order."""
        index = self.column_index(column)
        return tuple(record.values[index] for record in self.records)


@dataclass(frozen=True)
class LongObservation:
    """One (identifiers, category) observation of a long table.

    Attributes:
        identifiers: Ordered ``(column, cell)`` pairs kept from the wide row.
        category: Name of the melted value column, or its configured label.
        metric_kind: Whether the value is a count or a percentage.
        value: Numeric value, or None when the source cell was missing.
    """

    identifiers: tuple[tuple[str, CellValue], ...]
    category: str
    metric_kind: MetricKind
    value: float | int | None

    @property
    def period(self) -> CellValue:
        """Return the first identifier cell, the observation period."""
        if not self.identifiers:
            return None
        return self.identifiers[0][1]


@dataclass(frozen=True)
class LongTable:
    """Long table produced by the reshaper."""

    identifier_columns: tuple[str, ...]
    observations: tuple[LongObservation, ...] = ()


@dataclass(frozen=True)
class CategoryAggregate:
    """Sum of one category over all periods, nulls excluded."""

    category: str
    value: float | int


@dataclass(frozen=True)
class JoinedRecord:
    """Category present in both joined sources."""

    category: str
    value_a: float | int
    value_b: float | int


@dataclass(frozen=True)
class ProportionRecord:
    """Per-category share of each joined column's total."""

    category: str
    share_a: float
    share_b: float


@dataclass(frozen=True)
class Diagnostic:
    """Non-fatal row-level problem recorded by a stage.

    Attributes:
        kind: Diagnostic category.
        message: Human readable description.
        context: Structured fields identifying the offending input.
    """

    kind: DiagnosticKind
    message: str
    context: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class StageResult(Generic[TableT]):
    """Best-effort stage output with the diagnostics it produced."""

    table: TableT
    diagnostics: tuple[Diagnostic, ...] = ()

    def diagnostics_of(self, kind: DiagnosticKind) -> tuple[Diagnostic, ...]:
        """Return diagnostics of one kind in emission order."""
        return tuple(diagnostic for diagnostic in self.diagnostics if diagnostic.kind == kind)


@dataclass(frozen=True)
class CsvTableOptions:
    """Positional CSV reading options.

    Attributes:
        skip_rows: Leading rows discarded before data starts.
        column_names: Zero-based column index to column name mapping.
            Columns not named keep the name ``column_<index>``.
        drop_columns: Zero-based column indices removed after reading.
    """

    skip_rows: int = 0
    column_names: Mapping[int, str] = field(default_factory=dict)
    drop_columns: tuple[int, ...] = ()

"""Tabular CSV readers.

This module loads already-tabular sources (census demographics, crime
counts) into wide tables. Header rows are skipped, columns are renamed
by position and declared columns such as a trailing empty one are
dropped before anything is reshaped.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from core.errors import IngestError, SchemaMismatchError
from core.logging_config import get_logger
from core.types import CsvTableOptions, WideRecord, WideTable

_LOGGER = get_logger(__name__)


def read_csv_table(csv_path: str | Path, options: CsvTableOptions) -> WideTable:
    """Read a headerless CSV into a wide table of text cells.

    Args:
        csv_path: CSV file path.
        options: Skip, rename and drop options.

    Returns:
        Wide table with empty cells as None and all other cells as text.

    Raises:
        IngestError: If the file cannot be read.
        SchemaMismatchError: If a rename or drop index is outside the table
            or two columns end up with the same name.
    """
    frame = _load_frame(Path(csv_path).expanduser(), options.skip_rows)
    width = frame.shape[1]
    _check_indices(options, width, csv_path)
    kept_indices = [index for index in range(width) if index not in options.drop_columns]
    columns = tuple(options.column_names.get(index, f"column_{index}") for index in kept_indices)
    if len(set(columns)) != len(columns):
        raise SchemaMismatchError(f"CSV {csv_path} maps several columns to one name: {columns}.")
    records = tuple(
        WideRecord(
            values=tuple(_cell(row[index]) for index in kept_indices),
            position=options.skip_rows + offset,
        )
        for offset, row in enumerate(frame.itertuples(index=False, name=None))
    )
    _LOGGER.info(
        "csv_table_loaded",
        csv_path=str(csv_path),
        row_count=len(records),
        column_count=len(columns),
        dropped_columns=list(options.drop_columns),
    )
    return WideTable(columns=columns, records=records)


def _load_frame(csv_path: Path, skip_rows: int) -> pd.DataFrame:
    if not csv_path.is_file():
        raise IngestError(
            f"Failed to read CSV at {csv_path}: file does not exist. Provide an existing file."
        )
    try:
        return pd.read_csv(
            csv_path,
            skiprows=skip_rows,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except (OSError, ValueError, pd.errors.ParserError) as error:
        raise IngestError(f"Failed to parse CSV at {csv_path}: {error}.") from error


def _check_indices(options: CsvTableOptions, width: int, csv_path: str | Path) -> None:
    declared = set(options.column_names) | set(options.drop_columns)
    out_of_range = sorted(index for index in declared if index < 0 or index >= width)
    if out_of_range:
        raise SchemaMismatchError(
            f"CSV {csv_path} has {width} columns; declared indices {out_of_range} "
            "are out of range. Fix the rename or drop configuration."
        )
    renamed_dropped = sorted(set(options.column_names) & set(options.drop_columns))
    if renamed_dropped:
        raise SchemaMismatchError(
            f"CSV columns {renamed_dropped} are both renamed and dropped."
        )


def _cell(value: object) -> str | None:
    text = str(value).strip()
    return text if text else None

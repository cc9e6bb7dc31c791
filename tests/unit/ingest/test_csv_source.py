"""Unit tests for tabular CSV readers."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import IngestError, SchemaMismatchError
from core.types import CsvTableOptions
from ingest.csv_source import read_csv_table
from tests.fixture_paths import fixture_path
from transforms.coercion import coerce_columns
from transforms.reshape import melt_wide_table

_CRIME_OPTIONS = CsvTableOptions(
    skip_rows=7,
    column_names={0: "Type", 1: "Borough", 2: "2000", 3: "2001", 4: "2002"},
    drop_columns=(5,),
)


def test_read_csv_table_skips_headers_and_renames_by_position() -> None:
    """Header rows are skipped and columns take their declared names."""
    table = read_csv_table(fixture_path("crime_felony.csv"), _CRIME_OPTIONS)

    assert table.columns == ("Type", "Borough", "2000", "2001", "2002")
    assert len(table.records) == 4
    assert table.records[2].values == ("RAPE", "Bronx", "1,031", "925", "N/A")


def test_dropped_trailing_column_never_reaches_long_table() -> None:
    """The trailing empty column is removed before reshape."""
    table = read_csv_table(fixture_path("crime_felony.csv"), _CRIME_OPTIONS)
    coerced = coerce_columns(table, ["2000", "2001", "2002"])

    long_table = melt_wide_table(coerced.table, ["Type", "Borough"], ["2000", "2001", "2002"])

    assert len(long_table.observations) == 4 * 3
    assert {observation.category for observation in long_table.observations} == {
        "2000",
        "2001",
        "2002",
    }
    assert len(coerced.diagnostics_of("parse_error")) == 1


def test_read_csv_table_names_unlisted_columns_by_index() -> None:
    """Columns without a declared name keep a positional name."""
    table = read_csv_table(fixture_path("crime_felony.csv"), CsvTableOptions(skip_rows=7))

    assert table.columns[-1] == "column_5"
    assert table.column_values("column_5") == (None, None, None, None)


def test_read_csv_table_raises_for_out_of_range_index() -> None:
    """Rename or drop indices beyond the table width are rejected."""
    options = CsvTableOptions(skip_rows=7, drop_columns=(9,))

    with pytest.raises(SchemaMismatchError):
        read_csv_table(fixture_path("crime_felony.csv"), options)


def test_read_csv_table_raises_for_missing_file(tmp_path: Path) -> None:
    """Missing CSV files raise an ingest error."""
    with pytest.raises(IngestError):
        read_csv_table(tmp_path / "missing.csv", CsvTableOptions())

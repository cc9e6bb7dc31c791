"""Unit tests for pandas frame export."""

from __future__ import annotations

import pytest

from core.types import (
    JoinedRecord,
    LongObservation,
    LongTable,
    ProportionRecord,
    WideRecord,
    WideTable,
)
from report.frames import long_table_frame, proportions_frame, records_frame, wide_table_frame


def test_wide_table_frame_keeps_declared_columns() -> None:
    """Wide frames carry the table's columns in order."""
    table = WideTable(columns=("year", "stops"), records=(WideRecord((2011, 685724), 0),))

    frame = wide_table_frame(table)

    assert list(frame.columns) == ["year", "stops"]
    assert frame.loc[0, "stops"] == 685724


def test_long_table_frame_flattens_identifiers() -> None:
    """Identifier pairs become leading columns."""
    table = LongTable(
        identifier_columns=("year",),
        observations=(
            LongObservation((("year", 2011),), "black", "total", 350743),
            LongObservation((("year", 2012),), "black", "total", None),
        ),
    )

    frame = long_table_frame(table)

    assert list(frame.columns) == ["year", "category", "metric_kind", "value"]
    assert frame["year"].tolist() == [2011, 2012]
    assert frame["value"].isna().tolist() == [False, True]


def test_records_frame_uses_dataclass_fields() -> None:
    """Joined records map to one column per field."""
    frame = records_frame([JoinedRecord("black", 2_000_000, 3_000)])

    assert list(frame.columns) == ["category", "value_a", "value_b"]


def test_records_frame_rejects_non_record_rows() -> None:
    """Rows that are not summary records are an error, not skipped."""
    with pytest.raises(TypeError, match="dict"):
        records_frame([JoinedRecord("black", 2_000_000, 3_000), {"category": "white"}])


def test_proportions_frame_adds_share_ratio() -> None:
    """Proportion frames include the over-representation ratio."""
    frame = proportions_frame([ProportionRecord("black", share_a=0.25, share_b=0.5)])

    assert frame.loc[0, "share_ratio"] == pytest.approx(2.0)

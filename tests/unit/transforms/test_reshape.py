"""Unit tests for wide-to-long reshaping."""

from __future__ import annotations

import pytest

from core.errors import SchemaMismatchError
from core.types import WideRecord, WideTable
from transforms.reshape import melt_wide_table


def _table() -> WideTable:
    return WideTable(
        columns=("year", "black", "latinx", "white", "black_pct"),
        records=(
            WideRecord(values=(2011, 350743, 223740, 61805, 53), position=0),
            WideRecord(values=(2012, 284229, None, 50366, 55), position=1),
            WideRecord(values=(2013, 104958, 55191, 20877, 56), position=2),
        ),
    )


def test_melt_wide_table_row_count_is_rows_times_value_columns() -> None:
    """Every (row, value column) pair should appear exactly once."""
    long_table = melt_wide_table(_table(), ["year"], ["black", "latinx", "white"])

    pairs = [
        (observation.period, observation.category) for observation in long_table.observations
    ]
    assert len(pairs) == 3 * 3
    assert set(pairs) == {
        (year, category)
        for year in (2011, 2012, 2013)
        for category in ("black", "latinx", "white")
    }
    assert len(set(pairs)) == len(pairs)


def test_melt_wide_table_propagates_nulls_as_values() -> None:
    """A missing cell yields a null observation, not a dropped row."""
    long_table = melt_wide_table(_table(), ["year"], ["latinx"])

    values = {observation.period: observation.value for observation in long_table.observations}
    assert values == {2011: 223740, 2012: None, 2013: 55191}


def test_melt_wide_table_applies_labels_and_metric_kind() -> None:
    """Category labels and metric kind come from the call, not the data."""
    long_table = melt_wide_table(
        _table(),
        ["year"],
        ["black_pct"],
        metric_kind="percent",
        category_labels={"black_pct": "black"},
    )

    observation = long_table.observations[0]
    assert observation.category == "black"
    assert observation.metric_kind == "percent"
    assert observation.identifiers == (("year", 2011),)
    assert long_table.identifier_columns == ("year",)


def test_melt_wide_table_raises_for_missing_columns() -> None:
    """Undeclared identifier or value columns are fatal."""
    with pytest.raises(SchemaMismatchError):
        melt_wide_table(_table(), ["period"], ["black"])
    with pytest.raises(SchemaMismatchError):
        melt_wide_table(_table(), ["year"], ["asian"])


def test_melt_wide_table_raises_for_overlapping_columns() -> None:
    """A column cannot be both identifier and value."""
    with pytest.raises(SchemaMismatchError):
        melt_wide_table(_table(), ["year"], ["year", "black"])


def test_melt_wide_table_raises_for_uncoerced_values() -> None:
    """Text value cells must be coerced first."""
    table = WideTable(columns=("year", "black"), records=(WideRecord(("2011", "350,743"), 0),))

    with pytest.raises(SchemaMismatchError):
        melt_wide_table(table, ["year"], ["black"])

"""Unit tests for cross-dataset aggregation and join."""

from __future__ import annotations

from core.types import LongObservation, LongTable
from reconcile.joiner import aggregate_by_category, dropped_categories, join_long_tables


def _long_table(
    *rows: tuple[int, str, float | int | None],
    metric_kind: str = "total",
) -> LongTable:
    observations = tuple(
        LongObservation(
            identifiers=(("year", year),),
            category=category,
            metric_kind=metric_kind,  # type: ignore[arg-type]
            value=value,
        )
        for year, category, value in rows
    )
    return LongTable(identifier_columns=("year",), observations=observations)


def test_aggregate_combines_canonicalized_spellings() -> None:
    """Differently spelled labels mapping to one key are summed together."""
    table = _long_table(
        (2011, "Black or African American", 1_000_000),
        (2012, "black", 1_000_000),
        (2011, "White", 2_700_000),
    )

    aggregates = aggregate_by_category(table, {"Black or African American": "black"})

    assert {row.category: row.value for row in aggregates} == {
        "black": 2_000_000,
        "white": 2_700_000,
    }


def test_aggregate_ignores_nulls_and_all_null_sums_to_zero() -> None:
    """Null values are skipped; an all-null category aggregates to 0."""
    table = _long_table(
        (2011, "asian", None),
        (2012, "asian", None),
        (2011, "white", 5),
        (2012, "white", None),
    )

    aggregates = {row.category: row.value for row in aggregate_by_category(table)}

    assert aggregates == {"asian": 0, "white": 5}


def test_aggregate_only_counts_requested_metric_kind() -> None:
    """Percent observations are not mixed into total sums."""
    totals = _long_table((2011, "black", 350_743))
    percents = _long_table((2011, "black", 53), metric_kind="percent")
    table = LongTable(
        identifier_columns=("year",),
        observations=totals.observations + percents.observations,
    )

    assert aggregate_by_category(table)[0].value == 350_743
    assert aggregate_by_category(table, metric_kind="percent")[0].value == 53


def test_join_long_tables_drops_categories_missing_from_one_source() -> None:
    """Categories found in one source only are excluded and reported."""
    population = _long_table(
        (2011, "Black or African American", 2_000_000),
        (2011, "white", 2_700_000),
        (2011, "two or more races", 100_000),
    )
    stops = _long_table((2011, "black", 3_000), (2011, "white", 900), (2011, "other", 10))

    result = join_long_tables(population, stops, {"Black or African American": "black"})

    assert [(row.category, row.value_a, row.value_b) for row in result.table] == [
        ("black", 2_000_000, 3_000),
        ("white", 2_700_000, 900),
    ]
    mismatches = result.diagnostics_of("join_mismatch")
    assert [(row.context["source"], row.context["categories"]) for row in mismatches] == [
        ("a", ["two or more races"]),
        ("b", ["other"]),
    ]
    assert dropped_categories(result) == ("other", "two or more races")


def test_join_long_tables_reports_nothing_when_vocabularies_match() -> None:
    """Matching vocabularies produce no diagnostics."""
    table = _long_table((2011, "black", 1))

    result = join_long_tables(table, table)

    assert result.diagnostics == ()
    assert len(result.table) == 1

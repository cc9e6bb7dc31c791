"""Cross-dataset aggregation and inner join.

Each long table is summed per canonical category, then the two sets of
aggregates are inner-joined. Categories found in only one source are
dropped on purpose and listed in ``join_mismatch`` diagnostics, because
the comparison is only meaningful over the shared vocabulary.
"""

from __future__ import annotations

import math
from typing import Mapping

from core.constants import METRIC_TOTAL
from core.logging_config import get_logger, log_diagnostics
from core.types import (
    CategoryAggregate,
    Diagnostic,
    JoinedRecord,
    LongTable,
    MetricKind,
    StageResult,
)
from reconcile.categories import build_category_map, canonicalize_category

_LOGGER = get_logger(__name__)


def aggregate_by_category(
    table: LongTable,
    category_map: Mapping[str, str] | None = None,
    metric_kind: MetricKind = METRIC_TOTAL,
) -> tuple[CategoryAggregate, ...]:
    """Sum observation values per canonical category.

    Args:
        table: Long table to aggregate.
        category_map: Raw label to canonical key mapping.
        metric_kind: Only observations of this kind are summed.

    Returns:
        Aggregates in first-seen category order. Null values are ignored;
        a category whose values are all null sums to 0.
    """
    normalized_map = build_category_map(category_map)
    values_by_category: dict[str, list[float | int]] = {}
    for observation in table.observations:
        if observation.metric_kind != metric_kind:
            continue
        key = canonicalize_category(observation.category, normalized_map)
        bucket = values_by_category.setdefault(key, [])
        if observation.value is not None:
            bucket.append(observation.value)
    return tuple(
        CategoryAggregate(category=category, value=_sum_values(values))
        for category, values in values_by_category.items()
    )


def join_long_tables(
    table_a: LongTable,
    table_b: LongTable,
    category_map: Mapping[str, str] | None = None,
    metric_kind: MetricKind = METRIC_TOTAL,
) -> StageResult[tuple[JoinedRecord, ...]]:
    """Aggregate two long tables and inner-join them on category.

    Args:
        table_a: First source, e.g. population counts.
        table_b: Second source, e.g. stop counts.
        category_map: Shared canonicalization map for both sources.
        metric_kind: Metric kind aggregated from both tables.

    Returns:
        Joined records sorted by category, plus one ``join_mismatch``
        diagnostic per source that lost categories.
    """
    aggregates_a = _as_mapping(aggregate_by_category(table_a, category_map, metric_kind))
    aggregates_b = _as_mapping(aggregate_by_category(table_b, category_map, metric_kind))
    shared = sorted(set(aggregates_a) & set(aggregates_b))
    joined = tuple(
        JoinedRecord(
            category=category,
            value_a=aggregates_a[category],
            value_b=aggregates_b[category],
        )
        for category in shared
    )
    diagnostics = tuple(
        _join_mismatch(source, sorted(set(aggregates) - set(shared)))
        for source, aggregates in (("a", aggregates_a), ("b", aggregates_b))
        if set(aggregates) - set(shared)
    )
    log_diagnostics(_LOGGER, "join_long_tables", diagnostics)
    _LOGGER.info(
        "tables_joined",
        categories_a=len(aggregates_a),
        categories_b=len(aggregates_b),
        joined_categories=len(joined),
    )
    return StageResult(table=joined, diagnostics=diagnostics)


def dropped_categories(result: StageResult[tuple[JoinedRecord, ...]]) -> tuple[str, ...]:
    """Return every category dropped by the join, sorted."""
    dropped: set[str] = set()
    for diagnostic in result.diagnostics_of("join_mismatch"):
        dropped.update(diagnostic.context.get("categories", ()))  # type: ignore[arg-type]
    return tuple(sorted(dropped))


def _as_mapping(aggregates: tuple[CategoryAggregate, ...]) -> dict[str, float | int]:
    return {aggregate.category: aggregate.value for aggregate in aggregates}


def _sum_values(values: list[float | int]) -> float | int:
    if all(isinstance(value, int) for value in values):
        return sum(values)
    return math.fsum(values)


def _join_mismatch(source: str, categories: list[str]) -> Diagnostic:
    return Diagnostic(
        kind="join_mismatch",
        message=(
            f"Categories {categories} appear only in source {source} "
            "and were excluded from the join."
        ),
        context={"source": source, "categories": categories},
    )

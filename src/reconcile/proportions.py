"""Share-of-total normalization for joined tables.

Each joined column is divided by its own sum over the surviving join
rows, so population share and stop share sit on a common 0-1 scale.
"""

from __future__ import annotations

import math
from typing import Iterable

from core.logging_config import get_logger, log_diagnostics
from core.types import Diagnostic, JoinedRecord, ProportionRecord, StageResult

_LOGGER = get_logger(__name__)
_JOINED_COLUMNS = ("value_a", "value_b")


def compute_proportions(
    records: Iterable[JoinedRecord],
) -> StageResult[tuple[ProportionRecord, ...]]:
    """Normalize both joined columns into shares.

    Args:
        records: Joined records, one per shared category.

    Returns:
        Proportion records in input order; each share column sums to 1.
        When a column total is zero or negative the shares are undefined:
        the table is empty and each such column gets one
        ``undefined_share`` diagnostic.
    """
    joined = tuple(records)
    if not joined:
        return StageResult(table=())
    totals = {
        column: math.fsum(getattr(record, column) for record in joined)
        for column in _JOINED_COLUMNS
    }
    diagnostics = tuple(
        _undefined_share(column, total, joined)
        for column, total in totals.items()
        if total <= 0
    )
    if diagnostics:
        log_diagnostics(_LOGGER, "compute_proportions", diagnostics)
        return StageResult(table=(), diagnostics=diagnostics)
    proportions = tuple(
        ProportionRecord(
            category=record.category,
            share_a=record.value_a / totals["value_a"],
            share_b=record.value_b / totals["value_b"],
        )
        for record in joined
    )
    return StageResult(table=proportions)


def share_ratio(record: ProportionRecord) -> float | None:
    """Return ``share_b / share_a``, or None when ``share_a`` is zero.

    A ratio above 1 means the category is over-represented in source b
    relative to source a.
    """
    if record.share_a == 0:
        return None
    return record.share_b / record.share_a


def _undefined_share(
    column: str,
    total: float,
    records: tuple[JoinedRecord, ...],
) -> Diagnostic:
    categories = [record.category for record in records]
    return Diagnostic(
        kind="undefined_share",
        message=(
            f"Joined column '{column}' sums to {total} over categories {categories}; "
            "shares are undefined. Check the source tables for missing counts."
        ),
        context={"column": column, "total": total, "categories": categories},
    )

"""pandas views of pipeline tables.

The presentation layer (charts, rendered tables) consumes DataFrames.
These helpers build fresh frames; the source tables are left untouched.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Iterable, Union

import pandas as pd

from core.types import (
    CategoryAggregate,
    JoinedRecord,
    LongTable,
    ProportionRecord,
    WideTable,
)
from reconcile.proportions import share_ratio
from report.pipeline import DisparityReport

SummaryRecord = Union[CategoryAggregate, JoinedRecord, ProportionRecord]


def wide_table_frame(table: WideTable) -> pd.DataFrame:
    """Return one frame row per wide record."""
    return pd.DataFrame(
        [record.values for record in table.records],
        columns=list(table.columns),
    )


def long_table_frame(table: LongTable) -> pd.DataFrame:
    """Return identifier columns followed by category, metric_kind and value."""
    rows = []
    for observation in table.observations:
        row = dict(observation.identifiers)
        row.update(
            category=observation.category,
            metric_kind=observation.metric_kind,
            value=observation.value,
        )
        rows.append(row)
    columns = list(table.identifier_columns) + ["category", "metric_kind", "value"]
    return pd.DataFrame(rows, columns=columns)


def records_frame(records: Iterable[SummaryRecord]) -> pd.DataFrame:
    """Return a frame for joined, aggregate or proportion records.

    Raises:
        TypeError: If a record is not one of the summary record types.
    """
    rows = []
    for record in records:
        if not isinstance(record, (CategoryAggregate, JoinedRecord, ProportionRecord)):
            raise TypeError(
                f"Cannot build a frame row from {type(record).__name__}; expected "
                "CategoryAggregate, JoinedRecord or ProportionRecord."
            )
        rows.append(asdict(record))
    return pd.DataFrame(rows)


def proportions_frame(records: Iterable[ProportionRecord]) -> pd.DataFrame:
    """Return proportion records with an added ``share_ratio`` column."""
    materialized = list(records)
    frame = records_frame(materialized)
    frame["share_ratio"] = [share_ratio(record) for record in materialized]
    return frame


def report_frames(report: DisparityReport) -> dict[str, pd.DataFrame]:
    """Return every report table as a named frame."""
    return {
        "stop_table": wide_table_frame(report.stop_table),
        "stop_long": long_table_frame(report.stop_long),
        "population_long": long_table_frame(report.population_long),
        "joined": records_frame(report.joined),
        "proportions": proportions_frame(report.proportions),
    }

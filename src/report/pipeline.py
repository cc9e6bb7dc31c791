"""Disparity report orchestration.

This module runs the stop-and-frisk extraction path and the population
CSV path, joins them by category and computes shares. Each stage output
is the sole input of the next; nothing is shared between runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from core.config import FriskConfig
from core.errors import PipelineSpecError, SchemaMismatchError
from core.logging_config import get_logger
from core.pipeline_spec import PipelineSpec, PopulationSpec, ReshapeSpec
from core.types import (
    Diagnostic,
    JoinedRecord,
    LongTable,
    ProportionRecord,
    WideTable,
)
from extract.assembly import assemble_records
from extract.list_items import filter_list_items
from extract.tokens import extract_token_sets
from ingest.csv_source import read_csv_table
from ingest.text_source import read_source_lines
from reconcile.joiner import dropped_categories, join_long_tables
from reconcile.proportions import compute_proportions
from transforms.coercion import coerce_columns
from transforms.reshape import melt_wide_table

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class DisparityReport:
    """Every table produced by one report run.

    Attributes:
        stop_table: Coerced wide table extracted from the list items.
        stop_long: Stop observations in long form.
        population_long: Population observations in long form.
        joined: Aggregated population (a) and stops (b) per shared category.
        proportions: Population share (a) and stop share (b) per category.
        diagnostics: Row-level diagnostics from all stages, in stage order.
    """

    stop_table: WideTable
    stop_long: LongTable
    population_long: LongTable
    joined: tuple[JoinedRecord, ...]
    proportions: tuple[ProportionRecord, ...]
    diagnostics: tuple[Diagnostic, ...]


class DisparityReportRunner:
    """Runner for one declared disparity report."""

    def __init__(self, spec: PipelineSpec, config: FriskConfig) -> None:
        self._spec = spec
        self._config = config

    def run(
        self,
        lines: Sequence[str] | None = None,
        population_table: WideTable | None = None,
    ) -> DisparityReport:
        """Execute every stage and return the report.

        Args:
            lines: Already-fetched source lines; fetched when omitted.
            population_table: Already-loaded population table; read from
                the declared CSV when omitted.
        """
        population_spec = self._require_population()
        diagnostics: list[Diagnostic] = []
        stop_table = self._build_stop_table(lines, diagnostics)
        stop_long = _combine_long_tables(
            [_melt(stop_table, reshape) for reshape in self._spec.stop_reshapes]
        )
        population_long = self._build_population_long(
            population_spec, population_table, diagnostics
        )
        join_result = join_long_tables(
            population_long,
            stop_long,
            category_map=self._spec.category_map,
        )
        diagnostics.extend(join_result.diagnostics)
        proportions = compute_proportions(join_result.table)
        diagnostics.extend(proportions.diagnostics)
        _LOGGER.info(
            "disparity_report_completed",
            stop_rows=len(stop_table.records),
            joined_categories=len(join_result.table),
            dropped_categories=list(dropped_categories(join_result)),
            diagnostic_count=len(diagnostics),
        )
        return DisparityReport(
            stop_table=stop_table,
            stop_long=stop_long,
            population_long=population_long,
            joined=join_result.table,
            proportions=proportions.table,
            diagnostics=tuple(diagnostics),
        )

    def _require_population(self) -> PopulationSpec:
        if self._spec.population is None:
            raise PipelineSpecError(
                "Pipeline spec has no 'population' section. Declare the population CSV "
                "layout and reshape columns."
            )
        return self._spec.population

    def _build_stop_table(
        self,
        lines: Sequence[str] | None,
        diagnostics: list[Diagnostic],
    ) -> WideTable:
        if lines is None:
            source_uri = self._spec.source_uri or self._config.source_url
            lines = read_source_lines(self._resolve_source(source_uri), self._config)
        fragments = filter_list_items(lines)
        token_sets = extract_token_sets(fragments)
        extraction = self._spec.extraction
        assembled = assemble_records(token_sets, extraction.schema)
        diagnostics.extend(assembled.diagnostics)
        coerced = coerce_columns(assembled.table, extraction.coerce_columns)
        diagnostics.extend(coerced.diagnostics)
        return coerced.table

    def _build_population_long(
        self,
        population_spec: PopulationSpec,
        population_table: WideTable | None,
        diagnostics: list[Diagnostic],
    ) -> LongTable:
        if population_table is None:
            population_table = read_csv_table(
                self._resolve_path(population_spec.path),
                population_spec.csv_options,
            )
        coerced = coerce_columns(population_table, population_spec.coerce_columns)
        diagnostics.extend(coerced.diagnostics)
        return _melt(coerced.table, population_spec.reshape)

    def _resolve_source(self, source_uri: str) -> str:
        if source_uri.startswith(("http://", "https://")):
            return source_uri
        return str(self._resolve_path(source_uri))

    def _resolve_path(self, raw_path: str | None) -> Path:
        if raw_path is None:
            raise PipelineSpecError(
                "Pipeline spec field 'population.path' is required when no population "
                "table is passed in."
            )
        path = Path(raw_path).expanduser()
        if path.is_absolute():
            return path
        return self._config.data_root / path


def build_disparity_report(
    spec: PipelineSpec,
    config: FriskConfig,
    lines: Sequence[str] | None = None,
    population_table: WideTable | None = None,
) -> DisparityReport:
    """Run the declared disparity report.

    Args:
        spec: Validated pipeline spec.
        config: Runtime configuration.
        lines: Optional already-fetched source lines.
        population_table: Optional already-loaded population table.

    Returns:
        Report with every intermediate table and all diagnostics.

    Raises:
        IngestError: If a source cannot be read.
        SchemaMismatchError: If declared columns are missing.
        PipelineSpecError: If the pipeline spec lacks a required section.
    """
    return DisparityReportRunner(spec, config).run(lines, population_table)


def _melt(table: WideTable, reshape: ReshapeSpec) -> LongTable:
    return melt_wide_table(
        table,
        identifier_columns=reshape.identifier_columns,
        value_columns=reshape.value_columns,
        metric_kind=reshape.metric_kind,
        category_labels=reshape.category_labels,
    )


def _combine_long_tables(tables: list[LongTable]) -> LongTable:
    """Stack long tables that share identifier columns."""
    if not tables:
        raise PipelineSpecError("Pipeline spec must declare at least one stops reshape.")
    identifier_columns = tables[0].identifier_columns
    for table in tables[1:]:
        if table.identifier_columns != identifier_columns:
            raise SchemaMismatchError(
                f"Cannot stack long tables with identifiers {list(identifier_columns)} "
                f"and {list(table.identifier_columns)}. Use the same identifier columns."
            )
    observations = tuple(
        observation for table in tables for observation in table.observations
    )
    return LongTable(identifier_columns=identifier_columns, observations=observations)

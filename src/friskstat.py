"""Public SDK surface for friskstat.

This module provides a stable import path for report users.
It re-exports the pipeline entry points, stages and typed models.
"""

from __future__ import annotations

from core.config import FriskConfig
from core.errors import (
    ConfigError,
    FriskError,
    IngestError,
    PipelineSpecError,
    SchemaMismatchError,
)
from core.pipeline_spec import (
    PipelineSpec,
    PopulationSpec,
    ReshapeSpec,
    default_pipeline_spec,
    load_pipeline_spec,
)
from core.types import (
    CsvTableOptions,
    Diagnostic,
    ExtractionSchema,
    JoinedRecord,
    LongTable,
    ProportionRecord,
    WideTable,
)
from extract.assembly import assemble_records
from extract.list_items import filter_list_items
from extract.tokens import extract_token_sets, extract_tokens
from ingest.csv_source import read_csv_table
from ingest.text_source import read_source_lines
from reconcile.joiner import aggregate_by_category, join_long_tables
from reconcile.proportions import compute_proportions, share_ratio
from report.frames import report_frames
from report.pipeline import DisparityReport, build_disparity_report
from transforms.coercion import coerce_columns
from transforms.concatenation import concatenate_wide_tables
from transforms.reshape import melt_wide_table

__all__ = [
    "ConfigError",
    "CsvTableOptions",
    "Diagnostic",
    "DisparityReport",
    "ExtractionSchema",
    "FriskConfig",
    "FriskError",
    "IngestError",
    "JoinedRecord",
    "LongTable",
    "PipelineSpec",
    "PipelineSpecError",
    "PopulationSpec",
    "ProportionRecord",
    "ReshapeSpec",
    "SchemaMismatchError",
    "WideTable",
    "aggregate_by_category",
    "assemble_records",
    "build_disparity_report",
    "coerce_columns",
    "compute_proportions",
    "concatenate_wide_tables",
    "default_pipeline_spec",
    "extract_token_sets",
    "extract_tokens",
    "filter_list_items",
    "join_long_tables",
    "load_pipeline_spec",
    "melt_wide_table",
    "read_csv_table",
    "read_source_lines",
    "report_frames",
    "share_ratio",
]

"""Schema-checked wide-table assembly.

This module zips token sets into rows of a declared schema. Token sets
with the wrong length are rejected with a diagnostic instead of being
shifted into the wrong columns.
"""

from __future__ import annotations

from typing import Iterable

from core.logging_config import get_logger, log_diagnostics
from core.types import (
    Diagnostic,
    ExtractionSchema,
    StageResult,
    TokenSet,
    WideRecord,
    WideTable,
)

_LOGGER = get_logger(__name__)
_FRAGMENT_PREVIEW_LENGTH = 120


def assemble_records(
    token_sets: Iterable[TokenSet],
    schema: ExtractionSchema,
) -> StageResult[WideTable]:
    """Assemble token sets into a wide table.

    Args:
        token_sets: Extracted tokens, one set per fragment.
        schema: Declared field names and expected count.

    Returns:
        Wide table of conforming rows in input order, with one
        ``malformed_record`` diagnostic per rejected token set.
    """
    records: list[WideRecord] = []
    diagnostics: list[Diagnostic] = []
    for token_set in token_sets:
        if len(token_set.tokens) != schema.field_count:
            diagnostics.append(_malformed_record(token_set, schema))
            continue
        records.append(WideRecord(values=token_set.tokens, position=token_set.fragment.position))
    table = WideTable(columns=schema.field_names, records=tuple(records))
    log_diagnostics(_LOGGER, "assemble_records", tuple(diagnostics))
    _LOGGER.info(
        "records_assembled",
        accepted_count=len(records),
        rejected_count=len(diagnostics),
        field_count=schema.field_count,
    )
    return StageResult(table=table, diagnostics=tuple(diagnostics))


def _malformed_record(token_set: TokenSet, schema: ExtractionSchema) -> Diagnostic:
    """Build the rejection diagnostic for one token set."""
    preview = " ".join(token_set.fragment.text.split())[:_FRAGMENT_PREVIEW_LENGTH]
    return Diagnostic(
        kind="malformed_record",
        message=(
            f"Fragment at line {token_set.fragment.position} yielded "
            f"{len(token_set.tokens)} tokens, expected {schema.field_count}."
        ),
        context={
            "position": token_set.fragment.position,
            "token_count": len(token_set.tokens),
            "expected_count": schema.field_count,
            "tokens": list(token_set.tokens),
            "fragment": preview,
        },
    )

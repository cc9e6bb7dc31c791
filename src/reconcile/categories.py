"""Category label canonicalization.

Labels from independent sources differ in case, spacing and wording.
This module maps them onto shared join keys before aggregation.
"""

from __future__ import annotations

from typing import Mapping


def normalize_label(label: str) -> str:
    """Collapse whitespace and case-fold a label."""
    return " ".join(label.split()).casefold()


def build_category_map(mapping: Mapping[str, str] | None) -> dict[str, str]:
    """Normalize both sides of a configured canonicalization map.

    Args:
        mapping: Raw label to canonical key mapping.

    Returns:
        Mapping keyed and valued by normalized labels.
    """
    if not mapping:
        return {}
    return {normalize_label(raw): normalize_label(canonical) for raw, canonical in mapping.items()}


def canonicalize_category(label: str, category_map: Mapping[str, str]) -> str:
    """Return the join key for a label.

    Args:
        label: Category label as found in a source.
        category_map: Normalized map from ``build_category_map``.

    Returns:
        Mapped canonical key, or the normalized label when unmapped.
    """
    normalized = normalize_label(label)
    return category_map.get(normalized, normalized)

"""Simple list-item filter.

This module selects ``<li>`` spans without nested links from raw lines.
It is the first stage of the text extraction path.
"""

from __future__ import annotations

import re
from typing import Iterable

from core.constants import LIST_ITEM_PATTERN, NESTED_LINK_PATTERN
from core.logging_config import get_logger
from core.types import RawFragment

_LOGGER = get_logger(__name__)
_LIST_ITEM_RE = re.compile(LIST_ITEM_PATTERN, re.IGNORECASE | re.DOTALL)
_NESTED_LINK_RE = re.compile(NESTED_LINK_PATTERN, re.IGNORECASE)


def filter_list_items(lines: Iterable[str]) -> tuple[RawFragment, ...]:
    """Return simple list items in source order.

    Args:
        lines: Raw text lines of the fetched document.

    Returns:
        Fragments for every list item without a nested link. Order is
        preserved and nothing is deduplicated.
    """
    fragments: list[RawFragment] = []
    dropped_links = 0
    line_count = 0
    for position, line in enumerate(lines):
        line_count += 1
        for match in _LIST_ITEM_RE.finditer(line):
            inner_text = match.group(1)
            if _NESTED_LINK_RE.search(inner_text):
                dropped_links += 1
                continue
            fragments.append(RawFragment(text=inner_text, position=position))
    _LOGGER.info(
        "fragments_filtered",
        line_count=line_count,
        fragment_count=len(fragments),
        dropped_link_items=dropped_links,
    )
    return tuple(fragments)

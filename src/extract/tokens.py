"""Numeric token extraction.

This module pulls years, percentages and grouped or decimal numbers out
of list-item fragments, left to right, as untyped strings.
"""

from __future__ import annotations

import html
import re
from typing import Iterable

from core.constants import HTML_TAG_PATTERN, TOKEN_PATTERN
from core.types import RawFragment, TokenSet

_TOKEN_RE = re.compile(TOKEN_PATTERN, re.IGNORECASE)
_HTML_TAG_RE = re.compile(HTML_TAG_PATTERN)


def extract_tokens(fragment: RawFragment) -> TokenSet:
    """Extract numeric tokens from one fragment.

    Markup is replaced by spaces and entities are unescaped first, so a
    ``<br>`` between two numbers never glues them together.

    Args:
        fragment: Candidate list item.

    Returns:
        Token set in order of appearance.
    """
    plain_text = html.unescape(_HTML_TAG_RE.sub(" ", fragment.text))
    tokens = tuple(match.group(0) for match in _TOKEN_RE.finditer(plain_text))
    return TokenSet(fragment=fragment, tokens=tokens)


def extract_token_sets(fragments: Iterable[RawFragment]) -> tuple[TokenSet, ...]:
    """Extract token sets for each fragment in order."""
    return tuple(extract_tokens(fragment) for fragment in fragments)

"""
Generic, format-agnostic parsing utilities.

This module must NOT depend on format-specific libraries (like BeautifulSoup)
so it can be used for values coming from JSON payloads and scraped text alike.
"""

from __future__ import annotations

import re
from typing import Any

_SCORE_SEPARATOR = re.compile(r"\s*[-–—:]\s*")
_WHITESPACE = re.compile(r"\s+")


def parse_int(value: str | int | float | None) -> int | None:
    """Parse a value to an integer, handling common edge cases.

    Accepts strings, ints, floats, or None. Returns None for empty strings,
    "-", and values with a fractional part.
    """
    if value in (None, "", "-") or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (ValueError, TypeError):
        return None
    if not number.is_integer():
        return None
    return int(number)


def numeric_score(value: Any) -> int | None:
    """Accept a score only when the payload already carries a number.

    JSON payloads occasionally nest objects or strings where a score is
    expected; those are rejected rather than coerced.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    return int(value)


def split_score(text: str | None) -> tuple[int | None, int | None]:
    """Split scraped score text such as ``"27-24"`` into two scores.

    Either side that does not parse comes back as None.
    """
    if not text:
        return None, None
    parts = _SCORE_SEPARATOR.split(text.strip(), maxsplit=1)
    if len(parts) != 2:
        return None, None
    return parse_int(parts[0]), parse_int(parts[1])


def clean_text(value: Any) -> str | None:
    """Return stripped text for strings and numbers, None for anything empty."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return None


def slugify_id(value: str) -> str:
    """Collapse whitespace runs to dashes for synthesized identifiers."""
    return _WHITESPACE.sub("-", value.strip())

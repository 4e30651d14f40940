"""
Shared HTML / DOM-specific parsing utilities for the scraping sources.

Contains helpers that depend on BeautifulSoup or URL structure.
Generic data-type conversion (ints, scores) should live in parsing.py.
"""

from __future__ import annotations

from typing import Sequence
from urllib.parse import parse_qs, urljoin, urlparse

from bs4 import BeautifulSoup, Tag

HTML_PARSER = "lxml"


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, HTML_PARSER)


def select_text(element: Tag, selectors: Sequence[str]) -> str | None:
    """Return the text of the first selector that matches with non-empty text.

    Selectors are tried in order, so the most specific markup goes first and
    looser fallbacks after it.
    """
    for selector in selectors:
        node = element.select_one(selector)
        if node is None:
            continue
        text = node.get_text(" ", strip=True)
        if text:
            return text
    return None


def query_param(href: str, name: str, base_url: str | None = None) -> str | None:
    """Read a query parameter from a (possibly relative) link."""
    if not href:
        return None
    try:
        url = urljoin(base_url, href) if base_url else href
        values = parse_qs(urlparse(url).query).get(name)
    except ValueError:
        return None
    if not values:
        return None
    value = values[0].strip()
    return value or None

"""RugbyPass live page scraper.

The live page lists matches as ``<a class="link-box">`` anchors whose
``aria-label`` reads "View Ulster vs Benetton rugby union game stats and
news" and whose ``href`` carries the match id in a ``g=`` query parameter.
The page only carries upcoming and in-play matches, so everything it yields
is a fixture.
"""

from __future__ import annotations

import re
from typing import Iterable

import httpx
from bs4 import Tag

from ..config import RugbyPassConfig
from ..models import Game, SourceBatch
from ..normalization import FINISHED_STATUSES
from ..utils.html_parsing import parse_html, query_param
from .base import RugbySource

MATCH_SELECTOR = "a.link-box[aria-label*='rugby union']"
COMPETITION_LABEL = "RugbyPass"

_LABEL_PREFIX = re.compile(r"^View\s*", re.IGNORECASE)
_LABEL_SUFFIX = re.compile(r"\s*rugby union game stats and news\s*$", re.IGNORECASE)
_VERSUS = re.compile(r"\s+vs\s+", re.IGNORECASE)


def teams_from_label(label: str) -> tuple[str, str] | None:
    """Pull ``(home, away)`` out of an aria-label, or None if it doesn't fit."""
    if " vs " not in label.lower():
        return None
    text = _LABEL_PREFIX.sub("", label.strip())
    text = _LABEL_SUFFIX.sub("", text).strip()
    parts = _VERSUS.split(text)
    if len(parts) != 2:
        return None
    home, away = (part.strip() for part in parts)
    if not home or not away:
        return None
    return home, away


def extract_game(anchor: Tag, index: int, base_url: str) -> Game | None:
    teams = teams_from_label(anchor.get("aria-label") or "")
    if teams is None:
        return None
    home, away = teams

    match_id = query_param(anchor.get("href") or "", "g", base_url)
    return Game(
        id=match_id or f"rp-fix-{home}-{away}-{index}",
        competition=COMPETITION_LABEL,
        home=home,
        away=away,
        kickoff_iso=None,
        venue="",
    )


def select_matches(html: str) -> list[Tag]:
    return parse_html(html).select(MATCH_SELECTOR)


class RugbyPassSource(RugbySource):
    name = "rugbypass"

    def __init__(
        self,
        config: RugbyPassConfig,
        client: httpx.AsyncClient,
        finished_statuses: Iterable[str] = FINISHED_STATUSES,
    ) -> None:
        super().__init__(client, finished_statuses)
        self.config = config

    async def fetch(self) -> SourceBatch:
        response = await self._get(self.config.live_url)
        anchors = select_matches(response.text)
        return self._bucket(
            anchors,
            lambda anchor, index: extract_game(anchor, index, self.config.base_url),
        )

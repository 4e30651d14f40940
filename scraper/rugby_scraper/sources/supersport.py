"""SuperSport rugby fixtures and results scraper."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Iterable, Sequence

import httpx
from bs4 import Tag

from ..config import SuperSportConfig
from ..models import Game, SourceBatch
from ..normalization import FINISHED_STATUSES
from ..utils.html_parsing import parse_html, select_text
from ..utils.parsing import slugify_id, split_score
from .base import RugbySource

COMPETITION_LABEL = "SuperSport"


@dataclass(frozen=True)
class ItemSelectors:
    """CSS selectors for one listing page, each field tried in order."""

    item: str
    id_prefix: str
    competition: Sequence[str]
    home: Sequence[str]
    away: Sequence[str]
    kickoff: Sequence[str]
    venue: Sequence[str]
    status: Sequence[str]
    score: Sequence[str] = ()


FIXTURE_SELECTORS = ItemSelectors(
    item=".fixture-item",
    id_prefix="ss-fix",
    competition=(".fixture-competition",),
    home=(".fixture-home .team-name", ".home-team"),
    away=(".fixture-away .team-name", ".away-team"),
    kickoff=(".fixture-time", "time"),
    venue=(".fixture-venue",),
    status=(".fixture-status",),
)

RESULT_SELECTORS = ItemSelectors(
    item=".result-item",
    id_prefix="ss-res",
    competition=(".result-competition",),
    home=(".result-home .team-name", ".home-team"),
    away=(".result-away .team-name", ".away-team"),
    kickoff=(".result-date", "time"),
    venue=(".result-venue",),
    status=(".result-status",),
    score=(".result-score",),
)


def extract_game(item: Tag, selectors: ItemSelectors) -> Game | None:
    home = select_text(item, selectors.home)
    away = select_text(item, selectors.away)
    if not home or not away:
        return None

    home_score = away_score = None
    if selectors.score:
        score_text = select_text(item, selectors.score)
        if not score_text:
            return None
        home_score, away_score = split_score(score_text)

    kickoff = select_text(item, selectors.kickoff)
    return Game(
        id=slugify_id(f"{selectors.id_prefix}-{home}-{away}-{kickoff or ''}"),
        competition=select_text(item, selectors.competition) or COMPETITION_LABEL,
        home=home,
        away=away,
        kickoff_iso=kickoff,
        venue=select_text(item, selectors.venue) or "",
        home_score=home_score,
        away_score=away_score,
        status=select_text(item, selectors.status),
    )


def select_items(html: str, selectors: ItemSelectors) -> list[Tag]:
    return parse_html(html).select(selectors.item)


class SuperSportSource(RugbySource):
    name = "supersport"

    def __init__(
        self,
        config: SuperSportConfig,
        client: httpx.AsyncClient,
        finished_statuses: Iterable[str] = FINISHED_STATUSES,
    ) -> None:
        super().__init__(client, finished_statuses)
        self.config = config

    async def fetch(self) -> SourceBatch:
        # Both requests settle before a failure propagates.
        responses = await asyncio.gather(
            self._get(self.config.fixtures_url),
            self._get(self.config.results_url),
            return_exceptions=True,
        )
        for response in responses:
            if isinstance(response, BaseException):
                raise response
        fixtures_response, results_response = responses
        pages = (
            (fixtures_response.text, FIXTURE_SELECTORS),
            (results_response.text, RESULT_SELECTORS),
        )
        items = [
            (item, selectors)
            for html, selectors in pages
            for item in select_items(html, selectors)
        ]
        return self._bucket(items, lambda pair, index: extract_game(*pair))

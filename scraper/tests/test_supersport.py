"""Tests for the SuperSport fixtures/results scraper."""

from __future__ import annotations

import asyncio

import httpx
import pytest
from bs4 import BeautifulSoup

from conftest import SUPERSPORT_FIXTURES_HTML, SUPERSPORT_RESULTS_HTML
from rugby_scraper.config import SuperSportConfig
from rugby_scraper.errors import SourceFetchError
from rugby_scraper.sources.supersport import (
    FIXTURE_SELECTORS,
    RESULT_SELECTORS,
    SuperSportSource,
    extract_game,
    select_items,
)

FIXTURES_URL = "https://supersport.com/rugby/fixtures"
RESULTS_URL = "https://supersport.com/rugby/results"


def _item(html: str):
    return BeautifulSoup(html, "html.parser").find("div")


class TestExtractFixture:
    def test_full_fixture(self):
        item = select_items(SUPERSPORT_FIXTURES_HTML, FIXTURE_SELECTORS)[0]
        game = extract_game(item, FIXTURE_SELECTORS)
        assert game.id == "ss-fix-Stormers-Bulls-Sat-30-Nov-17:00"
        assert game.competition == "United Rugby Championship"
        assert game.kickoff_iso == "Sat 30 Nov 17:00"
        assert game.venue == "DHL Stadium"
        assert game.home_score is None

    def test_defaults_for_display_fields(self):
        item = select_items(SUPERSPORT_FIXTURES_HTML, FIXTURE_SELECTORS)[1]
        game = extract_game(item, FIXTURE_SELECTORS)
        assert game.competition == "SuperSport"
        assert game.venue == ""

    def test_missing_away_dropped(self):
        item = select_items(SUPERSPORT_FIXTURES_HTML, FIXTURE_SELECTORS)[2]
        assert extract_game(item, FIXTURE_SELECTORS) is None

    def test_fallback_team_selectors(self):
        item = _item(
            '<div class="fixture-item"><span class="home-team">Sharks</span>'
            '<span class="away-team">Lions</span></div>'
        )
        game = extract_game(item, FIXTURE_SELECTORS)
        assert (game.home, game.away) == ("Sharks", "Lions")
        assert game.id == "ss-fix-Sharks-Lions-"

    def test_status_is_read(self):
        item = _item(
            '<div class="fixture-item"><div class="fixture-home"><span class="team-name">A</span></div>'
            '<div class="fixture-away"><span class="team-name">B</span></div>'
            '<span class="fixture-status">Postponed</span></div>'
        )
        assert extract_game(item, FIXTURE_SELECTORS).status == "Postponed"


class TestExtractResult:
    def test_scores_split(self):
        item = select_items(SUPERSPORT_RESULTS_HTML, RESULT_SELECTORS)[0]
        game = extract_game(item, RESULT_SELECTORS)
        assert game.id == "ss-res-Griquas-Pumas-2024-11-23"
        assert (game.home_score, game.away_score) == (27, 24)
        assert game.kickoff_iso == "2024-11-23"
        assert game.competition == "Currie Cup"
        assert game.venue == "Kimberley"

    def test_missing_score_dropped(self):
        item = select_items(SUPERSPORT_RESULTS_HTML, RESULT_SELECTORS)[1]
        assert extract_game(item, RESULT_SELECTORS) is None

    def test_non_numeric_score_gives_nulls(self):
        item = _item(
            '<div class="result-item"><div class="result-home"><span class="team-name">A</span></div>'
            '<div class="result-away"><span class="team-name">B</span></div>'
            '<span class="result-score">P - P</span></div>'
        )
        game = extract_game(item, RESULT_SELECTORS)
        assert (game.home_score, game.away_score) == (None, None)


class TestSuperSportSource:
    @pytest.mark.asyncio
    async def test_fetch_both_pages(self, page_transport):
        transport = page_transport(
            {
                FIXTURES_URL: (200, SUPERSPORT_FIXTURES_HTML),
                RESULTS_URL: (200, SUPERSPORT_RESULTS_HTML),
            }
        )
        async with httpx.AsyncClient(transport=transport) as client:
            batch = await SuperSportSource(SuperSportConfig(), client).fetch()

        assert [(g.home, g.away) for g in batch.fixtures] == [("Stormers", "Bulls"), ("Sharks", "Lions")]
        assert [(g.home, g.away, g.home_score, g.away_score) for g in batch.results] == [
            ("Griquas", "Pumas", 27, 24)
        ]

    @pytest.mark.asyncio
    async def test_results_page_failure_fails_whole_call(self, page_transport):
        transport = page_transport({FIXTURES_URL: (200, SUPERSPORT_FIXTURES_HTML)})
        async with httpx.AsyncClient(transport=transport) as client:
            with pytest.raises(SourceFetchError, match="HTTP 404"):
                await SuperSportSource(SuperSportConfig(), client).fetch()

    @pytest.mark.asyncio
    async def test_failed_page_waits_for_sibling_request(self):
        finished: list[str] = []

        async def handler(request: httpx.Request) -> httpx.Response:
            if str(request.url) == FIXTURES_URL:
                return httpx.Response(500, text="boom")
            await asyncio.sleep(0.2)
            finished.append(str(request.url))
            return httpx.Response(200, text=SUPERSPORT_RESULTS_HTML)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(SourceFetchError, match="HTTP 500"):
                await SuperSportSource(SuperSportConfig(), client).fetch()
            assert finished == [RESULTS_URL]

    @pytest.mark.asyncio
    async def test_unparseable_result_score_lands_in_fixtures(self, page_transport):
        results_html = (
            '<div class="result-item"><div class="result-home"><span class="team-name">A</span></div>'
            '<div class="result-away"><span class="team-name">B</span></div>'
            '<span class="result-score">P-P</span><span class="result-date">2024-11-30</span></div>'
        )
        transport = page_transport(
            {FIXTURES_URL: (200, "<html></html>"), RESULTS_URL: (200, results_html)}
        )
        async with httpx.AsyncClient(transport=transport) as client:
            batch = await SuperSportSource(SuperSportConfig(), client).fetch()

        assert batch.results == []
        assert [g.id for g in batch.fixtures] == ["ss-res-A-B-2024-11-30"]

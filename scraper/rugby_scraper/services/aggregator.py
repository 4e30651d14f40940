"""Fan out to every source, merge what comes back, write the two files.

All sources run concurrently on one event loop. A source that fails is
logged and contributes nothing; the others are never cancelled because of
it. Accumulation only starts once every source has settled.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

import httpx

from ..config import Settings
from ..logging import logger
from ..models import Game, SourceOutcome
from ..persistence import write_games
from ..sources import RugbySource, build_sources


@dataclass
class RunSummary:
    outcomes: list[SourceOutcome] = field(default_factory=list)
    fixtures: list[Game] = field(default_factory=list)
    results: list[Game] = field(default_factory=list)
    fixtures_path: Path | None = None
    results_path: Path | None = None

    @property
    def failed_sources(self) -> list[str]:
        return [outcome.source for outcome in self.outcomes if not outcome.ok]


async def collect(sources: Sequence[RugbySource]) -> list[SourceOutcome]:
    """Run every source and wait for all of them, successes and failures alike."""
    settled = await asyncio.gather(
        *(source.fetch() for source in sources),
        return_exceptions=True,
    )
    outcomes: list[SourceOutcome] = []
    for source, result in zip(sources, settled):
        if isinstance(result, BaseException):
            logger.error(
                "source_failed",
                source=source.name,
                error=str(result),
                error_type=type(result).__name__,
            )
            outcomes.append(SourceOutcome.failure(source.name, result))
        else:
            logger.info(
                "source_complete",
                source=source.name,
                fixtures=len(result.fixtures),
                results=len(result.results),
            )
            outcomes.append(SourceOutcome.success(source.name, result))
    return outcomes


def merge_games(games: Iterable[Game]) -> list[Game]:
    """De-duplicate by id.

    A later game with an id already seen replaces the earlier one but keeps
    the slot where that id first appeared.
    """
    by_id: dict[str, Game] = {}
    for game in games:
        if not game.id:
            continue
        by_id[game.id] = game
    return list(by_id.values())


def sort_games(games: Sequence[Game]) -> list[Game]:
    """Stable lexical sort on kickoffIso; games without one go last.

    Plain string comparison, so only ISO-8601 strings sort chronologically.
    """
    return sorted(games, key=lambda game: (game.kickoff_iso is None, game.kickoff_iso or ""))


def combine(
    outcomes: Sequence[SourceOutcome],
    sort_by_kickoff: bool = False,
) -> tuple[list[Game], list[Game]]:
    """Concatenate per-source buckets in source order, then merge (and sort)."""
    fixtures = merge_games(game for outcome in outcomes for game in outcome.fixtures)
    results = merge_games(game for outcome in outcomes for game in outcome.results)
    if sort_by_kickoff:
        fixtures = sort_games(fixtures)
        results = sort_games(results)
    return fixtures, results


def _http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=settings.scraper_config.request_timeout_seconds,
        headers={
            "User-Agent": settings.scraper_config.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/json;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
        },
    )


async def run_update(
    settings: Settings,
    source_names: Iterable[str] | None = None,
    client: httpx.AsyncClient | None = None,
) -> RunSummary:
    """Fetch from every configured source and overwrite both output files.

    Raises ConfigurationError before any request when the sources can't be
    built, and PersistenceError when a file can't be written. Source
    failures never raise.
    """
    output = settings.output_config
    owns_client = client is None
    http = client or _http_client(settings)
    try:
        sources = build_sources(settings, http, source_names)
        logger.info("update_started", sources=[source.name for source in sources])
        outcomes = await collect(sources)
    finally:
        if owns_client:
            await http.aclose()

    fixtures, results = combine(outcomes, output.sort_by_kickoff)

    await asyncio.to_thread(write_games, output.fixtures_path, fixtures)
    await asyncio.to_thread(write_games, output.results_path, results)

    summary = RunSummary(
        outcomes=outcomes,
        fixtures=fixtures,
        results=results,
        fixtures_path=output.fixtures_path,
        results_path=output.results_path,
    )
    logger.info(
        "update_complete",
        fixtures=len(fixtures),
        results=len(results),
        failed_sources=summary.failed_sources,
    )
    return summary

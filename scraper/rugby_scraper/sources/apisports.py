"""API-Sports rugby client.

Pulls every game of a season (optionally narrowed to a league or a single
day) from https://v1.rugby.api-sports.io and normalizes each entry of the
``response`` array. Entries come in several shapes, sometimes wrapped in
``game`` or ``fixture``, so every field is read through ordered rules.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

import httpx

from ..config import ApiSportsConfig
from ..errors import ConfigurationError, SourceParseError
from ..logging import logger
from ..models import Game, SourceBatch
from ..normalization import FINISHED_STATUSES, FieldRule
from ..utils.parsing import numeric_score
from .base import RugbySource, build_url

API_KEY_HEADER = "x-apisports-key"

ID_RULE = FieldRule("id", ("game.id", "fixture.id", "id"))
COMPETITION_RULE = FieldRule(
    "competition", ("league.name", "league.country", "league.id"), default="Rugby"
)
HOME_RULE = FieldRule("home", ("teams.home.name", "home_team.name", "home_team", "home.name"))
AWAY_RULE = FieldRule("away", ("teams.away.name", "away_team.name", "away_team", "away.name"))
KICKOFF_RULE = FieldRule("kickoffIso", ("game.date", "fixture.date", "date"))
VENUE_RULE = FieldRule(
    "venue", ("game.venue.name", "fixture.venue.name", "venue.name", "venue"), default=""
)
HOME_SCORE_RULE = FieldRule(
    "homeScore",
    ("scores.home", "scores.home.total", "score.home", "game.scores.home", "fixture.scores.home"),
    accept=numeric_score,
)
AWAY_SCORE_RULE = FieldRule(
    "awayScore",
    ("scores.away", "scores.away.total", "score.away", "game.scores.away", "fixture.scores.away"),
    accept=numeric_score,
)
STATUS_RULE = FieldRule(
    "status",
    ("status.short", "game.status.short", "fixture.status.short", "status.long", "status"),
)


def extract_game(record: Any, index: int = 0) -> Game | None:
    """Normalize one ``response`` entry, or None when the teams can't be resolved."""
    if not isinstance(record, Mapping):
        return None

    home = HOME_RULE.extract(record)
    away = AWAY_RULE.extract(record)
    if not home or not away:
        return None

    kickoff = KICKOFF_RULE.extract(record)
    game_id = ID_RULE.extract(record)
    if game_id is None:
        game_id = f"{home}-{away}-{kickoff}" if kickoff else f"{home}-{away}-{index}"

    return Game(
        id=str(game_id),
        competition=str(COMPETITION_RULE.extract(record)),
        home=home,
        away=away,
        kickoff_iso=kickoff,
        venue=VENUE_RULE.extract(record),
        home_score=HOME_SCORE_RULE.extract(record),
        away_score=AWAY_SCORE_RULE.extract(record),
        status=STATUS_RULE.extract(record),
    )


class ApiSportsSource(RugbySource):
    name = "apisports"

    def __init__(
        self,
        config: ApiSportsConfig,
        api_key: str | None,
        client: httpx.AsyncClient,
        finished_statuses: Iterable[str] = FINISHED_STATUSES,
    ) -> None:
        super().__init__(client, finished_statuses)
        self.config = config
        self.api_key = api_key

    def games_url(self) -> str:
        params = {
            "season": self.config.season,
            "league": self.config.league,
            "date": self.config.date,
        }
        return build_url(self.config.base_url, self.config.games_path, params)

    async def fetch(self) -> SourceBatch:
        if not self.api_key:
            raise ConfigurationError("Missing RUGBY_API_KEY environment variable")

        url = self.games_url()
        response = await self._get(
            url,
            headers={API_KEY_HEADER: self.api_key},
            timeout=self.config.request_timeout_seconds,
        )
        try:
            payload = response.json()
        except ValueError as exc:
            raise SourceParseError(self.name, f"invalid JSON body: {exc}") from exc

        games = payload.get("response") if isinstance(payload, Mapping) else None
        if not isinstance(games, list):
            logger.info(
                "apisports_response_shape_drift",
                payload_type=type(payload).__name__,
                response_type=type(games).__name__,
            )
            games = []

        logger.info("apisports_received", games=len(games))
        return self._bucket(games, extract_game)

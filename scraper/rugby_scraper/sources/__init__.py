"""Source adapters and the registry that builds them from settings."""

from __future__ import annotations

from typing import Iterable

import httpx

from ..config import KNOWN_SOURCES, Settings
from ..errors import ConfigurationError
from .apisports import ApiSportsSource
from .base import RugbySource
from .rugbypass import RugbyPassSource
from .supersport import SuperSportSource


def build_sources(
    settings: Settings,
    client: httpx.AsyncClient,
    names: Iterable[str] | None = None,
) -> list[RugbySource]:
    """Instantiate the requested sources, checking credentials up front.

    Raises ConfigurationError before any request is made when a source name
    is unknown or API-Sports is requested without an API key.
    """
    requested = list(names) if names is not None else list(settings.sources)
    finished = settings.finished_statuses

    sources: list[RugbySource] = []
    for name in requested:
        if name == "apisports":
            if not settings.rugby_api_key:
                raise ConfigurationError("Missing RUGBY_API_KEY environment variable")
            sources.append(
                ApiSportsSource(settings.apisports_config, settings.rugby_api_key, client, finished)
            )
        elif name == "rugbypass":
            sources.append(RugbyPassSource(settings.rugbypass_config, client, finished))
        elif name == "supersport":
            sources.append(SuperSportSource(settings.supersport_config, client, finished))
        else:
            allowed = ", ".join(KNOWN_SOURCES)
            raise ConfigurationError(f"Unknown source {name!r}; expected any of: {allowed}")
    return sources


__all__ = [
    "ApiSportsSource",
    "RugbyPassSource",
    "RugbySource",
    "SuperSportSource",
    "build_sources",
]

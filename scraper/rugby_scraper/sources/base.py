"""Shared plumbing for the rugby data sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Mapping, TypeVar

import httpx

from ..errors import SourceFetchError
from ..logging import logger
from ..models import Game, SourceBatch
from ..normalization import FINISHED_STATUSES, classify

RawRecord = TypeVar("RawRecord")

BODY_PREVIEW_LIMIT = 300


def truncate_body(body: str | None, limit: int = BODY_PREVIEW_LIMIT) -> str:
    if not body:
        return ""
    if len(body) <= limit:
        return body
    return f"{body[:limit]}..."


def build_url(base: str, path: str, params: Mapping[str, Any] | None = None) -> str:
    """Join base and path and append the non-empty query parameters."""
    url = httpx.URL(base).join(path)
    kept = {
        key: str(value)
        for key, value in (params or {}).items()
        if value is not None and value != ""
    }
    return str(url.copy_merge_params(kept)) if kept else str(url)


class RugbySource(ABC):
    """One upstream source: fetch raw data, extract games, bucket them.

    Subclasses receive their configuration and a shared ``httpx.AsyncClient``
    in the constructor and never read the environment themselves.
    """

    name: str

    def __init__(
        self,
        client: httpx.AsyncClient,
        finished_statuses: Iterable[str] = FINISHED_STATUSES,
    ) -> None:
        self.client = client
        self.finished_statuses = frozenset(code.upper() for code in finished_statuses)

    @abstractmethod
    async def fetch(self) -> SourceBatch:
        """Fetch and normalize this source's fixtures and results."""
        raise NotImplementedError

    async def _get(self, url: str, **kwargs: Any) -> httpx.Response:
        """GET a URL, turning transport errors and non-200 responses into SourceFetchError."""
        logger.info("fetching_url", source=self.name, url=url)
        try:
            response = await self.client.get(url, follow_redirects=True, **kwargs)
        except httpx.HTTPError as exc:
            raise SourceFetchError(self.name, f"request to {url} failed: {exc}") from exc
        if response.status_code != 200:
            raise SourceFetchError(
                self.name,
                f"HTTP {response.status_code} from {url}: {truncate_body(response.text)}",
            )
        return response

    def _bucket(
        self,
        records: Iterable[RawRecord],
        extract: Callable[[RawRecord, int], Game | None],
    ) -> SourceBatch:
        """Run the extractor over every record and classify what it accepts.

        A record that raises is logged and dropped; the rest of the batch
        still gets processed.
        """
        batch = SourceBatch()
        dropped = 0
        for index, record in enumerate(records):
            try:
                game = extract(record, index)
            except Exception as exc:
                logger.warning(
                    "record_extract_error",
                    source=self.name,
                    index=index,
                    error=str(exc),
                )
                dropped += 1
                continue
            if game is None:
                dropped += 1
                continue
            bucket, classified = classify(game, self.finished_statuses)
            batch.add(bucket, classified)
        logger.info(
            "source_normalized",
            source=self.name,
            fixtures=len(batch.fixtures),
            results=len(batch.results),
            dropped=dropped,
        )
        return batch

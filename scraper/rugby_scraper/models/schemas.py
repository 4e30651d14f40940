"""Pydantic models and result containers used by sources and the aggregator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Bucket = Literal["fixtures", "results"]


class Game(BaseModel):
    """A single normalized fixture or result.

    Attribute names are snake_case; the JSON files use the camelCase aliases.
    Instances are frozen, so classification builds a copy instead of editing.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    competition: str
    home: str
    away: str
    kickoff_iso: str | None = Field(default=None, alias="kickoffIso")
    venue: str = ""
    home_score: int | None = Field(default=None, alias="homeScore")
    away_score: int | None = Field(default=None, alias="awayScore")
    status: str | None = None

    def to_record(self) -> dict[str, Any]:
        """Serialize for the output files; ``status`` is left out when unknown."""
        record = self.model_dump(by_alias=True)
        if record.get("status") is None:
            record.pop("status", None)
        return record


@dataclass
class SourceBatch:
    """Games produced by one adapter call, already split into buckets."""

    fixtures: list[Game] = field(default_factory=list)
    results: list[Game] = field(default_factory=list)

    def add(self, bucket: Bucket, game: Game) -> None:
        if bucket == "results":
            self.results.append(game)
        else:
            self.fixtures.append(game)

    def __len__(self) -> int:
        return len(self.fixtures) + len(self.results)


@dataclass(frozen=True)
class SourceOutcome:
    """Settled outcome of one adapter call.

    Keeps "the source returned nothing" (``ok`` with an empty batch) apart
    from "the source call failed" (``error`` set).
    """

    source: str
    batch: SourceBatch | None = None
    error: BaseException | None = None

    @classmethod
    def success(cls, source: str, batch: SourceBatch) -> SourceOutcome:
        return cls(source=source, batch=batch)

    @classmethod
    def failure(cls, source: str, error: BaseException) -> SourceOutcome:
        return cls(source=source, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def fixtures(self) -> list[Game]:
        return self.batch.fixtures if self.batch is not None else []

    @property
    def results(self) -> list[Game]:
        return self.batch.results if self.batch is not None else []

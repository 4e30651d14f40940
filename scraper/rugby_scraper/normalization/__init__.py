"""Field coalescing and fixture/result classification.

Upstream payloads disagree on shape (``teams.home.name`` vs ``home_team``,
``scores.home`` vs ``scores.home.total``, a ``game`` or ``fixture`` wrapper,
...). Each output field is described by a :class:`FieldRule`: an ordered list
of dotted paths, an acceptance function and a default. The first path whose
value is accepted wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Sequence

from ..config import DEFAULT_FINISHED_STATUSES
from ..models import Bucket, Game
from ..utils.parsing import clean_text

FINISHED_STATUSES = frozenset(DEFAULT_FINISHED_STATUSES)


def dig(record: Any, path: str) -> Any:
    """Follow a dotted path through nested mappings; None when any hop is missing."""
    current = record
    for key in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


def first_accepted(values: Iterable[Any], accept: Callable[[Any], Any] = clean_text) -> Any:
    """Return the first value that ``accept`` turns into something non-None."""
    for value in values:
        accepted = accept(value)
        if accepted is not None:
            return accepted
    return None


@dataclass(frozen=True)
class FieldRule:
    name: str
    paths: Sequence[str]
    accept: Callable[[Any], Any] = clean_text
    default: Any = None

    def extract(self, record: Mapping[str, Any]) -> Any:
        value = first_accepted((dig(record, path) for path in self.paths), self.accept)
        return self.default if value is None else value


def normalize_status(status: str | None) -> str | None:
    if status is None:
        return None
    normalized = status.strip().upper()
    return normalized or None


def is_completed(
    status: str | None,
    home_score: int | None,
    away_score: int | None,
    finished_statuses: Iterable[str] = FINISHED_STATUSES,
) -> bool:
    """Completion predicate.

    With a status, only the finished-status set decides. Without one, a game
    is complete when both scores are known.
    """
    normalized = normalize_status(status)
    if normalized is not None:
        return normalized in {code.upper() for code in finished_statuses}
    return home_score is not None and away_score is not None


def classify(
    game: Game,
    finished_statuses: Iterable[str] = FINISHED_STATUSES,
) -> tuple[Bucket, Game]:
    """Place a game in its bucket; fixtures never keep a partial score."""
    if is_completed(game.status, game.home_score, game.away_score, finished_statuses):
        return "results", game
    if game.home_score is None and game.away_score is None:
        return "fixtures", game
    return "fixtures", game.model_copy(update={"home_score": None, "away_score": None})


__all__ = [
    "FINISHED_STATUSES",
    "FieldRule",
    "classify",
    "dig",
    "first_accepted",
    "is_completed",
    "normalize_status",
]

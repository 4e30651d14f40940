"""Read and write the fixtures/results JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from ..errors import PersistenceError
from ..logging import logger
from ..models import Game


def render_games(games: Sequence[Game]) -> str:
    """Pretty-printed JSON array, identical for identical input."""
    return json.dumps([game.to_record() for game in games], indent=2, ensure_ascii=False)


def write_games(path: Path, games: Sequence[Game]) -> None:
    """Overwrite ``path`` with the games, creating parent directories."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_games(games), encoding="utf-8")
    except OSError as exc:
        raise PersistenceError(f"Could not write {path}: {exc}") from exc
    logger.info("output_written", path=str(path), rows=len(games))


def read_games(path: Path) -> list[Game]:
    """Load a file produced by :func:`write_games`."""
    try:
        rows = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise PersistenceError(f"Could not read {path}: {exc}") from exc
    if not isinstance(rows, list):
        raise PersistenceError(f"{path} does not contain a JSON array")
    return [Game.model_validate(row) for row in rows]

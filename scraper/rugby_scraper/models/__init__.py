"""Common typed models shared across sources."""

from .schemas import (
    Bucket,
    Game,
    SourceBatch,
    SourceOutcome,
)

__all__ = [
    "Bucket",
    "Game",
    "SourceBatch",
    "SourceOutcome",
]

"""Exception hierarchy shared by the sources, the aggregator and the CLI."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when a required credential or setting is missing or invalid.

    Always raised before any network call is made.
    """


class SourceError(RuntimeError):
    """Raised when a source adapter cannot produce its batch."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source


class SourceFetchError(SourceError):
    """Transport failure or non-200 response from an upstream page or API."""


class SourceParseError(SourceError):
    """Upstream returned a body that could not be decoded."""


class PersistenceError(RuntimeError):
    """Raised when an output file cannot be written."""

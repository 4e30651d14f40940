"""Fail-fast environment validation for the rugby feed updater.

Only process-wide values are checked here. Source credentials are checked
when the sources are built, so a run that never touches API-Sports does not
need RUGBY_API_KEY.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

ALLOWED_ENVIRONMENTS = {"development", "staging", "production"}


def validate_environment_value(environment: str) -> None:
    """Ensure ENVIRONMENT is one of the allowed values."""
    if environment not in ALLOWED_ENVIRONMENTS:
        allowed = ", ".join(sorted(ALLOWED_ENVIRONMENTS))
        raise RuntimeError(f"ENVIRONMENT must be one of: {allowed}.")


def validate_log_level(level: str) -> None:
    """Ensure LOG_LEVEL names a standard logging level."""
    if level.strip().upper() not in logging._nameToLevel:
        raise RuntimeError(f"LOG_LEVEL {level!r} is not a known logging level.")


@lru_cache(maxsize=1)
def validate_env() -> None:
    """Validate environment variables before settings are loaded."""
    environment = os.getenv("ENVIRONMENT", "").strip()
    if environment:
        validate_environment_value(environment)

    log_level = os.getenv("LOG_LEVEL", "").strip()
    if log_level:
        validate_log_level(log_level)

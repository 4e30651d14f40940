"""Command-line entry point: refresh data/fixtures.json and data/results.json.

Exit status is 0 whenever both files were written, even if some sources
failed, 1 when writing fails (or anything unexpected happens) and 2 for
configuration errors.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Sequence

from .config import Settings, get_settings
from .errors import ConfigurationError, PersistenceError
from .logging import logger
from .services.aggregator import run_update

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fetch rugby fixtures and results into JSON files")
    parser.add_argument(
        "--sources",
        type=str,
        help="Comma-separated sources to run (apisports, rugbypass, supersport). "
        "Defaults to RUGBY_SOURCES.",
    )
    parser.add_argument("--data-dir", type=str, help="Directory for fixtures.json and results.json")
    sort_group = parser.add_mutually_exclusive_group()
    sort_group.add_argument(
        "--sort",
        dest="sort",
        action="store_true",
        default=None,
        help="Sort each file by kickoffIso (plain string order)",
    )
    sort_group.add_argument(
        "--no-sort",
        dest="sort",
        action="store_false",
        help="Keep merge order",
    )
    parser.set_defaults(sort=None)
    parser.add_argument("--season", type=int, help="API-Sports season")
    parser.add_argument("--league", type=int, help="API-Sports league id")
    parser.add_argument("--date", type=str, help="API-Sports single day (YYYY-MM-DD)")
    return parser


def apply_args(base: Settings, args: argparse.Namespace) -> Settings:
    """Return a copy of the settings with the command-line overrides applied."""
    resolved = base.model_copy(deep=True)
    if args.data_dir:
        resolved.output_config.data_dir = args.data_dir
    if args.sort is not None:
        resolved.output_config.sort_by_kickoff = args.sort
    if args.season is not None:
        resolved.apisports_config.season = args.season
    if args.league is not None:
        resolved.apisports_config.league = args.league
    if args.date:
        resolved.apisports_config.date = args.date
    return resolved


def parse_source_names(value: str | None) -> list[str] | None:
    if not value:
        return None
    return [name.strip().lower() for name in value.split(",") if name.strip()]


def run(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = apply_args(get_settings(), args)
        asyncio.run(run_update(settings, parse_source_names(args.sources)))
    except ConfigurationError as exc:
        logger.error("configuration_error", error=str(exc))
        return EXIT_CONFIG_ERROR
    except PersistenceError as exc:
        logger.error("persistence_error", error=str(exc))
        return EXIT_FAILURE
    except Exception as exc:
        logger.exception("update_failed", error=str(exc))
        return EXIT_FAILURE
    return EXIT_OK


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()

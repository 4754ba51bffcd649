#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from movie_batch.ingestion.date_filter import (
    DEFAULT_AFTER_YEAR,
    DEFAULT_THROUGH_YEAR,
    DateFilterError,
    run_date_filter,
)
from movie_batch.utils.logging import configure_logging

logger = logging.getLogger("filter_titles_by_year")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="filter_titles_by_year",
        description="Keep titles whose DD/MM/YY release date falls in (--after, --through].",
    )
    parser.add_argument("--input", type=Path, default=Path("dataMovie.csv"), help="Movie dataset CSV.")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("filtered_titles.csv"),
        help="Output CSV (overwritten; single `title` column).",
    )
    parser.add_argument("--after", type=int, default=DEFAULT_AFTER_YEAR, help="Exclusive lower year bound.")
    parser.add_argument("--through", type=int, default=DEFAULT_THROUGH_YEAR, help="Inclusive upper year bound.")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(verbose=args.verbose)

    try:
        result = run_date_filter(args.input, args.output, after=args.after, through=args.through)
    except DateFilterError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("Filtered titles have been saved to '%s' (%d titles)", result.output_path, result.titles_written)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

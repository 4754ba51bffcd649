#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from movie_batch.ingestion.csv_output import CsvOutputError
from movie_batch.ingestion.movie_enricher import (
    TRAILER_POLICIES,
    EnricherConfig,
    EnricherConfigError,
    TrailerResolutionError,
    run_enricher,
)
from movie_batch.ingestion.title_reader import DEFAULT_BATCH_SIZE, TitleReaderError
from movie_batch.integrations.omdb.client import DEFAULT_TIMEOUT_SECONDS
from movie_batch.integrations.omdb.client import resolve_api_key as resolve_omdb_api_key
from movie_batch.integrations.youtube.client import resolve_api_key as resolve_youtube_api_key
from movie_batch.utils.env import load_env
from movie_batch.utils.logging import configure_logging

logger = logging.getLogger("enrich_movies")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="enrich_movies",
        description="Look up titles on OMDb, resolve a YouTube trailer, and append rows to a CSV.",
    )
    parser.add_argument("--input", type=Path, default=Path("movies_2024.csv"), help="Titles CSV (first column).")
    parser.add_argument("--output", type=Path, default=Path("movies.csv"), help="Append-mode output CSV.")
    parser.add_argument(
        "--batch-size",
        type=int,
        default=DEFAULT_BATCH_SIZE,
        help=f"Maximum number of input titles to process (default: {DEFAULT_BATCH_SIZE}).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT_SECONDS,
        help=f"Per-request HTTP timeout in seconds (default: {DEFAULT_TIMEOUT_SECONDS:g}).",
    )
    parser.add_argument(
        "--trailer-policy",
        choices=TRAILER_POLICIES,
        default="empty",
        help="On trailer lookup failure: write an empty Trailer Link (default) or abort the run.",
    )
    parser.add_argument(
        "--scrape-fallback",
        action="store_true",
        help="Without YOUTUBE_API_KEY, scrape the YouTube results page for a trailer link.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(verbose=args.verbose)
    env_file = load_env()
    if env_file is not None:
        logger.info(
            "Loaded %s (defines: %s)",
            env_file.path,
            ", ".join(env_file.provided_keys) or "none of API_KEY/YOUTUBE_API_KEY",
        )

    omdb_api_key = resolve_omdb_api_key()
    if not omdb_api_key:
        logger.error("API_KEY is not set in the environment or .env")
        return 2

    config = EnricherConfig(
        input_path=args.input,
        output_path=args.output,
        batch_size=args.batch_size,
        timeout_seconds=args.timeout,
        trailer_policy=args.trailer_policy,
        scrape_fallback=args.scrape_fallback,
    )

    try:
        run_enricher(config, omdb_api_key=omdb_api_key, youtube_api_key=resolve_youtube_api_key())
    except (TitleReaderError, CsvOutputError, TrailerResolutionError) as exc:
        logger.error("%s", exc)
        return 1
    except EnricherConfigError as exc:
        logger.error("%s", exc)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

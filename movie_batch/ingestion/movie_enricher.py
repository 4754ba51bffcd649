from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field, replace
from itertools import islice
from pathlib import Path
from typing import Iterable, Literal

import requests

from movie_batch.ingestion.csv_output import MovieCsvWriter
from movie_batch.ingestion.title_reader import DEFAULT_BATCH_SIZE, iter_titles
from movie_batch.integrations.omdb.client import (
    DEFAULT_TIMEOUT_SECONDS,
    OmdbNotFoundError,
    OmdbTransportError,
    fetch_movie_by_title,
)
from movie_batch.integrations.youtube.client import (
    YoutubeClientError,
    scrape_trailer_url,
    search_trailer_url,
)
from movie_batch.models.movies import MovieRecord, OutputRow, build_output_row

TrailerPolicy = Literal["empty", "fatal"]
TitleState = Literal["Pending", "MetadataFetched", "TrailerResolved", "Written", "Skipped"]
SkipReason = Literal["not_found", "transport"]

TRAILER_POLICIES: tuple[str, ...] = ("empty", "fatal")

logger = logging.getLogger(__name__)


class EnricherConfigError(RuntimeError):
    pass


class TrailerResolutionError(RuntimeError):
    def __init__(self, message: str, *, title: str) -> None:
        super().__init__(message)
        self.title = title


@dataclass(frozen=True)
class EnricherConfig:
    input_path: Path = Path("movies_2024.csv")
    output_path: Path = Path("movies.csv")
    batch_size: int = DEFAULT_BATCH_SIZE
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    trailer_policy: TrailerPolicy = "empty"
    scrape_fallback: bool = False


@dataclass(frozen=True)
class TitleOutcome:
    title: str
    state: TitleState
    trailer_url: str | None = None
    skip_reason: SkipReason | None = None
    message: str | None = None


@dataclass(frozen=True)
class EnrichSummary:
    attempted: int
    written: int
    skipped_not_found: int
    skipped_transport: int
    missing_trailers: int
    elapsed_seconds: float
    outcomes: list[TitleOutcome] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return self.skipped_not_found + self.skipped_transport


def resolve_trailer(
    record: MovieRecord,
    *,
    youtube_api_key: str | None,
    session: requests.Session,
    config: EnricherConfig,
) -> str:
    if youtube_api_key:
        return search_trailer_url(
            record.title,
            record.year,
            api_key=youtube_api_key,
            session=session,
            timeout_seconds=config.timeout_seconds,
        )
    if config.scrape_fallback:
        return scrape_trailer_url(
            record.title,
            record.year,
            session=session,
            timeout_seconds=config.timeout_seconds,
        )
    raise YoutubeClientError("YOUTUBE_API_KEY is not set.")


def enrich_title(
    title: str,
    *,
    omdb_api_key: str,
    youtube_api_key: str | None,
    session: requests.Session,
    config: EnricherConfig,
) -> tuple[TitleOutcome, OutputRow | None]:
    """
    Run one title through metadata lookup and trailer resolution.

    Metadata failures skip the title. Trailer failures either leave the trailer
    column empty (policy "empty") or raise `TrailerResolutionError` (policy "fatal").
    """

    try:
        record = fetch_movie_by_title(
            title,
            api_key=omdb_api_key,
            session=session,
            timeout_seconds=config.timeout_seconds,
        )
    except OmdbNotFoundError as exc:
        logger.warning("Skipping %r: not found (%s)", title, exc.api_error)
        return TitleOutcome(title=title, state="Skipped", skip_reason="not_found", message=str(exc)), None
    except OmdbTransportError as exc:
        logger.warning("Skipping %r: metadata request failed (%s)", title, exc)
        return TitleOutcome(title=title, state="Skipped", skip_reason="transport", message=str(exc)), None

    if not youtube_api_key and not config.scrape_fallback and config.trailer_policy == "empty":
        # No trailer source configured; run_enricher already warned once.
        return (
            TitleOutcome(title=title, state="MetadataFetched", message="no trailer source configured"),
            build_output_row(record, None),
        )

    try:
        trailer_url: str | None = resolve_trailer(
            record,
            youtube_api_key=youtube_api_key,
            session=session,
            config=config,
        )
    except YoutubeClientError as exc:
        if config.trailer_policy == "fatal":
            logger.error("Error searching YouTube trailer for %r: %s", record.title or title, exc)
            raise TrailerResolutionError(f"Trailer lookup failed for {title!r}: {exc}", title=title) from exc
        logger.warning("No trailer for %r (%s); writing an empty Trailer Link", record.title or title, exc)
        return (
            TitleOutcome(title=title, state="MetadataFetched", message=str(exc)),
            build_output_row(record, None),
        )

    return (
        TitleOutcome(title=title, state="TrailerResolved", trailer_url=trailer_url),
        build_output_row(record, trailer_url),
    )


def enrich_titles(
    titles: Iterable[str],
    writer: MovieCsvWriter,
    *,
    omdb_api_key: str,
    youtube_api_key: str | None = None,
    session: requests.Session | None = None,
    config: EnricherConfig = EnricherConfig(),
) -> EnrichSummary:
    session = session or requests.Session()
    started = time.monotonic()

    attempted = 0
    written = 0
    skipped_not_found = 0
    skipped_transport = 0
    missing_trailers = 0
    outcomes: list[TitleOutcome] = []

    for title in islice(titles, max(0, config.batch_size)):
        attempted += 1
        logger.info("Querying movie: %s", title)
        outcome, row = enrich_title(
            title,
            omdb_api_key=omdb_api_key,
            youtube_api_key=youtube_api_key,
            session=session,
            config=config,
        )

        if row is None:
            if outcome.skip_reason == "not_found":
                skipped_not_found += 1
            else:
                skipped_transport += 1
            outcomes.append(outcome)
            continue

        if outcome.trailer_url is None:
            missing_trailers += 1
        writer.append(row)
        written += 1
        outcomes.append(replace(outcome, state="Written"))

    return EnrichSummary(
        attempted=attempted,
        written=written,
        skipped_not_found=skipped_not_found,
        skipped_transport=skipped_transport,
        missing_trailers=missing_trailers,
        elapsed_seconds=time.monotonic() - started,
        outcomes=outcomes,
    )


def run_enricher(
    config: EnricherConfig,
    *,
    omdb_api_key: str,
    youtube_api_key: str | None = None,
    session: requests.Session | None = None,
) -> EnrichSummary:
    if not youtube_api_key and not config.scrape_fallback:
        if config.trailer_policy == "fatal":
            raise EnricherConfigError("YOUTUBE_API_KEY is not set (required with --trailer-policy fatal).")
        logger.warning("YOUTUBE_API_KEY is not set; Trailer Link will be empty.")

    session = session or requests.Session()
    titles = iter_titles(config.input_path, limit=config.batch_size)
    with MovieCsvWriter(config.output_path) as writer:
        summary = enrich_titles(
            titles,
            writer,
            omdb_api_key=omdb_api_key,
            youtube_api_key=youtube_api_key,
            session=session,
            config=config,
        )

    logger.info(
        "Processed %d titles (%d written) in %.2f seconds",
        summary.attempted,
        summary.written,
        summary.elapsed_seconds,
    )
    logger.info(
        "written=%d not_found=%d request_errors=%d missing_trailers=%d output=%s",
        summary.written,
        summary.skipped_not_found,
        summary.skipped_transport,
        summary.missing_trailers,
        config.output_path,
    )
    return summary

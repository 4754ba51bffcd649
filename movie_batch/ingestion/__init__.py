"""
Batch pipelines: the year-range date filter and the OMDb/YouTube enricher.
"""

from movie_batch.ingestion.csv_output import CsvOutputError, MovieCsvWriter
from movie_batch.ingestion.date_filter import DateFilterError, DateFilterResult, parse_short_date, run_date_filter
from movie_batch.ingestion.movie_enricher import (
    EnricherConfig,
    EnricherConfigError,
    EnrichSummary,
    TitleOutcome,
    TrailerResolutionError,
    enrich_titles,
    run_enricher,
)
from movie_batch.ingestion.title_reader import TitleReaderError, iter_titles

__all__ = [
    "CsvOutputError",
    "DateFilterError",
    "DateFilterResult",
    "EnrichSummary",
    "EnricherConfig",
    "EnricherConfigError",
    "MovieCsvWriter",
    "TitleOutcome",
    "TitleReaderError",
    "TrailerResolutionError",
    "enrich_titles",
    "iter_titles",
    "parse_short_date",
    "run_date_filter",
    "run_enricher",
]

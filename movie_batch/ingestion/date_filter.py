from __future__ import annotations

import csv
import logging
import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Iterable, Sequence

from movie_batch.models.movies import DATASET_SCHEMA, FILTERED_TITLES_HEADER, CsvSchemaError

DATE_HEADER_LABEL = "release_date"
DEFAULT_AFTER_YEAR = 2014
DEFAULT_THROUGH_YEAR = 2024

# Two-digit years at or above the pivot are 19xx, below it 20xx (69 -> 1969, 68 -> 2068).
CENTURY_PIVOT = 69

_SHORT_DATE_RE = re.compile(r"(?P<day>[0-9]{2})/(?P<month>[0-9]{2})/(?P<year>[0-9]{2})")

logger = logging.getLogger(__name__)


class DateFilterError(RuntimeError):
    pass


@dataclass(frozen=True)
class DateFilterResult:
    rows_read: int
    titles_written: int
    output_path: Path


def expand_two_digit_year(yy: int) -> int:
    if not 0 <= yy <= 99:
        raise ValueError(f"Two-digit year out of range: {yy}")
    return 1900 + yy if yy >= CENTURY_PIVOT else 2000 + yy


def parse_short_date(value: str) -> date | None:
    """
    Parse a strict `DD/MM/YY` date. Returns None for anything malformed or
    impossible (`32/13/99`, `30/02/20`, `1/1/15`).
    """

    if not isinstance(value, str):
        return None
    match = _SHORT_DATE_RE.fullmatch(value)
    if not match:
        return None
    year = expand_two_digit_year(int(match.group("year")))
    try:
        return date(year, int(match.group("month")), int(match.group("day")))
    except ValueError:
        return None


def is_year_in_range(year: int, *, after: int = DEFAULT_AFTER_YEAR, through: int = DEFAULT_THROUGH_YEAR) -> bool:
    return after < year <= through


def filter_titles(
    rows: Iterable[Sequence[str]],
    *,
    after: int = DEFAULT_AFTER_YEAR,
    through: int = DEFAULT_THROUGH_YEAR,
) -> list[str]:
    titles: list[str] = []
    expected_width: int | None = None
    for line_no, row in enumerate(rows, start=1):
        if not row:
            continue
        if expected_width is None:
            expected_width = len(row)
        elif len(row) != expected_width:
            raise DateFilterError(f"record on line {line_no}: wrong number of fields ({len(row)} != {expected_width})")

        try:
            fields = DATASET_SCHEMA.extract(row)
        except CsvSchemaError as exc:
            raise DateFilterError(f"record on line {line_no}: {exc}") from exc

        if fields["release_date"] == DATE_HEADER_LABEL:
            continue

        parsed = parse_short_date(fields["release_date"])
        if parsed is None:
            continue
        if is_year_in_range(parsed.year, after=after, through=through):
            titles.append(fields["title"])
    return titles


def read_dataset(path: str | Path) -> list[list[str]]:
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            return list(csv.reader(handle, strict=True))
    except OSError as exc:
        raise DateFilterError(f"Error opening {path}: {exc}") from exc
    except (csv.Error, UnicodeDecodeError) as exc:
        raise DateFilterError(f"Error reading CSV {path}: {exc}") from exc


def write_titles(path: str | Path, titles: Iterable[str]) -> int:
    path = Path(path)
    written = 0
    try:
        with path.open("w", encoding="utf-8", newline="") as handle:
            writer = csv.writer(handle, lineterminator="\n")
            writer.writerow(FILTERED_TITLES_HEADER)
            for title in titles:
                writer.writerow([title])
                written += 1
    except (OSError, csv.Error) as exc:
        raise DateFilterError(f"Error creating output file {path}: {exc}") from exc
    return written


def run_date_filter(
    input_path: str | Path,
    output_path: str | Path,
    *,
    after: int = DEFAULT_AFTER_YEAR,
    through: int = DEFAULT_THROUGH_YEAR,
) -> DateFilterResult:
    """
    Read `input_path` fully, then write the titles released in `(after, through]`
    to `output_path`. The output is only created once the input validated.
    """

    rows = read_dataset(input_path)
    titles = filter_titles(rows, after=after, through=through)
    written = write_titles(output_path, titles)
    logger.info("Filtered %d/%d rows into %s", written, len(rows), output_path)
    return DateFilterResult(rows_read=len(rows), titles_written=written, output_path=Path(output_path))

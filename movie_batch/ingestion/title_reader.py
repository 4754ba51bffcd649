from __future__ import annotations

import csv
import logging
import re
from pathlib import Path
from typing import Iterator

from movie_batch.models.movies import TITLES_SCHEMA, CsvSchemaError

DEFAULT_BATCH_SIZE = 100

# surrogateescape maps each undecodable byte to U+DC80..U+DCFF.
_UNDECODABLE_RE = re.compile("[\udc80-\udcff]")

logger = logging.getLogger(__name__)


class TitleReaderError(RuntimeError):
    pass


def iter_titles(path: str | Path, *, limit: int = DEFAULT_BATCH_SIZE) -> Iterator[str]:
    """
    Yield up to `limit` titles (first column) from a CSV, lazily.

    Rows that fail to parse, that are not valid UTF-8, whose field count differs
    from the first row, or that carry a blank title are logged and skipped; they
    do not count toward `limit`. Failing to open the file raises `TitleReaderError`.
    """

    path = Path(path)
    if limit <= 0:
        return
    try:
        handle = path.open("r", encoding="utf-8", errors="surrogateescape", newline="")
    except OSError as exc:
        raise TitleReaderError(f"Error opening {path}: {exc}") from exc

    with handle:
        reader = csv.reader(handle, strict=True)
        expected_width: int | None = None
        yielded = 0
        while yielded < limit:
            try:
                row = next(reader)
            except StopIteration:
                break
            except csv.Error as exc:
                logger.warning("Error reading CSV %s near line %d: %s", path, reader.line_num, exc)
                continue

            if not row:
                continue
            if any(_UNDECODABLE_RE.search(value) for value in row):
                logger.warning("Skipping line %d of %s: not valid UTF-8", reader.line_num, path)
                continue
            if expected_width is None:
                expected_width = len(row)
            elif len(row) != expected_width:
                logger.warning(
                    "Error reading CSV %s line %d: wrong number of fields (%d != %d)",
                    path,
                    reader.line_num,
                    len(row),
                    expected_width,
                )
                continue

            try:
                title = TITLES_SCHEMA.extract(row)["title"].strip()
            except CsvSchemaError as exc:
                logger.warning("Error reading CSV %s line %d: %s", path, reader.line_num, exc)
                continue
            if not title:
                logger.warning("Skipping blank title on line %d of %s", reader.line_num, path)
                continue

            yielded += 1
            yield title

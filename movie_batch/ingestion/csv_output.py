from __future__ import annotations

import csv
import logging
import os
from pathlib import Path
from typing import IO, Sequence

from movie_batch.models.movies import MOVIES_CSV_HEADER

logger = logging.getLogger(__name__)


class CsvOutputError(RuntimeError):
    pass


def _needs_header(path: Path) -> bool:
    try:
        return path.stat().st_size == 0
    except FileNotFoundError:
        return True


class MovieCsvWriter:
    """
    Append-mode CSV writer that owns its file handle.

    Whether the header is needed is decided once, when the writer is built:
    only a file that is missing (or empty) at that point gets one, so repeated
    runs append to the same file without duplicating it. The file is opened on
    the first `append`, and every row is flushed and fsynced before returning.
    """

    def __init__(self, path: str | Path, *, header: Sequence[str] = MOVIES_CSV_HEADER) -> None:
        self.path = Path(path)
        self.header = tuple(header)
        self.header_pending = _needs_header(self.path)
        self.rows_written = 0
        self._handle: IO[str] | None = None
        self._writer = None

    def __enter__(self) -> "MovieCsvWriter":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _open(self) -> None:
        try:
            self._handle = self.path.open("a", encoding="utf-8", newline="")
        except OSError as exc:
            raise CsvOutputError(f"Error opening/creating file {self.path}: {exc}") from exc
        self._writer = csv.writer(self._handle, lineterminator="\n")

    def _sync(self) -> None:
        if self._handle is None:
            return
        self._handle.flush()
        os.fsync(self._handle.fileno())

    def append(self, row: Sequence[str]) -> None:
        values = ["" if value is None else str(value) for value in row]
        if len(values) != len(self.header):
            raise CsvOutputError(f"Row has {len(values)} columns, expected {len(self.header)}.")

        if self._handle is None:
            self._open()
        try:
            if self.header_pending:
                self._writer.writerow(self.header)
                self.header_pending = False
                logger.debug("Wrote header to %s", self.path)
            self._writer.writerow(values)
            self._sync()
        except (OSError, csv.Error) as exc:
            raise CsvOutputError(f"Error writing movie details to {self.path}: {exc}") from exc
        self.rows_written += 1

    def close(self) -> None:
        handle, self._handle = self._handle, None
        self._writer = None
        if handle is not None:
            handle.close()

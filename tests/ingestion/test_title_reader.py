from __future__ import annotations

import logging
from pathlib import Path

import pytest

from movie_batch.ingestion.title_reader import TitleReaderError, iter_titles


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "movies_2024.csv"
    path.write_text(text, encoding="utf-8")
    return path


def test_iter_titles_reads_first_column_in_order(tmp_path: Path) -> None:
    path = _write(tmp_path, "Inception,2010\nArrival,2016\n\"Crouching Tiger, Hidden Dragon\",2000\n")

    assert list(iter_titles(path)) == ["Inception", "Arrival", "Crouching Tiger, Hidden Dragon"]


def test_iter_titles_stops_at_batch_ceiling(tmp_path: Path) -> None:
    path = _write(tmp_path, "".join(f"Movie {i}\n" for i in range(250)))

    titles = list(iter_titles(path, limit=100))

    assert len(titles) == 100
    assert titles[0] == "Movie 0"
    assert titles[-1] == "Movie 99"


def test_iter_titles_stops_early_at_end_of_input(tmp_path: Path) -> None:
    path = _write(tmp_path, "Only One\n")
    assert list(iter_titles(path, limit=100)) == ["Only One"]


def test_iter_titles_skips_malformed_rows_and_continues(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = _write(tmp_path, 'Inception\n"Bad"quote\nArrival\nToo,Many,Fields\n   \nDune\n')

    with caplog.at_level(logging.WARNING, logger="movie_batch.ingestion.title_reader"):
        titles = list(iter_titles(path, limit=3))

    assert titles == ["Inception", "Arrival", "Dune"]
    messages = [r.getMessage() for r in caplog.records]
    assert any("Error reading CSV" in m for m in messages)
    assert any("wrong number of fields" in m for m in messages)
    assert any("blank title" in m for m in messages)


def test_iter_titles_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(TitleReaderError, match="Error opening"):
        list(iter_titles(tmp_path / "missing.csv"))


def test_iter_titles_zero_limit_reads_nothing(tmp_path: Path) -> None:
    assert list(iter_titles(tmp_path / "missing.csv", limit=0)) == []


def test_iter_titles_skips_rows_with_invalid_utf8(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "movies_2024.csv"
    path.write_bytes("Amélie\n".encode("utf-8") + b"Am\xe9lie\n" + "Léon\n".encode("utf-8"))

    with caplog.at_level(logging.WARNING, logger="movie_batch.ingestion.title_reader"):
        titles = list(iter_titles(path))

    assert titles == ["Amélie", "Léon"]
    assert any("not valid UTF-8" in r.getMessage() for r in caplog.records)

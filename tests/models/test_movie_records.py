from __future__ import annotations

import pytest

from movie_batch.models.movies import (
    DATASET_SCHEMA,
    MOVIES_CSV_HEADER,
    TITLES_SCHEMA,
    CsvSchemaError,
    MovieRecord,
    build_output_row,
)


def test_movies_csv_header_is_fixed() -> None:
    assert ",".join(MOVIES_CSV_HEADER) == (
        "Title,Year,Rated,Release Date,Runtime,Genre,Director,Writer,Actors,Language,Plot,Trailer Link"
    )


def test_movie_record_from_payload_defaults_missing_and_null_fields_to_empty() -> None:
    record = MovieRecord.from_payload({"Title": "Arrival", "Year": 2016, "Plot": None, "Response": "True"})

    assert record.title == "Arrival"
    assert record.year == "2016"
    assert record.plot == ""
    assert record.director == ""
    assert record.imdb_id == ""
    assert record.found is True


@pytest.mark.parametrize("response", ["False", "", "false", "nope"])
def test_movie_record_found_requires_truthy_response(response: str) -> None:
    assert MovieRecord.from_payload({"Response": response}).found is False


def test_build_output_row_orders_columns_like_header() -> None:
    record = MovieRecord(
        title="Arrival",
        year="2016",
        rated="PG-13",
        released="11 Nov 2016",
        runtime="116 min",
        genre="Drama, Sci-Fi",
        director="Denis Villeneuve",
        writer="Eric Heisserer",
        actors="Amy Adams",
        language="English",
        plot="A linguist works with the military.",
        imdb_id="tt2543164",
    )

    row = build_output_row(record, "https://www.youtube.com/watch?v=tFMo3UJ4B4g")
    assert len(row) == len(MOVIES_CSV_HEADER)
    assert dict(zip(MOVIES_CSV_HEADER, row))["Release Date"] == "11 Nov 2016"
    assert row[-1] == "https://www.youtube.com/watch?v=tFMo3UJ4B4g"

    assert build_output_row(record, None)[-1] == ""


def test_csv_schemas_extract_named_fields() -> None:
    assert DATASET_SCHEMA.extract(["01/01/15", "1", "Film", "extra"]) == {"release_date": "01/01/15", "title": "Film"}
    assert TITLES_SCHEMA.extract(["Inception", "ignored"]) == {"title": "Inception"}

    with pytest.raises(CsvSchemaError):
        DATASET_SCHEMA.extract(["01/01/15", "1"])

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

MOVIES_CSV_HEADER: tuple[str, ...] = (
    "Title",
    "Year",
    "Rated",
    "Release Date",
    "Runtime",
    "Genre",
    "Director",
    "Writer",
    "Actors",
    "Language",
    "Plot",
    "Trailer Link",
)

FILTERED_TITLES_HEADER: tuple[str, ...] = ("title",)

OutputRow = tuple[str, ...]


class CsvSchemaError(ValueError):
    pass


@dataclass(frozen=True)
class CsvSchema:
    """
    Positional CSV schema: semantic field name -> column index.

    Input files carry no usable header, so every reader goes through a schema
    instead of indexing rows directly.
    """

    fields: Mapping[str, int]

    @property
    def min_width(self) -> int:
        return max(self.fields.values()) + 1 if self.fields else 0

    def extract(self, row: Sequence[str]) -> dict[str, str]:
        if len(row) < self.min_width:
            raise CsvSchemaError(f"Expected at least {self.min_width} fields, got {len(row)}.")
        return {name: row[index] for name, index in self.fields.items()}


DATASET_SCHEMA = CsvSchema({"release_date": 0, "title": 2})
TITLES_SCHEMA = CsvSchema({"title": 0})


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


@dataclass(frozen=True)
class MovieRecord:
    """
    Flat OMDb lookup result. Every field is a string; missing keys are "".
    """

    title: str = ""
    year: str = ""
    rated: str = ""
    released: str = ""
    runtime: str = ""
    genre: str = ""
    director: str = ""
    writer: str = ""
    actors: str = ""
    language: str = ""
    plot: str = ""
    response: str = ""
    error: str = ""
    imdb_id: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "MovieRecord":
        return cls(
            title=_as_text(payload.get("Title")),
            year=_as_text(payload.get("Year")),
            rated=_as_text(payload.get("Rated")),
            released=_as_text(payload.get("Released")),
            runtime=_as_text(payload.get("Runtime")),
            genre=_as_text(payload.get("Genre")),
            director=_as_text(payload.get("Director")),
            writer=_as_text(payload.get("Writer")),
            actors=_as_text(payload.get("Actors")),
            language=_as_text(payload.get("Language")),
            plot=_as_text(payload.get("Plot")),
            response=_as_text(payload.get("Response")),
            error=_as_text(payload.get("Error")),
            imdb_id=_as_text(payload.get("imdbID")),
        )

    @property
    def found(self) -> bool:
        return self.response.strip().lower() == "true"


def build_output_row(record: MovieRecord, trailer_url: str | None) -> OutputRow:
    # Column order must match MOVIES_CSV_HEADER; existing files depend on it.
    return (
        record.title,
        record.year,
        record.rated,
        record.released,
        record.runtime,
        record.genre,
        record.director,
        record.writer,
        record.actors,
        record.language,
        record.plot,
        trailer_url or "",
    )

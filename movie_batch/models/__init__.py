from movie_batch.models.movies import (
    DATASET_SCHEMA,
    FILTERED_TITLES_HEADER,
    MOVIES_CSV_HEADER,
    TITLES_SCHEMA,
    CsvSchema,
    CsvSchemaError,
    MovieRecord,
    OutputRow,
    build_output_row,
)

__all__ = [
    "DATASET_SCHEMA",
    "FILTERED_TITLES_HEADER",
    "MOVIES_CSV_HEADER",
    "TITLES_SCHEMA",
    "CsvSchema",
    "CsvSchemaError",
    "MovieRecord",
    "OutputRow",
    "build_output_row",
]

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from dotenv import dotenv_values, load_dotenv

# Keys the enricher reads; reported back so scripts can log where they came from.
MOVIE_BATCH_ENV_KEYS: tuple[str, ...] = ("API_KEY", "OMDB_API_KEY", "YOUTUBE_API_KEY")


@dataclass(frozen=True)
class EnvFile:
    path: Path
    provided_keys: tuple[str, ...] = field(default_factory=tuple)


def find_env_file(filename: str = ".env") -> Path | None:
    """
    First existing `filename` in the project root, then the working directory.
    """

    project_root = Path(__file__).resolve().parents[2]
    for path in (project_root / filename, Path.cwd() / filename):
        if path.is_file():
            return path
    return None


def load_env(*, filename: str = ".env", override: bool = False) -> EnvFile | None:
    """
    Load API keys from a dotenv file into the process environment.

    Variables already set in the environment win unless `override=True`.
    Returns the file used and which of the known movie_batch keys it defines
    (values are never returned), or None when no file exists.
    """

    path = find_env_file(filename)
    if path is None:
        return None

    values = dotenv_values(path)
    load_dotenv(dotenv_path=path, override=override)
    provided = tuple(key for key in MOVIE_BATCH_ENV_KEYS if (values.get(key) or "").strip())
    return EnvFile(path=path, provided_keys=provided)

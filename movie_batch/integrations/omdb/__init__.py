"""
OMDb integration client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from movie_batch.integrations.omdb.client import (
        OmdbClientError,
        OmdbNotFoundError,
        OmdbTransportError,
        fetch_movie_by_title,
        resolve_api_key,
    )

__all__ = [
    "OmdbClientError",
    "OmdbNotFoundError",
    "OmdbTransportError",
    "fetch_movie_by_title",
    "resolve_api_key",
]


def __getattr__(name: str):
    if name in __all__:
        from movie_batch.integrations.omdb import client

        return getattr(client, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

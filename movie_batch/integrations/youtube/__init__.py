"""
YouTube trailer lookup (Data API search and results-page scrape).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from movie_batch.integrations.youtube.client import (
        TrailerNotFoundError,
        YoutubeClientError,
        build_watch_url,
        scrape_trailer_url,
        search_trailer_url,
    )

__all__ = [
    "TrailerNotFoundError",
    "YoutubeClientError",
    "build_watch_url",
    "scrape_trailer_url",
    "search_trailer_url",
]


def __getattr__(name: str):
    if name in __all__:
        from movie_batch.integrations.youtube import client

        return getattr(client, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

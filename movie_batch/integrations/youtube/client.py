from __future__ import annotations

import logging
import os
import re
from typing import Any, Mapping

import requests

YOUTUBE_SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"
YOUTUBE_RESULTS_URL = "https://www.youtube.com/results"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
DEFAULT_TIMEOUT_SECONDS = 10.0

_WATCH_LINK_RE = re.compile(r"/watch\?v=([A-Za-z0-9_-]{11})")

_BROWSER_HEADERS = {
    "accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "accept-language": "en-US,en;q=0.9",
    "referer": "https://www.google.com/",
    "user-agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
}

logger = logging.getLogger(__name__)


class YoutubeClientError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, body_snippet: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body_snippet = body_snippet


class TrailerNotFoundError(YoutubeClientError):
    pass


def resolve_api_key(api_key: str | None = None) -> str | None:
    resolved = (api_key or os.getenv("YOUTUBE_API_KEY") or "").strip()
    return resolved or None


def build_trailer_query(title: str, year: str | None = None) -> str:
    parts = [p.strip() for p in (title, year or "") if p and p.strip()]
    parts.append("trailer")
    return " ".join(parts)


def build_watch_url(video_id: str) -> str:
    return YOUTUBE_WATCH_URL.format(video_id=video_id)


def _first_video_id(payload: Mapping[str, Any]) -> str | None:
    items = payload.get("items")
    if not isinstance(items, list):
        return None
    for item in items:
        if not isinstance(item, Mapping):
            continue
        item_id = item.get("id")
        if isinstance(item_id, Mapping):
            video_id = item_id.get("videoId")
            if isinstance(video_id, str) and video_id.strip():
                return video_id.strip()
    return None


def search_trailer_url(
    title: str,
    year: str | None = None,
    *,
    api_key: str,
    session: requests.Session | None = None,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> str:
    """
    Resolve a trailer watch URL through the YouTube Data API search endpoint.

    Asks for a single `video` result matching "<title> <year> trailer".
    Raises `TrailerNotFoundError` when the search comes back empty, and
    `YoutubeClientError` for transport, HTTP (quota, bad key) or JSON failures.
    """

    session = session or requests.Session()
    query = build_trailer_query(title, year)
    params = {
        "key": api_key,
        "part": "snippet",
        "q": query,
        "type": "video",
        "maxResults": 1,
    }
    try:
        resp = session.get(
            YOUTUBE_SEARCH_URL,
            params=params,
            headers={"accept": "application/json"},
            timeout=timeout_seconds,
        )
    except requests.RequestException as exc:
        raise YoutubeClientError(f"YouTube search request failed: {exc}") from exc

    if resp.status_code != 200:
        raise YoutubeClientError(
            f"YouTube search failed with HTTP {resp.status_code}.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        )

    try:
        payload = resp.json()
    except ValueError as exc:
        raise YoutubeClientError(
            "YouTube returned non-JSON response.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        ) from exc
    if not isinstance(payload, dict):
        raise YoutubeClientError("YouTube returned unexpected JSON shape (not an object).")

    video_id = _first_video_id(payload)
    if not video_id:
        raise TrailerNotFoundError(f"No trailer found for query {query!r}.")

    url = build_watch_url(video_id)
    logger.debug("YouTube search %r -> %s", query, url)
    return url


def scrape_trailer_url(
    title: str,
    year: str | None = None,
    *,
    session: requests.Session | None = None,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> str:
    """
    Keyless fallback: fetch the public search results page and take the first
    `/watch?v=` link. Brittle against markup changes; only used when no API key
    is configured.
    """

    session = session or requests.Session()
    query = build_trailer_query(title, year)
    try:
        resp = session.get(
            YOUTUBE_RESULTS_URL,
            params={"search_query": query},
            headers=_BROWSER_HEADERS,
            timeout=timeout_seconds,
        )
    except requests.RequestException as exc:
        raise YoutubeClientError(f"YouTube results page request failed: {exc}") from exc

    if resp.status_code != 200:
        raise YoutubeClientError(
            f"YouTube results page failed with HTTP {resp.status_code}.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        )

    match = _WATCH_LINK_RE.search(resp.text or "")
    if not match:
        raise TrailerNotFoundError(f"No video link found for query {query!r}.")

    url = build_watch_url(match.group(1))
    logger.debug("YouTube results page %r -> %s", query, url)
    return url

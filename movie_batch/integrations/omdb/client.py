from __future__ import annotations

import logging
import os
from typing import Any, Mapping

import requests

from movie_batch.models.movies import MovieRecord

OMDB_API_BASE_URL = "https://www.omdbapi.com/"
DEFAULT_TIMEOUT_SECONDS = 10.0

logger = logging.getLogger(__name__)


class OmdbClientError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, body_snippet: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body_snippet = body_snippet


class OmdbTransportError(OmdbClientError):
    """
    The request never produced a usable JSON object (connection failure,
    timeout, non-JSON body, unexpected HTTP status).
    """


class OmdbNotFoundError(OmdbClientError):
    """
    OMDb answered, but reported `Response: "False"` or an `Error` message.
    """

    def __init__(self, message: str, *, api_error: str = "", status_code: int | None = None) -> None:
        super().__init__(message, status_code=status_code)
        self.api_error = api_error


def resolve_api_key(api_key: str | None = None) -> str | None:
    """
    Best-effort API key resolution (`API_KEY`, then `OMDB_API_KEY`).
    """

    resolved = (api_key or os.getenv("API_KEY") or os.getenv("OMDB_API_KEY") or "").strip()
    return resolved or None


def require_api_key(api_key: str | None = None) -> str:
    resolved = resolve_api_key(api_key)
    if not resolved:
        raise RuntimeError("API_KEY is not set.")
    return resolved


def _request_json(
    session: requests.Session,
    url: str,
    *,
    params: Mapping[str, Any],
    timeout_seconds: float,
) -> tuple[int, dict[str, Any]]:
    headers = {"accept": "application/json"}
    try:
        resp = session.get(url, params=params, headers=headers, timeout=timeout_seconds)
    except requests.RequestException as exc:
        raise OmdbTransportError(f"OMDb request failed: {exc}") from exc

    try:
        payload = resp.json()
    except ValueError as exc:
        raise OmdbTransportError(
            "OMDb returned non-JSON response.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        ) from exc

    if not isinstance(payload, dict):
        raise OmdbTransportError(
            "OMDb returned unexpected JSON shape (not an object).",
            status_code=resp.status_code,
        )
    return resp.status_code, payload


def fetch_movie_by_title(
    title: str,
    *,
    api_key: str | None = None,
    session: requests.Session | None = None,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> MovieRecord:
    """
    Look up a movie by free-text title (`?t=`). One attempt, no retry.

    OMDb signals a miss in-band (HTTP 200 with `Response: "False"`); invalid keys
    come back as HTTP 401 with the same shape. Both raise `OmdbNotFoundError` with
    the API's own error text. Anything that is not a JSON object raises
    `OmdbTransportError`.
    """

    api_key = require_api_key(api_key)
    session = session or requests.Session()
    status_code, payload = _request_json(
        session,
        OMDB_API_BASE_URL,
        params={"apikey": api_key, "t": title},
        timeout_seconds=timeout_seconds,
    )

    record = MovieRecord.from_payload(payload)
    if status_code != 200 and not record.error:
        raise OmdbTransportError(
            f"OMDb request failed with HTTP {status_code}.",
            status_code=status_code,
            body_snippet=str(payload)[:400],
        )
    if not record.found or record.error:
        api_error = record.error or "unknown error"
        raise OmdbNotFoundError(f"OMDb API error: {api_error}", api_error=api_error, status_code=status_code)

    logger.debug("OMDb resolved %r -> %r (%s) imdb_id=%s", title, record.title, record.year, record.imdb_id)
    return record

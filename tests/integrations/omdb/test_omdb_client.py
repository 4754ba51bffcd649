from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
import requests

from movie_batch.integrations.omdb.client import (
    OMDB_API_BASE_URL,
    OmdbNotFoundError,
    OmdbTransportError,
    fetch_movie_by_title,
    require_api_key,
    resolve_api_key,
)


def _fixture_text(name: str) -> str:
    repo_root = Path(__file__).resolve().parents[3]
    return (repo_root / "tests" / "fixtures" / "omdb" / name).read_text(encoding="utf-8")


@dataclass
class _FakeResponse:
    status_code: int
    text: str

    def json(self) -> Any:
        return json.loads(self.text)


@dataclass
class _FakeSession:
    response: _FakeResponse | None = None
    exc: Exception | None = None
    calls: list[dict[str, Any]] = field(default_factory=list)

    def get(self, url: str, *, params=None, headers=None, timeout=None) -> _FakeResponse:  # noqa: ANN001
        self.calls.append({"url": url, "params": dict(params or {}), "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        assert self.response is not None
        return self.response


def test_fetch_movie_by_title_maps_payload_fields() -> None:
    session = _FakeSession(response=_FakeResponse(200, _fixture_text("inception.json")))

    record = fetch_movie_by_title("Inception", api_key="k", session=session, timeout_seconds=3.0)

    assert record.title == "Inception"
    assert record.year == "2010"
    assert record.rated == "PG-13"
    assert record.released == "16 Jul 2010"
    assert record.runtime == "148 min"
    assert record.director == "Christopher Nolan"
    assert record.language == "English, Japanese, French"
    assert record.imdb_id == "tt1375666"
    assert record.found is True
    assert record.error == ""

    assert session.calls == [{"url": OMDB_API_BASE_URL, "params": {"apikey": "k", "t": "Inception"}, "timeout": 3.0}]


def test_fetch_movie_by_title_not_found_carries_api_error() -> None:
    session = _FakeSession(response=_FakeResponse(200, _fixture_text("not_found.json")))

    with pytest.raises(OmdbNotFoundError) as excinfo:
        fetch_movie_by_title("Nonexistent Movie XYZ123", api_key="k", session=session)

    assert excinfo.value.api_error == "Movie not found!"
    assert "Movie not found!" in str(excinfo.value)


def test_fetch_movie_by_title_invalid_key_is_lookup_error_not_transport() -> None:
    session = _FakeSession(response=_FakeResponse(401, _fixture_text("invalid_key.json")))

    with pytest.raises(OmdbNotFoundError) as excinfo:
        fetch_movie_by_title("Inception", api_key="bad", session=session)

    assert excinfo.value.status_code == 401
    assert excinfo.value.api_error == "Invalid API key!"


def test_fetch_movie_by_title_error_message_wins_over_truthy_response() -> None:
    payload = {"Title": "Odd", "Response": "True", "Error": "Something went wrong."}
    session = _FakeSession(response=_FakeResponse(200, json.dumps(payload)))

    with pytest.raises(OmdbNotFoundError):
        fetch_movie_by_title("Odd", api_key="k", session=session)


@pytest.mark.parametrize(
    ("status_code", "text"),
    [
        (200, "<html>Service Unavailable</html>"),
        (200, '{"Title": "Inception", '),
        (200, '["not", "an", "object"]'),
        (503, "{}"),
    ],
)
def test_fetch_movie_by_title_transport_failures(status_code: int, text: str) -> None:
    session = _FakeSession(response=_FakeResponse(status_code, text))

    with pytest.raises(OmdbTransportError):
        fetch_movie_by_title("Inception", api_key="k", session=session)


def test_fetch_movie_by_title_connection_error_is_transport_error() -> None:
    session = _FakeSession(exc=requests.ConnectionError("connection refused"))

    with pytest.raises(OmdbTransportError) as excinfo:
        fetch_movie_by_title("Inception", api_key="k", session=session)

    assert not isinstance(excinfo.value, OmdbNotFoundError)
    assert "connection refused" in str(excinfo.value)


def test_resolve_api_key_prefers_api_key_then_omdb_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("API_KEY", raising=False)
    monkeypatch.delenv("OMDB_API_KEY", raising=False)
    assert resolve_api_key() is None

    monkeypatch.setenv("OMDB_API_KEY", "fallback")
    assert resolve_api_key() == "fallback"

    monkeypatch.setenv("API_KEY", " primary ")
    assert resolve_api_key() == "primary"
    assert resolve_api_key("explicit") == "explicit"


def test_require_api_key_raises_when_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("API_KEY", raising=False)
    monkeypatch.delenv("OMDB_API_KEY", raising=False)

    with pytest.raises(RuntimeError, match="API_KEY"):
        require_api_key()

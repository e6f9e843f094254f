from __future__ import annotations

from typing import Any

import pytest
import requests

from competitor_intel.config import AdLibrarySettings
from competitor_intel.discovery.ad_library_client import AdDiscoveryClient
from competitor_intel.errors import DiscoveryError


class _FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None) -> None:
        self.status_code = status_code
        self._payload = payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}", response=self)

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class _FakeSession:
    def __init__(self, outcomes: list[Any]) -> None:
        self._outcomes = list(outcomes)
        self.calls: list[dict[str, Any]] = []

    def post(self, url: str, **kwargs: Any) -> _FakeResponse:
        self.calls.append({"url": url, **kwargs})
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _record(**overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "ad_archive_id": "123",
        "page_name": "Tienda Flash",
        "is_active": True,
        "ad_library_url": "https://www.facebook.com/ads/library/?id=123",
        "snapshot": {
            "link_url": "https://www.tiendaflash.com/producto",
            "body": {"text": "Envío gratis"},
            "cta_text": "Shop now",
            "images": ["https://cdn.example.com/img.jpg"],
        },
    }
    record.update(overrides)
    return record


def _client(session: _FakeSession, **settings: Any) -> AdDiscoveryClient:
    return AdDiscoveryClient(
        settings=AdLibrarySettings(api_token="token", **settings),
        session=session,  # type: ignore[arg-type]
        sleep=lambda _: None,
    )


def test_search_maps_records_to_candidates() -> None:
    session = _FakeSession([_FakeResponse(payload=[_record()])])
    response = _client(session).search(keyword="faja", country="CO")

    assert response.total_found == 1
    candidate = response.candidates[0]
    assert candidate.id == "123"
    assert candidate.domain == "tiendaflash.com"
    assert candidate.cta_text == "Shop now"
    assert candidate.thumbnail_url == "https://cdn.example.com/img.jpg"

    call = session.calls[0]
    assert call["json"]["count"] == 30
    assert "q=faja" in call["json"]["urls"][0]["url"]
    assert "country=CO" in call["json"]["urls"][0]["url"]
    assert call["params"]["token"] == "token"


def test_inactive_and_linkless_records_are_dropped_but_counted() -> None:
    inactive = _record(is_active=False)
    linkless = _record(snapshot={"body": {"text": "x"}})
    session = _FakeSession([_FakeResponse(payload=[inactive, linkless, _record()])])

    response = _client(session).search(keyword="faja", country="CO")

    assert response.total_found == 3
    assert len(response.candidates) == 1


def test_long_ad_text_is_truncated() -> None:
    record = _record()
    record["snapshot"]["body"]["text"] = "a" * 400
    candidate = AdDiscoveryClient.parse_record(record)

    assert candidate is not None
    assert candidate.ad_text == "a" * 300 + "..."


def test_video_thumbnail_fallback_and_generated_id() -> None:
    record = _record(ad_archive_id=None, page_name=None)
    record["snapshot"]["images"] = []
    record["snapshot"]["videos"] = [{"thumbnail": "https://cdn.example.com/thumb.jpg"}]
    candidate = AdDiscoveryClient.parse_record(record)

    assert candidate is not None
    assert candidate.thumbnail_url == "https://cdn.example.com/thumb.jpg"
    assert candidate.id.startswith("ad-")
    assert candidate.advertiser_name == "Unknown advertiser"


def test_missing_token_fails_before_network() -> None:
    session = _FakeSession([])
    client = AdDiscoveryClient(settings=AdLibrarySettings(api_token=None), session=session)  # type: ignore[arg-type]

    with pytest.raises(DiscoveryError):
        client.search(keyword="faja", country="CO")
    assert session.calls == []


def test_retryable_status_is_retried_then_succeeds() -> None:
    session = _FakeSession([_FakeResponse(status_code=503), _FakeResponse(payload=[_record()])])
    response = _client(session, max_retries=2).search(keyword="faja", country="CO")

    assert len(session.calls) == 2
    assert len(response.candidates) == 1


def test_non_retryable_status_raises_discovery_error() -> None:
    session = _FakeSession([_FakeResponse(status_code=401)])
    with pytest.raises(DiscoveryError, match="HTTP 401"):
        _client(session).search(keyword="faja", country="CO")
    assert len(session.calls) == 1


def test_timeout_after_retries_raises_discovery_error() -> None:
    session = _FakeSession([requests.Timeout("slow"), requests.Timeout("slow")])
    with pytest.raises(DiscoveryError, match="timed out"):
        _client(session, max_retries=1).search(keyword="faja", country="CO")


def test_invalid_json_raises_discovery_error() -> None:
    session = _FakeSession([_FakeResponse(payload=ValueError("bad json"))])
    with pytest.raises(DiscoveryError, match="not valid JSON"):
        _client(session).search(keyword="faja", country="CO")


def test_other_transport_errors_raise_discovery_error() -> None:
    session = _FakeSession([requests.exceptions.ChunkedEncodingError("broken stream")])
    with pytest.raises(DiscoveryError, match="broken stream"):
        _client(session, max_retries=2).search(keyword="faja", country="CO")
    assert len(session.calls) == 1


def test_non_list_payload_yields_no_candidates() -> None:
    session = _FakeSession([_FakeResponse(payload={"error": "nothing"})])
    response = _client(session).search(keyword="faja", country="CO")
    assert response.total_found == 0
    assert response.candidates == []

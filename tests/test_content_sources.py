"""
tests/test_content_sources.py

Interactive renderer and passive text extractor against fake HTTP sessions.
"""

from __future__ import annotations

from typing import Any

import pytest
import requests

from competitor_intel.config import RendererSettings, TextExtractorSettings
from competitor_intel.errors import ExtractionError
from competitor_intel.extraction.classifier import HEADLINE_TRUNCATE, ContentClassifier
from competitor_intel.extraction.offers import OfferExtractor
from competitor_intel.scraping.base import PageContent
from competitor_intel.scraping.pacing import SequentialPacer
from competitor_intel.scraping.renderer import RENDER_FUNCTION, InteractiveRenderer
from competitor_intel.scraping.text_extractor import PassiveTextExtractor


class _FakeResponse:
    def __init__(self, *, status_code: int = 200, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}", response=self)

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class _FakeSession:
    def __init__(self, outcome: Any) -> None:
        self._outcome = outcome
        self.calls: list[dict[str, Any]] = []

    def request(self, **kwargs: Any) -> _FakeResponse:
        self.calls.append(kwargs)
        if isinstance(self._outcome, Exception):
            raise self._outcome
        return self._outcome


def _renderer(session: _FakeSession) -> InteractiveRenderer:
    return InteractiveRenderer(
        settings=RendererSettings(api_key="key", timeout_seconds=25),
        session=session,  # type: ignore[arg-type]
    )


def _text_extractor(session: _FakeSession) -> PassiveTextExtractor:
    return PassiveTextExtractor(
        settings=TextExtractorSettings(timeout_seconds=30),
        delay_seconds=1.0,
        session=session,  # type: ignore[arg-type]
    )


def _analyze(source: Any, url: str = "https://tiendaflash.com/p") -> Any:
    return source.analyze(url, offer_extractor=OfferExtractor(), classifier=ContentClassifier())


# ---------------------------------------------------------------------------
# InteractiveRenderer
# ---------------------------------------------------------------------------


class TestInteractiveRenderer:
    def test_request_carries_function_and_context(self) -> None:
        session = _FakeSession(_FakeResponse(payload={"fragments": [], "html": ""}))
        _analyze(_renderer(session))

        call = session.calls[0]
        assert call["method"] == "POST"
        assert call["params"] == {"token": "key"}
        assert call["timeout"] == 25
        assert call["json"]["code"] == RENDER_FUNCTION
        context = call["json"]["context"]
        assert context["url"] == "https://tiendaflash.com/p"
        assert context["timeoutMs"] == 25000
        assert {entry["region"] for entry in context["regions"]} >= {"price", "variant", "modal"}

    def test_structured_offers_become_findings(self) -> None:
        payload = {
            "data": {
                "fragments": [
                    {"region": "variant", "text": "1 unidad $89.900"},
                    {"region": "variant", "text": "2 unidades $149.900 antes $179.800"},
                    {"region": "gift", "text": "Regalo: cinturón de viaje"},
                    {"region": "cta", "text": "Pedir con pago contra entrega"},
                ],
                "html": "<h1>Faja reductora premium</h1><p>Envío gratis a todo el país</p>",
            }
        }
        findings = _analyze(_renderer(_FakeSession(_FakeResponse(payload=payload))))

        assert findings is not None
        assert findings.source == "renderer"
        assert findings.price == 89900
        assert findings.price_formatted == "$89.900"
        assert len(findings.offers) == 2
        assert findings.offers[1].original_price == 179800
        assert findings.has_combo is True
        assert findings.combo == "1 unidad, 2 unidades"
        assert findings.gift == "Regalo: cinturón de viaje"
        assert findings.cta == "Pedir con pago contra entrega"
        assert findings.headline == "Faja reductora premium"
        assert findings.angle == "Free shipping"

    def test_long_page_heading_uses_classifier_headline_limit(self) -> None:
        heading = "Faja reductora " * 10
        payload = {
            "fragments": [{"region": "price", "text": "$89.900"}],
            "html": f"<h1>{heading}</h1>",
        }
        findings = _analyze(_renderer(_FakeSession(_FakeResponse(payload=payload))))

        assert findings is not None
        assert len(heading.strip()) == 149
        assert findings.headline == heading.strip()[:HEADLINE_TRUNCATE]
        assert len(findings.headline) == HEADLINE_TRUNCATE

    def test_no_structured_offers_is_not_usable(self) -> None:
        payload = {"fragments": [], "html": "<p>Precio $89.900</p>"}
        assert _analyze(_renderer(_FakeSession(_FakeResponse(payload=payload)))) is None

    def test_empty_render_is_none(self) -> None:
        assert _analyze(_renderer(_FakeSession(_FakeResponse(payload={"fragments": []})))) is None

    def test_timeout_is_reported_with_source_tag(self) -> None:
        with pytest.raises(ExtractionError) as info:
            _analyze(_renderer(_FakeSession(requests.Timeout("slow"))))
        assert info.value.source == "renderer"
        assert "timed out" in info.value.message

    def test_http_error_is_reported(self) -> None:
        with pytest.raises(ExtractionError, match="HTTP 429"):
            _analyze(_renderer(_FakeSession(_FakeResponse(status_code=429))))

    def test_invalid_json_is_reported(self) -> None:
        with pytest.raises(ExtractionError, match="not valid JSON"):
            _analyze(_renderer(_FakeSession(_FakeResponse(payload=None))))


# ---------------------------------------------------------------------------
# PassiveTextExtractor
# ---------------------------------------------------------------------------


class TestPassiveTextExtractor:
    def test_request_targets_reader_url(self) -> None:
        session = _FakeSession(_FakeResponse(text="Faja premium\nPrecio $89.900"))
        _analyze(_text_extractor(session))

        call = session.calls[0]
        assert call["method"] == "GET"
        assert call["url"] == "https://r.jina.ai/https://tiendaflash.com/p"
        assert call["headers"] == {"Accept": "text/plain"}

    def test_text_heuristics_become_findings(self) -> None:
        text = "Faja reductora premium\nAntes $179.900 Ahora $89.900\nEnvío gratis\nComprar ahora"
        findings = _analyze(_text_extractor(_FakeSession(_FakeResponse(text=text))))

        assert findings.source == "text-extractor"
        assert findings.price == 89900
        assert findings.offers == ()
        assert findings.gift == "Envío gratis"
        assert findings.cta == "Comprar ahora"
        assert findings.headline == "Faja reductora premium"

    def test_text_without_price_still_yields_findings(self) -> None:
        findings = _analyze(_text_extractor(_FakeSession(_FakeResponse(text="Solo texto de marca"))))
        assert findings is not None
        assert findings.price is None

    def test_blank_text_is_none(self) -> None:
        assert _analyze(_text_extractor(_FakeSession(_FakeResponse(text="  \n")))) is None

    def test_connection_error_is_reported(self) -> None:
        with pytest.raises(ExtractionError, match="request failed"):
            _analyze(_text_extractor(_FakeSession(requests.ConnectionError("refused"))))

    def test_page_content_region_defaults_to_empty(self) -> None:
        assert PageContent(url="u", text="t").region("price") == []


# ---------------------------------------------------------------------------
# SequentialPacer
# ---------------------------------------------------------------------------


class TestSequentialPacer:
    def test_pause_sleeps_and_accumulates(self) -> None:
        slept: list[float] = []
        pacer = SequentialPacer(sleep=slept.append)
        pacer.pause(1.5)
        pacer.pause(0)
        pacer.pause(1.0)
        assert slept == [1.5, 1.0]
        assert pacer.total_paused_seconds == 2.5

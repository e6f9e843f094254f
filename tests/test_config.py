from __future__ import annotations

import json
import logging

import pytest

from competitor_intel import config
from competitor_intel.logging_utils import elapsed_ms, log_event


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    for getter in (
        config.get_ad_library_settings,
        config.get_renderer_settings,
        config.get_analysis_settings,
    ):
        getter.cache_clear()
    yield
    for getter in (
        config.get_ad_library_settings,
        config.get_renderer_settings,
        config.get_analysis_settings,
    ):
        getter.cache_clear()


def test_analysis_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANALYSIS_MAX_SELECTION", "5")
    monkeypatch.setenv("ANALYSIS_ITEM_DELAY_SECONDS", "0.25")
    monkeypatch.setenv("DEFAULT_MARKET", "mx")

    settings = config.get_analysis_settings()

    assert settings.max_selection == 5
    assert settings.item_delay_seconds == 0.25
    assert settings.default_country == "MX"


def test_invalid_numbers_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANALYSIS_MAX_SELECTION", "ten")
    monkeypatch.setenv("AD_LIBRARY_MAX_RETRIES", "-3")

    assert config.get_analysis_settings().max_selection == 10
    assert config.get_ad_library_settings().max_retries == 0


def test_renderer_is_disabled_without_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BROWSERLESS_API_KEY", "   ")
    assert config.get_renderer_settings().enabled is False

    config.get_renderer_settings.cache_clear()
    monkeypatch.setenv("BROWSERLESS_API_KEY", "secret")
    assert config.get_renderer_settings().enabled is True


def test_log_event_emits_json(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("competitor_intel.tests")
    with caplog.at_level(logging.INFO, logger="competitor_intel.tests"):
        log_event(logger, logging.INFO, "item_analyzed", ad_id="ad-1", price=89900)

    payload = json.loads(caplog.records[-1].getMessage())
    assert payload == {"event": "item_analyzed", "ad_id": "ad-1", "price": 89900}


def test_elapsed_ms_is_set_on_exit() -> None:
    with elapsed_ms() as timer:
        pass
    assert timer["elapsed_ms"] >= 0

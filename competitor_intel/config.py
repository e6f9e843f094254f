"""
competitor_intel/config.py

Environment-driven runtime settings for discovery, extraction and analysis.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class AdLibrarySettings:
    """
    Settings for the ad-library search collaborator (Apify actor).
    """

    api_token: str | None = None
    actor_url: str = (
        "https://api.apify.com/v2/acts/curious_coder~facebook-ads-library-scraper"
        "/run-sync-get-dataset-items"
    )
    library_base_url: str = "https://www.facebook.com/ads/library/"
    result_count: int = 30
    timeout_seconds: float = 90.0
    max_retries: int = 2
    backoff_initial_seconds: float = 1.0
    backoff_multiplier: float = 2.0


@dataclass(frozen=True)
class RendererSettings:
    """
    Settings for the interactive headless-rendering collaborator.
    """

    api_key: str | None = None
    function_url: str = "https://chrome.browserless.io/function"
    timeout_seconds: float = 25.0
    delay_seconds: float = 1.5
    wait_until: str = "networkidle2"

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)


@dataclass(frozen=True)
class TextExtractorSettings:
    """
    Settings for the passive readable-text extraction collaborator.
    """

    base_url: str = "https://r.jina.ai/"
    timeout_seconds: float = 30.0


@dataclass(frozen=True)
class AnalysisSettings:
    """
    Limits and pacing for discovery selection and deep analysis.
    """

    max_selection: int = 10
    max_discovery_results: int = 15
    item_delay_seconds: float = 1.0
    min_keyword_length: int = 2
    default_country: str = "CO"


@lru_cache(maxsize=1)
def get_ad_library_settings() -> AdLibrarySettings:
    """
    Return cached ad-library settings from environment variables.
    """

    defaults = AdLibrarySettings()
    return AdLibrarySettings(
        api_token=_get_optional_str_env("APIFY_API_TOKEN"),
        actor_url=_get_str_env("AD_LIBRARY_ACTOR_URL", defaults.actor_url),
        library_base_url=_get_str_env("AD_LIBRARY_BASE_URL", defaults.library_base_url),
        result_count=max(1, _get_int_env("AD_LIBRARY_RESULT_COUNT", defaults.result_count)),
        timeout_seconds=max(1.0, _get_float_env("AD_LIBRARY_TIMEOUT_SECONDS", defaults.timeout_seconds)),
        max_retries=max(0, _get_int_env("AD_LIBRARY_MAX_RETRIES", defaults.max_retries)),
        backoff_initial_seconds=max(
            0.1,
            _get_float_env("AD_LIBRARY_BACKOFF_INITIAL_SECONDS", defaults.backoff_initial_seconds),
        ),
        backoff_multiplier=max(
            1.0,
            _get_float_env("AD_LIBRARY_BACKOFF_MULTIPLIER", defaults.backoff_multiplier),
        ),
    )


@lru_cache(maxsize=1)
def get_renderer_settings() -> RendererSettings:
    """
    Return cached renderer settings. The renderer is disabled without an API key.
    """

    defaults = RendererSettings()
    return RendererSettings(
        api_key=_get_optional_str_env("BROWSERLESS_API_KEY"),
        function_url=_get_str_env("BROWSERLESS_FUNCTION_URL", defaults.function_url),
        timeout_seconds=max(1.0, _get_float_env("RENDERER_TIMEOUT_SECONDS", defaults.timeout_seconds)),
        delay_seconds=max(0.0, _get_float_env("RENDERER_DELAY_SECONDS", defaults.delay_seconds)),
        wait_until=_get_str_env("RENDERER_WAIT_UNTIL", defaults.wait_until),
    )


@lru_cache(maxsize=1)
def get_text_extractor_settings() -> TextExtractorSettings:
    """
    Return cached passive text extractor settings.
    """

    defaults = TextExtractorSettings()
    return TextExtractorSettings(
        base_url=_get_str_env("TEXT_EXTRACTOR_BASE_URL", defaults.base_url),
        timeout_seconds=max(
            1.0,
            _get_float_env("TEXT_EXTRACTOR_TIMEOUT_SECONDS", defaults.timeout_seconds),
        ),
    )


@lru_cache(maxsize=1)
def get_analysis_settings() -> AnalysisSettings:
    """
    Return cached selection and pacing limits.
    """

    defaults = AnalysisSettings()
    return AnalysisSettings(
        max_selection=max(1, _get_int_env("ANALYSIS_MAX_SELECTION", defaults.max_selection)),
        max_discovery_results=max(
            1,
            _get_int_env("DISCOVERY_MAX_RESULTS", defaults.max_discovery_results),
        ),
        item_delay_seconds=max(
            0.0,
            _get_float_env("ANALYSIS_ITEM_DELAY_SECONDS", defaults.item_delay_seconds),
        ),
        min_keyword_length=max(1, _get_int_env("DISCOVERY_MIN_KEYWORD_LENGTH", defaults.min_keyword_length)),
        default_country=_get_str_env("DEFAULT_MARKET", defaults.default_country).upper(),
    )

"""
competitor_intel/discovery/ad_library_client.py

Client for the ad-library search collaborator (Apify Meta Ad Library actor).
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

import requests

from competitor_intel.config import AdLibrarySettings
from competitor_intel.discovery.filters import resolve_domain
from competitor_intel.domain.ads import RawAdCandidate
from competitor_intel.errors import DiscoveryError
from competitor_intel.logging_utils import elapsed_ms, log_event

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}
AD_TEXT_MAX_CHARS = 300
UNKNOWN_ADVERTISER = "Unknown advertiser"


@dataclass(frozen=True)
class AdSearchResponse:
    """
    Raw search outcome: how many records came back and which ones are usable.
    """

    total_found: int
    candidates: list[RawAdCandidate] = field(default_factory=list)


class AdDiscoveryClient:
    """
    Searches running ads for a keyword/country and maps them to raw candidates.
    """

    def __init__(
        self,
        *,
        settings: AdLibrarySettings,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._settings = settings
        self._session = session or requests.Session()
        self._sleep = sleep

    def search(self, *, keyword: str, country: str) -> AdSearchResponse:
        """
        Run one ad-library search. Any collaborator failure raises DiscoveryError.
        """

        if not self._settings.api_token:
            raise DiscoveryError("Ad library API token is not configured (APIFY_API_TOKEN).")

        library_url = self.build_library_url(keyword=keyword, country=country)
        with elapsed_ms() as timer:
            payload = self._request_dataset(library_url)

        records = payload if isinstance(payload, list) else []
        candidates: list[RawAdCandidate] = []
        for index, record in enumerate(records):
            try:
                candidate = self.parse_record(record)
            except (TypeError, ValueError, AttributeError) as exc:
                logger.warning("Skipping malformed ad record index=%s error=%s", index, exc)
                continue
            if candidate is not None:
                candidates.append(candidate)

        log_event(
            logger,
            logging.INFO,
            "ad_search_completed",
            keyword=keyword,
            country=country,
            records=len(records),
            usable=len(candidates),
            elapsed_ms=timer["elapsed_ms"],
        )
        return AdSearchResponse(total_found=len(records), candidates=candidates)

    def build_library_url(self, *, keyword: str, country: str) -> str:
        query = urlencode(
            {
                "active_status": "active",
                "ad_type": "all",
                "country": country,
                "q": keyword,
                "search_type": "keyword_unordered",
                "media_type": "all",
            }
        )
        return f"{self._settings.library_base_url}?{query}"

    @staticmethod
    def parse_record(record: Any) -> RawAdCandidate | None:
        """
        Map one collaborator record to a candidate; inactive or link-less ads yield None.
        """

        if not isinstance(record, dict):
            return None

        snapshot = record.get("snapshot") or {}
        if not isinstance(snapshot, dict):
            return None

        landing_url = str(snapshot.get("link_url") or "").strip()
        if not landing_url or not record.get("is_active"):
            return None

        body = snapshot.get("body") or {}
        ad_text = str(body.get("text") or "") if isinstance(body, dict) else ""
        if len(ad_text) > AD_TEXT_MAX_CHARS:
            ad_text = ad_text[:AD_TEXT_MAX_CHARS] + "..."

        advertiser = str(record.get("page_name") or snapshot.get("page_name") or "").strip()
        ad_id = str(record.get("ad_archive_id") or "").strip() or f"ad-{uuid.uuid4().hex[:12]}"

        return RawAdCandidate(
            id=ad_id,
            advertiser_name=advertiser or UNKNOWN_ADVERTISER,
            landing_url=landing_url,
            ad_text=ad_text,
            cta_text=str(snapshot.get("cta_text") or ""),
            ad_library_url=str(record.get("ad_library_url") or ""),
            thumbnail_url=_thumbnail(snapshot),
            domain=resolve_domain(landing_url),
        )

    def _request_dataset(self, library_url: str) -> Any:
        settings = self._settings
        body = {
            "urls": [{"url": library_url, "method": "GET"}],
            "count": settings.result_count,
            "limitPerSource": settings.result_count,
            "scrapeAdDetails": True,
        }
        params = {"token": settings.api_token, "timeout": int(settings.timeout_seconds)}

        last_error: Exception | None = None
        for attempt in range(settings.max_retries + 1):
            try:
                response = self._session.post(
                    settings.actor_url,
                    params=params,
                    json=body,
                    timeout=settings.timeout_seconds,
                )
                if response.status_code in RETRYABLE_STATUS_CODES:
                    raise requests.HTTPError(
                        f"Retryable HTTP status code: {response.status_code}",
                        response=response,
                    )
                response.raise_for_status()
                return response.json()
            except requests.Timeout as exc:
                last_error = exc
                if attempt >= settings.max_retries:
                    raise DiscoveryError(
                        "Ad library search timed out. Try a more specific keyword."
                    ) from exc
            except requests.HTTPError as exc:
                last_error = exc
                status_code = exc.response.status_code if exc.response is not None else None
                if status_code not in RETRYABLE_STATUS_CODES:
                    logger.error("Ad library search failed status=%s error=%s", status_code, exc)
                    raise DiscoveryError(f"Ad library search failed: HTTP {status_code}") from exc
            except requests.ConnectionError as exc:
                last_error = exc
            except ValueError as exc:
                raise DiscoveryError("Ad library response was not valid JSON.") from exc
            except requests.RequestException as exc:
                logger.error("Ad library request failed error=%s", exc)
                raise DiscoveryError(f"Ad library request failed: {exc}") from exc

            if attempt >= settings.max_retries:
                break

            backoff_seconds = settings.backoff_initial_seconds * (settings.backoff_multiplier**attempt)
            logger.warning(
                "Ad library search retry attempt=%s/%s wait_seconds=%.2f",
                attempt + 1,
                settings.max_retries,
                backoff_seconds,
            )
            self._sleep(backoff_seconds)

        raise DiscoveryError(f"Ad library search failed after retries: {last_error}") from last_error


def _thumbnail(snapshot: dict[str, Any]) -> str | None:
    images = snapshot.get("images") or []
    if isinstance(images, list) and images:
        first = images[0]
        if isinstance(first, str):
            return first
        if isinstance(first, dict):
            return first.get("original_image_url") or first.get("resized_image_url")

    videos = snapshot.get("videos") or []
    if isinstance(videos, list) and videos and isinstance(videos[0], dict):
        return videos[0].get("thumbnail") or videos[0].get("video_preview_image_url")
    return None

"""
Content source abstraction for landing-page extraction.

A content source fetches one landing page through an external collaborator and
turns it into findings. The analysis orchestrator walks an ordered list of
sources and keeps the first one that yields usable findings.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar

import requests

from competitor_intel.domain.analysis import CompetitorFindings, ExtractionSource
from competitor_intel.errors import ExtractionError
from competitor_intel.extraction.classifier import ContentClassifier
from competitor_intel.extraction.offers import OfferExtractor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageContent:
    """
    Raw content returned by a collaborator for one URL.
    """

    url: str
    text: str
    fragments: dict[str, list[str]] = field(default_factory=dict)
    html: str | None = None

    def region(self, name: str) -> list[str]:
        return self.fragments.get(name, [])


class ContentSource(ABC):
    """
    One tier of the extraction fallback chain.
    """

    source_tag: ClassVar[ExtractionSource]

    def __init__(
        self,
        *,
        timeout_seconds: float,
        delay_seconds: float,
        session: requests.Session | None = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.delay_seconds = delay_seconds
        self._session = session or requests.Session()

    def analyze(
        self,
        url: str,
        *,
        offer_extractor: OfferExtractor,
        classifier: ContentClassifier,
    ) -> CompetitorFindings | None:
        """
        Return findings, or None when the page yields nothing usable.

        Collaborator failures and timeouts raise ExtractionError.
        """

        content = self.fetch(url)
        if content is None:
            return None
        return self.build_findings(
            content,
            offer_extractor=offer_extractor,
            classifier=classifier,
        )

    @abstractmethod
    def fetch(self, url: str) -> PageContent | None:
        """
        Fetch `url` through the collaborator; None when it returns no content.
        """

    @abstractmethod
    def build_findings(
        self,
        content: PageContent,
        *,
        offer_extractor: OfferExtractor,
        classifier: ContentClassifier,
    ) -> CompetitorFindings | None:
        """
        Turn fetched content into findings; None when the content is not usable.
        """

    def _send(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            response = self._session.request(
                method=method,
                url=url,
                timeout=self.timeout_seconds,
                **kwargs,
            )
            response.raise_for_status()
            return response
        except requests.Timeout as exc:
            raise ExtractionError(
                self.source_tag,
                f"{self.source_tag} timed out after {self.timeout_seconds:g}s",
            ) from exc
        except requests.HTTPError as exc:
            status_code = exc.response.status_code if exc.response is not None else None
            raise ExtractionError(
                self.source_tag,
                f"{self.source_tag} returned HTTP {status_code}",
            ) from exc
        except requests.RequestException as exc:
            raise ExtractionError(
                self.source_tag,
                f"{self.source_tag} request failed: {exc}",
            ) from exc

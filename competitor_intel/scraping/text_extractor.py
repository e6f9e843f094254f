"""
Passive readable-text content source (Jina Reader).
"""

from __future__ import annotations

import requests

from competitor_intel.config import TextExtractorSettings
from competitor_intel.domain.analysis import CompetitorFindings
from competitor_intel.extraction.classifier import ContentClassifier
from competitor_intel.extraction.offers import OfferExtractor
from competitor_intel.scraping.base import ContentSource, PageContent


class PassiveTextExtractor(ContentSource):
    """
    Fetches a plain-text rendering of the page and runs the text heuristics on it.
    """

    source_tag = "text-extractor"

    def __init__(
        self,
        *,
        settings: TextExtractorSettings,
        delay_seconds: float,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(
            timeout_seconds=settings.timeout_seconds,
            delay_seconds=delay_seconds,
            session=session,
        )
        self._settings = settings

    def fetch(self, url: str) -> PageContent | None:
        response = self._send(
            "GET",
            f"{self._settings.base_url}{url}",
            headers={"Accept": "text/plain"},
        )
        text = response.text or ""
        if not text.strip():
            return None
        return PageContent(url=url, text=text)

    def build_findings(
        self,
        content: PageContent,
        *,
        offer_extractor: OfferExtractor,
        classifier: ContentClassifier,
    ) -> CompetitorFindings:
        extraction = offer_extractor.extract(content.text)
        signals = classifier.classify(content.text)
        return CompetitorFindings(
            source=self.source_tag,
            price=extraction.price,
            price_formatted=extraction.price_formatted,
            has_combo=signals.combo is not None,
            combo=signals.combo,
            gift=signals.gift,
            angle=signals.angle,
            headline=signals.headline,
            cta=signals.cta,
        )

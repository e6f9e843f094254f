"""
competitor_intel/analysis/orchestrator.py

Sequential deep analysis of user-selected ads with per-item failure isolation.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from competitor_intel.domain.ads import SelectedAd
from competitor_intel.domain.analysis import AnalyzedCompetitor, CompetitorFindings
from competitor_intel.errors import ExtractionError, SelectionValidationError
from competitor_intel.extraction.classifier import ContentClassifier
from competitor_intel.extraction.offers import OfferExtractor
from competitor_intel.logging_utils import elapsed_ms, log_event
from competitor_intel.scraping.base import ContentSource
from competitor_intel.scraping.pacing import SequentialPacer

logger = logging.getLogger(__name__)

CONTENT_UNAVAILABLE = "content unavailable"
DEFAULT_MAX_SELECTION = 10


class DeepAnalysisOrchestrator:
    """
    Drives the content-source chain for each selected ad, one ad at a time.

    N selected ads always produce N competitors, in request order, each either
    populated or carrying an `error`.
    """

    def __init__(
        self,
        *,
        sources: Sequence[ContentSource],
        offer_extractor: OfferExtractor,
        classifier: ContentClassifier | None = None,
        pacer: SequentialPacer | None = None,
        max_selection: int = DEFAULT_MAX_SELECTION,
        item_delay_seconds: float = 1.0,
    ) -> None:
        self._sources = list(sources)
        self._offer_extractor = offer_extractor
        self._classifier = classifier or ContentClassifier()
        self._pacer = pacer or SequentialPacer()
        self._max_selection = max_selection
        self._item_delay_seconds = item_delay_seconds

    def validate_selection(self, ads: Sequence[SelectedAd]) -> None:
        if not ads:
            raise SelectionValidationError("Select at least one competitor to analyze.")
        if len(ads) > self._max_selection:
            raise SelectionValidationError(
                f"At most {self._max_selection} competitors can be analyzed per run "
                f"(got {len(ads)})."
            )

    def analyze(self, ads: Sequence[SelectedAd]) -> list[AnalyzedCompetitor]:
        """
        Analyze every ad sequentially, pausing between items.
        """

        self.validate_selection(ads)

        results: list[AnalyzedCompetitor] = []
        for index, ad in enumerate(ads):
            competitor, delay_seconds = self._analyze_one(ad)
            results.append(competitor)
            if index < len(ads) - 1:
                self._pacer.pause(delay_seconds)

        log_event(
            logger,
            logging.INFO,
            "analysis_completed",
            requested=len(ads),
            failed=sum(1 for item in results if item.error),
            sources=[source.source_tag for source in self._sources],
        )
        return results

    def _analyze_one(self, ad: SelectedAd) -> tuple[AnalyzedCompetitor, float]:
        failure: str | None = None
        for source in self._sources:
            try:
                with elapsed_ms() as timer:
                    findings = source.analyze(
                        ad.landing_url,
                        offer_extractor=self._offer_extractor,
                        classifier=self._classifier,
                    )
            except Exception as exc:
                failure = _failure_message(exc)
                log_event(
                    logger,
                    logging.WARNING,
                    "content_source_failed",
                    ad_id=ad.id,
                    landing_url=ad.landing_url,
                    source=source.source_tag,
                    error=failure,
                )
                continue

            if findings is None:
                failure = None
                continue

            log_event(
                logger,
                logging.INFO,
                "item_analyzed",
                ad_id=ad.id,
                advertiser=ad.advertiser_name,
                source=findings.source,
                price=findings.price,
                offers=len(findings.offers),
                elapsed_ms=timer["elapsed_ms"],
            )
            return _from_findings(ad, findings), source.delay_seconds

        error = failure or CONTENT_UNAVAILABLE
        log_event(
            logger,
            logging.WARNING,
            "item_unavailable",
            ad_id=ad.id,
            landing_url=ad.landing_url,
            error=error,
        )
        return _with_error(ad, error), self._item_delay_seconds


def _failure_message(exc: Exception) -> str:
    if isinstance(exc, ExtractionError):
        return exc.message
    return str(exc) or exc.__class__.__name__


def _from_findings(ad: SelectedAd, findings: CompetitorFindings) -> AnalyzedCompetitor:
    return AnalyzedCompetitor(
        id=ad.id,
        advertiser_name=ad.advertiser_name,
        landing_url=ad.landing_url,
        ad_library_url=ad.ad_library_url,
        ad_text=ad.ad_text,
        cta_text=ad.cta_text,
        price=findings.price,
        price_formatted=findings.price_formatted,
        offers=findings.offers,
        has_combo=findings.has_combo,
        combo=findings.combo,
        gift=findings.gift,
        angle=findings.angle,
        headline=findings.headline,
        cta=findings.cta,
        source=findings.source,
    )


def _with_error(ad: SelectedAd, error: str) -> AnalyzedCompetitor:
    return AnalyzedCompetitor(
        id=ad.id,
        advertiser_name=ad.advertiser_name,
        landing_url=ad.landing_url,
        ad_library_url=ad.ad_library_url,
        ad_text=ad.ad_text,
        cta_text=ad.cta_text,
        error=error,
    )

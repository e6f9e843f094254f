"""
competitor_intel/services/competitor_intel_service.py

Service orchestration for competitor discovery, deep analysis and margin verdicts.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from functools import lru_cache

import requests

from competitor_intel.analysis.margin import MarginCalculator
from competitor_intel.analysis.orchestrator import DeepAnalysisOrchestrator
from competitor_intel.analysis.stats import aggregate_stats
from competitor_intel.config import (
    AdLibrarySettings,
    AnalysisSettings,
    RendererSettings,
    TextExtractorSettings,
    get_ad_library_settings,
    get_analysis_settings,
    get_renderer_settings,
    get_text_extractor_settings,
)
from competitor_intel.discovery.ad_library_client import AdDiscoveryClient
from competitor_intel.discovery.filters import EcommerceFilter
from competitor_intel.discovery.scoring import RelevanceScorer
from competitor_intel.discovery.selector import deduplicate_and_select
from competitor_intel.domain.ads import DiscoveryResult, SelectedAd
from competitor_intel.domain.analysis import (
    AnalysisResult,
    AnalysisStats,
    MarginCalculation,
    MarginInputs,
)
from competitor_intel.errors import SelectionValidationError
from competitor_intel.extraction.offers import OfferExtractor
from competitor_intel.logging_utils import log_event
from competitor_intel.markets.loader import get_market_profiles, resolve_market
from competitor_intel.markets.models import MarketProfile
from competitor_intel.scraping.base import ContentSource
from competitor_intel.scraping.pacing import SequentialPacer
from competitor_intel.scraping.renderer import InteractiveRenderer
from competitor_intel.scraping.text_extractor import PassiveTextExtractor

logger = logging.getLogger(__name__)


class CompetitorIntelService:
    """
    Runs the competitor intelligence pipeline for one request at a time.
    """

    def __init__(
        self,
        *,
        analysis_settings: AnalysisSettings | None = None,
        ad_library_settings: AdLibrarySettings | None = None,
        renderer_settings: RendererSettings | None = None,
        text_extractor_settings: TextExtractorSettings | None = None,
        market_profiles: dict[str, MarketProfile] | None = None,
        session: requests.Session | None = None,
        discovery_client: AdDiscoveryClient | None = None,
        sources: Sequence[ContentSource] | None = None,
        pacer: SequentialPacer | None = None,
    ) -> None:
        self._analysis_settings = analysis_settings or get_analysis_settings()
        self._renderer_settings = renderer_settings or get_renderer_settings()
        self._text_extractor_settings = text_extractor_settings or get_text_extractor_settings()
        self._market_profiles = market_profiles
        self._session = session or requests.Session()
        self._discovery_client = discovery_client or AdDiscoveryClient(
            settings=ad_library_settings or get_ad_library_settings(),
            session=self._session,
        )
        self._sources = list(sources) if sources is not None else None
        self._pacer = pacer
        self._filter = EcommerceFilter()
        self._scorer = RelevanceScorer()

    def search(self, *, keyword: str, country: str | None = None) -> DiscoveryResult:
        """
        Discover, filter, score and deduplicate running ads for a keyword.
        """

        normalized_keyword = (keyword or "").strip()
        if len(normalized_keyword) < self._analysis_settings.min_keyword_length:
            raise SelectionValidationError(
                f"Keyword is required (at least {self._analysis_settings.min_keyword_length} characters)."
            )
        market = self.market_for(country)

        response = self._discovery_client.search(keyword=normalized_keyword, country=market.code)
        accepted = self._filter.apply(response.candidates)
        scored = [self._scorer.score_candidate(candidate) for candidate in accepted]
        selected = deduplicate_and_select(
            scored,
            max_results=self._analysis_settings.max_discovery_results,
        )

        log_event(
            logger,
            logging.INFO,
            "competitor_search_completed",
            keyword=normalized_keyword,
            country=market.code,
            total_found=response.total_found,
            filtered_count=len(scored),
            selected=len(selected),
        )
        return DiscoveryResult(
            keyword=normalized_keyword,
            country=market.code,
            total_found=response.total_found,
            filtered_count=len(scored),
            ads=selected,
        )

    def analyze(self, *, ads: Sequence[SelectedAd], country: str | None = None) -> AnalysisResult:
        """
        Deep-analyze the selected ads and summarize the results.
        """

        market = self.market_for(country)
        orchestrator = self.build_orchestrator(market)
        competitors = orchestrator.analyze(ads)
        return AnalysisResult(competitors=competitors, stats=aggregate_stats(competitors))

    def calculate_margin(
        self,
        *,
        stats: AnalysisStats,
        inputs: MarginInputs,
        country: str | None = None,
    ) -> MarginCalculation | None:
        return MarginCalculator(self.market_for(country)).calculate(stats, inputs)

    def build_orchestrator(self, market: MarketProfile) -> DeepAnalysisOrchestrator:
        return DeepAnalysisOrchestrator(
            sources=self.build_sources(),
            offer_extractor=OfferExtractor(market),
            pacer=self._pacer or SequentialPacer(),
            max_selection=self._analysis_settings.max_selection,
            item_delay_seconds=self._analysis_settings.item_delay_seconds,
        )

    def build_sources(self) -> list[ContentSource]:
        """
        Ordered fallback chain; the renderer joins only when its API key is set.
        """

        if self._sources is not None:
            return list(self._sources)

        sources: list[ContentSource] = []
        if self._renderer_settings.enabled:
            sources.append(
                InteractiveRenderer(settings=self._renderer_settings, session=self._session)
            )
        sources.append(
            PassiveTextExtractor(
                settings=self._text_extractor_settings,
                delay_seconds=self._analysis_settings.item_delay_seconds,
                session=self._session,
            )
        )
        return sources

    def market_for(self, country: str | None) -> MarketProfile:
        profiles = self._market_profiles if self._market_profiles is not None else get_market_profiles()
        return resolve_market(
            country or self._analysis_settings.default_country,
            profiles=profiles,
            default_code=self._analysis_settings.default_country,
        )


@lru_cache(maxsize=1)
def get_competitor_intel_service() -> CompetitorIntelService:
    """
    Build and cache the competitor intelligence service.
    """

    return CompetitorIntelService()

"""
competitor_intel/api/routers/competitor_intel.py

Competitor search, deep analysis and margin calculation endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from competitor_intel.domain.ads import ScoredAdCandidate, SelectedAd
from competitor_intel.domain.analysis import (
    AnalysisStats,
    AnalyzedCompetitor,
    MarginCalculation,
    MarginInputs,
)
from competitor_intel.errors import DiscoveryError, MarginInputError, SelectionValidationError
from competitor_intel.schemas.competitor_intel import (
    AdCandidateResponse,
    AnalysisStatsPayload,
    AnalyzedCompetitorResponse,
    CompetitorAnalyzeRequest,
    CompetitorAnalyzeResponse,
    CompetitorSearchRequest,
    CompetitorSearchResponse,
    MarginCalculationPayload,
    MarginCalculationRequest,
    MarginCalculationResponse,
    PriceOfferResponse,
)
from competitor_intel.services.competitor_intel_service import (
    CompetitorIntelService,
    get_competitor_intel_service,
)

router = APIRouter(tags=["competitor-intel"])


@router.post("/competitor-search", response_model=CompetitorSearchResponse)
def search_competitors(
    payload: CompetitorSearchRequest,
    service: CompetitorIntelService = Depends(get_competitor_intel_service),
) -> CompetitorSearchResponse:
    """
    Discover running ads for a keyword and return the ranked, one-per-domain shortlist.
    """

    try:
        result = service.search(keyword=payload.keyword, country=payload.country)
    except SelectionValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except DiscoveryError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    return CompetitorSearchResponse(
        keyword=result.keyword,
        country=result.country,
        total_found=result.total_found,
        filtered_count=result.filtered_count,
        ads=[_candidate_response(item) for item in result.ads],
    )


@router.post("/competitor-analyze", response_model=CompetitorAnalyzeResponse)
def analyze_competitors(
    payload: CompetitorAnalyzeRequest,
    service: CompetitorIntelService = Depends(get_competitor_intel_service),
) -> CompetitorAnalyzeResponse:
    """
    Deep-analyze up to ten selected landing pages, one at a time.
    """

    ads = [
        SelectedAd(
            id=item.id,
            advertiser_name=item.advertiser_name,
            landing_url=item.landing_url,
            ad_text=item.ad_text or "",
            cta_text=item.cta_text or "",
            ad_library_url=item.ad_library_url or "",
        )
        for item in payload.ads
    ]
    try:
        result = service.analyze(ads=ads, country=payload.country)
    except SelectionValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return CompetitorAnalyzeResponse(
        competitors=[_competitor_response(item) for item in result.competitors],
        stats=_stats_payload(result.stats),
    )


@router.post("/margin-calculation", response_model=MarginCalculationResponse)
def calculate_margin(
    payload: MarginCalculationRequest,
    service: CompetitorIntelService = Depends(get_competitor_intel_service),
) -> MarginCalculationResponse:
    """
    Return the margin verdict, or a null calculation while inputs are incomplete.
    """

    stats = AnalysisStats(**payload.stats.model_dump())
    inputs = MarginInputs(
        supplier_cost=payload.supplier_cost,
        shipping_cost=payload.shipping_cost,
        cpa=payload.cpa,
        effectiveness_rate=payload.effectiveness_rate,
    )
    try:
        calculation = service.calculate_margin(stats=stats, inputs=inputs, country=payload.country)
    except MarginInputError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return MarginCalculationResponse(calculation=_margin_payload(calculation))


def _candidate_response(item: ScoredAdCandidate) -> AdCandidateResponse:
    candidate = item.candidate
    return AdCandidateResponse(
        id=candidate.id,
        advertiser_name=candidate.advertiser_name,
        landing_url=candidate.landing_url,
        ad_text=candidate.ad_text,
        cta_text=candidate.cta_text,
        ad_library_url=candidate.ad_library_url,
        dropshipping_score=item.score,
        image_url=candidate.thumbnail_url,
        domain=candidate.domain,
    )


def _competitor_response(item: AnalyzedCompetitor) -> AnalyzedCompetitorResponse:
    return AnalyzedCompetitorResponse(
        id=item.id,
        advertiser_name=item.advertiser_name,
        landing_url=item.landing_url,
        ad_library_url=item.ad_library_url,
        ad_text=item.ad_text,
        cta_text=item.cta_text,
        price=item.price,
        price_formatted=item.price_formatted,
        offers=[
            PriceOfferResponse(
                label=offer.label,
                price=offer.price,
                original_price=offer.original_price,
            )
            for offer in item.offers
        ],
        has_combo=item.has_combo,
        combo=item.combo,
        gift=item.gift,
        angle=item.angle,
        headline=item.headline,
        cta=item.cta,
        source=item.source,
        error=item.error,
    )


def _stats_payload(stats: AnalysisStats) -> AnalysisStatsPayload:
    return AnalysisStatsPayload(
        total=stats.total,
        analyzed=stats.analyzed,
        with_price=stats.with_price,
        with_gift=stats.with_gift,
        with_combo=stats.with_combo,
        price_min=stats.price_min,
        price_max=stats.price_max,
        price_avg=stats.price_avg,
    )


def _margin_payload(calculation: MarginCalculation | None) -> MarginCalculationPayload | None:
    if calculation is None:
        return None
    return MarginCalculationPayload(
        total_cost=calculation.total_cost,
        total_cost_with_cpa=calculation.total_cost_with_cpa,
        margin_at_min=calculation.margin_at_min,
        margin_at_min_percent=calculation.margin_at_min_percent,
        margin_at_avg=calculation.margin_at_avg,
        margin_at_avg_percent=calculation.margin_at_avg_percent,
        real_margin_at_min=calculation.real_margin_at_min,
        real_margin_at_avg=calculation.real_margin_at_avg,
        min_viable_price=calculation.min_viable_price,
        verdict=calculation.verdict,
        verdict_reason=calculation.verdict_reason,
    )

"""
competitor_intel/schemas package marker.
"""

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
    SelectedAdRequest,
)

__all__ = [
    "AdCandidateResponse",
    "AnalysisStatsPayload",
    "AnalyzedCompetitorResponse",
    "CompetitorAnalyzeRequest",
    "CompetitorAnalyzeResponse",
    "CompetitorSearchRequest",
    "CompetitorSearchResponse",
    "MarginCalculationPayload",
    "MarginCalculationRequest",
    "MarginCalculationResponse",
    "PriceOfferResponse",
    "SelectedAdRequest",
]

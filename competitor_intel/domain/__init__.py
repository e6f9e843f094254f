"""
competitor_intel/domain package marker.
"""

from competitor_intel.domain.ads import DiscoveryResult, RawAdCandidate, ScoredAdCandidate, SelectedAd
from competitor_intel.domain.analysis import (
    AnalysisResult,
    AnalysisStats,
    AnalyzedCompetitor,
    CompetitorFindings,
    MarginCalculation,
    MarginInputs,
    PriceOffer,
)

__all__ = [
    "AnalysisResult",
    "AnalysisStats",
    "AnalyzedCompetitor",
    "CompetitorFindings",
    "DiscoveryResult",
    "MarginCalculation",
    "MarginInputs",
    "PriceOffer",
    "RawAdCandidate",
    "ScoredAdCandidate",
    "SelectedAd",
]

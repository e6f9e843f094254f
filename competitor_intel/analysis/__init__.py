"""
Deep analysis orchestration, aggregation and margin verdicts.
"""

from competitor_intel.analysis.margin import MarginCalculator
from competitor_intel.analysis.orchestrator import CONTENT_UNAVAILABLE, DeepAnalysisOrchestrator
from competitor_intel.analysis.stats import aggregate_stats

__all__ = [
    "CONTENT_UNAVAILABLE",
    "DeepAnalysisOrchestrator",
    "MarginCalculator",
    "aggregate_stats",
]

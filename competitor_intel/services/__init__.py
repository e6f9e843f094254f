"""
competitor_intel/services package marker.
"""

from competitor_intel.services.competitor_intel_service import (
    CompetitorIntelService,
    get_competitor_intel_service,
)

__all__ = [
    "CompetitorIntelService",
    "get_competitor_intel_service",
]

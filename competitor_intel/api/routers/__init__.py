"""
competitor_intel/api/routers package marker.
"""

from competitor_intel.api.routers.competitor_intel import router as competitor_intel_router

__all__ = [
    "competitor_intel_router",
]

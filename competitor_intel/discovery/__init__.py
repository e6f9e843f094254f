"""
Ad discovery, filtering, scoring and selection.
"""

from competitor_intel.discovery.ad_library_client import AdDiscoveryClient, AdSearchResponse
from competitor_intel.discovery.filters import EcommerceFilter, is_commerce_cta, resolve_domain
from competitor_intel.discovery.scoring import RelevanceScorer
from competitor_intel.discovery.selector import deduplicate_and_select

__all__ = [
    "AdDiscoveryClient",
    "AdSearchResponse",
    "EcommerceFilter",
    "RelevanceScorer",
    "deduplicate_and_select",
    "is_commerce_cta",
    "resolve_domain",
]

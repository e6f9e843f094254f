"""
Market profile helpers.
"""

from competitor_intel.markets.loader import get_market_profiles, load_market_profiles, resolve_market
from competitor_intel.markets.models import DEFAULT_MARKET_PROFILE, MarketProfile

__all__ = [
    "DEFAULT_MARKET_PROFILE",
    "MarketProfile",
    "get_market_profiles",
    "load_market_profiles",
    "resolve_market",
]

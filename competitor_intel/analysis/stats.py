"""
Summary statistics over analyzed competitors.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from competitor_intel.domain.analysis import AnalysisStats, AnalyzedCompetitor


def aggregate_stats(competitors: Sequence[AnalyzedCompetitor]) -> AnalysisStats:
    """
    Count outcomes and summarize prices > 0. Price fields are None without prices.
    """

    prices = [item.price for item in competitors if item.price is not None and item.price > 0]

    price_min: float | None = None
    price_max: float | None = None
    price_avg: float | None = None
    if prices:
        price_min = min(prices)
        price_max = max(prices)
        price_avg = _average(prices)

    return AnalysisStats(
        total=len(competitors),
        analyzed=sum(1 for item in competitors if not item.error),
        with_price=len(prices),
        with_gift=sum(1 for item in competitors if item.gift),
        with_combo=sum(1 for item in competitors if item.has_combo or item.combo),
        price_min=price_min,
        price_max=price_max,
        price_avg=price_avg,
    )


def _average(prices: list[float]) -> float:
    """
    Half-up mean: whole units when every price is whole, cents otherwise.
    """

    mean = sum(Decimal(str(price)) for price in prices) / len(prices)
    if all(isinstance(price, int) for price in prices):
        return int(mean.to_integral_value(rounding=ROUND_HALF_UP))
    return float(mean.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))

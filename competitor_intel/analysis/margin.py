"""
competitor_intel/analysis/margin.py

Margin viability calculator and GO / MAYBE / NO-GO verdict.

Expected inputs
---------------
supplier_cost : float
    Unit cost paid to the supplier.
shipping_cost : float
    Shipping cost per order.
cpa : float
    Advertising cost per acquired order.
effectiveness_rate : float
    Percentage (0-100) of placed orders that are confirmed and delivered.
    Cash-on-delivery markets lose the supplier and shipping cost on the rest.

Formulas
--------
Total Cost            = supplier_cost + shipping_cost
Total Cost With CPA   = total_cost + cpa
Gross Margin(p)       = p - total_cost_with_cpa
Gross Margin %(p)     = gross_margin(p) / p * 100
Real Margin(p)        = gross_margin(p) * e / 100 - total_cost * (100 - e) / 100
Min Viable Price      = ceil(total_cost_with_cpa / (1 - floor) / step) * step

Verdict
-------
go     real margin at the competitor minimum price >= threshold
maybe  real margin at the competitor average price >= threshold
nogo   otherwise

The threshold, margin floor and rounding step come from the market profile.
"""

from __future__ import annotations

from decimal import ROUND_CEILING, Decimal

from competitor_intel.domain.analysis import AnalysisStats, MarginCalculation, MarginInputs, Verdict
from competitor_intel.errors import MarginInputError
from competitor_intel.markets.models import DEFAULT_MARKET_PROFILE, MarketProfile


class MarginCalculator:
    """
    Pure margin arithmetic. No I/O, no logging, no side effects.
    """

    def __init__(self, market: MarketProfile = DEFAULT_MARKET_PROFILE) -> None:
        self.market = market

    def calculate(self, stats: AnalysisStats, inputs: MarginInputs) -> MarginCalculation | None:
        """
        Return the margin calculation, or None while inputs or competitor prices are missing.
        """

        if not inputs.is_complete:
            return None
        if stats.price_min is None or stats.price_avg is None:
            return None
        if stats.price_min <= 0 or stats.price_avg <= 0:
            return None

        self.validate(inputs)
        supplier_cost = float(inputs.supplier_cost)  # type: ignore[arg-type]
        shipping_cost = float(inputs.shipping_cost)  # type: ignore[arg-type]
        cpa = float(inputs.cpa)  # type: ignore[arg-type]
        effectiveness = float(inputs.effectiveness_rate)  # type: ignore[arg-type]

        total_cost = supplier_cost + shipping_cost
        total_cost_with_cpa = total_cost + cpa

        margin_at_min = _gross_margin(stats.price_min, total_cost_with_cpa)
        margin_at_avg = _gross_margin(stats.price_avg, total_cost_with_cpa)
        real_margin_at_min = _real_margin(margin_at_min, total_cost, effectiveness)
        real_margin_at_avg = _real_margin(margin_at_avg, total_cost, effectiveness)
        min_viable_price = self.min_viable_price(total_cost_with_cpa)

        verdict, reason = self._verdict(
            stats=stats,
            real_margin_at_min=real_margin_at_min,
            real_margin_at_avg=real_margin_at_avg,
            min_viable_price=min_viable_price,
        )

        return MarginCalculation(
            total_cost=round(total_cost, 2),
            total_cost_with_cpa=round(total_cost_with_cpa, 2),
            margin_at_min=round(margin_at_min, 2),
            margin_at_min_percent=_percent(margin_at_min, stats.price_min),
            margin_at_avg=round(margin_at_avg, 2),
            margin_at_avg_percent=_percent(margin_at_avg, stats.price_avg),
            real_margin_at_min=round(real_margin_at_min, 2),
            real_margin_at_avg=round(real_margin_at_avg, 2),
            min_viable_price=min_viable_price,
            verdict=verdict,
            verdict_reason=reason,
            inputs=inputs,
        )

    def min_viable_price(self, total_cost_with_cpa: float) -> int:
        """
        Smallest price keeping the market margin floor, rounded up to the step.
        """

        floor = Decimal(str(self.market.target_margin_floor))
        step = Decimal(self.market.price_rounding_step)
        required = Decimal(str(total_cost_with_cpa)) / (Decimal(1) - floor)
        steps = (required / step).to_integral_value(rounding=ROUND_CEILING)
        return int(steps * step)

    @staticmethod
    def validate(inputs: MarginInputs) -> None:
        for name in ("supplier_cost", "shipping_cost", "cpa"):
            value = getattr(inputs, name)
            if value is not None and value < 0:
                raise MarginInputError(f"{name} must be >= 0, got {value}.")
        rate = inputs.effectiveness_rate
        if rate is not None and not 0 <= rate <= 100:
            raise MarginInputError(f"effectiveness_rate must be between 0 and 100, got {rate}.")

    def _verdict(
        self,
        *,
        stats: AnalysisStats,
        real_margin_at_min: float,
        real_margin_at_avg: float,
        min_viable_price: int,
    ) -> tuple[Verdict, str]:
        market = self.market
        threshold = market.margin_threshold
        if real_margin_at_min >= threshold:
            return "go", (
                f"Real margin at the lowest competitor price ({market.format_price(stats.price_min)}) "
                f"is {market.format_price(real_margin_at_min)}, at or above the "
                f"{market.format_price(threshold)} threshold."
            )
        if real_margin_at_avg >= threshold:
            return "maybe", (
                f"Real margin only clears {market.format_price(threshold)} at the average competitor "
                f"price ({market.format_price(stats.price_avg)}): "
                f"{market.format_price(real_margin_at_avg)}. At the lowest price it drops to "
                f"{market.format_price(real_margin_at_min)}."
            )
        return "nogo", (
            f"Real margin stays below {market.format_price(threshold)} even at the average "
            f"competitor price ({market.format_price(stats.price_avg)}): "
            f"{market.format_price(real_margin_at_avg)}. "
            f"Minimum viable price is {market.format_price(min_viable_price)}."
        )


def _gross_margin(price: float, total_cost_with_cpa: float) -> float:
    return price - total_cost_with_cpa


def _real_margin(gross_margin: float, total_cost: float, effectiveness: float) -> float:
    return gross_margin * (effectiveness / 100) - total_cost * ((100 - effectiveness) / 100)


def _percent(margin: float, price: float) -> float:
    return round(margin / price * 100, 2)

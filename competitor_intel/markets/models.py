"""
Per-market configuration models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MarketProfile:
    """
    Region-specific constants for price parsing and the margin verdict.

    Amounts are units of the market currency. Markets with `price_decimals`
    quote cents (`$39.99`); the others quote whole units only (`$89.900`).
    """

    code: str
    name: str
    currency: str
    currency_symbol: str = "$"
    thousands_separator: str = "."
    decimal_separator: str = ","
    price_decimals: int = 0
    price_min: float = 15_000
    price_max: float = 500_000
    outlier_ratio: float = 0.6
    margin_threshold: float = 15_000
    target_margin_floor: float = 0.20
    price_rounding_step: int = 100

    def in_price_window(self, value: float) -> bool:
        return self.price_min <= value <= self.price_max

    def format_price(self, value: float) -> str:
        if self.price_decimals > 0:
            rounded = round(value, self.price_decimals)
            raw = f"{abs(rounded):,.{self.price_decimals}f}"
            grouped = (
                raw.replace(",", "\0")
                .replace(".", self.decimal_separator)
                .replace("\0", self.thousands_separator)
            )
        else:
            rounded = int(round(value))
            grouped = f"{abs(rounded):,}".replace(",", self.thousands_separator)
        sign = "-" if rounded < 0 else ""
        return f"{sign}{self.currency_symbol}{grouped}"


DEFAULT_MARKET_PROFILE = MarketProfile(code="CO", name="Colombia", currency="COP")

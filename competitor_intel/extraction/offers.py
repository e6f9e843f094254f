"""
Price heuristics for unstructured landing-page content.

The text path strips savings/previous-price phrases, scans currency-formatted
numbers, keeps those inside the market price window and suppresses a residual
low outlier. The structured path turns rendered price/variant regions into
labelled offers and never applies the outlier rule.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from competitor_intel.domain.analysis import PriceOffer
from competitor_intel.markets.models import DEFAULT_MARKET_PROFILE, MarketProfile

# Whole-unit amounts (COP, CLP, ...): grouped thousands or 4-7 bare digits.
_WHOLE_AMOUNT = r"\d{1,3}(?:[.,]\d{3})+|\d{4,7}"
# Any amount a savings phrase may quote, cents included.
_AMOUNT = rf"(?:{_WHOLE_AMOUNT})(?:[.,]\d{{2}}(?!\d))?|\d{{1,3}}[.,]\d{{2}}(?!\d)"
# Amount as quoted by a savings or previous-price phrase, currency symbol included.
_QUOTED = rf"(?:\$|S/|€|₲|Q)?\s*(?:{_AMOUNT})\s*€?"

SAVINGS_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"(?:you\s+)?save[sd]?\s*(?:of\s*)?{_QUOTED}", re.IGNORECASE),
    re.compile(rf"(?:te\s*)?ahorr[ao]s?\s*(?:de\s*)?{_QUOTED}", re.IGNORECASE),
    re.compile(rf"descuento\s*(?:de\s*)?{_QUOTED}", re.IGNORECASE),
    re.compile(rf"discount\s*(?:of\s*)?{_QUOTED}", re.IGNORECASE),
    re.compile(r"\d+\s*%\s*(?:off|dto|descuento)", re.IGNORECASE),
)

PREVIOUS_PRICE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"\b(?:antes|before|was)\s*:?\s*{_QUOTED}", re.IGNORECASE),
    re.compile(rf"precio\s*anterior\s*:?\s*{_QUOTED}", re.IGNORECASE),
    re.compile(rf"(?:regular|previous|original)\s*price\s*:?\s*{_QUOTED}", re.IGNORECASE),
)

_QUANTITY_LABEL = re.compile(
    r"(?:lleva\s*|compra\s*|buy\s*)?\d+\s*(?:x\s*\d+|unidad(?:es)?|units?|frascos?|pares|pairs?|packs?)",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class PriceCandidate:
    value: float
    formatted: str


@dataclass(frozen=True)
class PriceExtraction:
    price: float | None
    price_formatted: str | None


class OfferExtractor:
    """
    Market-aware price extraction. Same input always yields the same output.
    """

    def __init__(self, market: MarketProfile = DEFAULT_MARKET_PROFILE) -> None:
        self.market = market
        symbols = {re.escape("$"), re.escape(market.currency_symbol)}
        symbol_group = "|".join(sorted(symbols))
        currency = re.escape(market.currency)
        suffixes = [rf"{currency}\b", r"pesos\b"]
        if market.currency_symbol != "$" and not market.currency_symbol.isalpha():
            suffixes.append(re.escape(market.currency_symbol))
        amount = _market_amount(market)
        self._price_patterns: tuple[re.Pattern[str], ...] = (
            re.compile(rf"(?:{symbol_group})\s*({amount})"),
            re.compile(rf"{currency}\s*({amount})", re.IGNORECASE),
            re.compile(rf"({amount})\s*(?:{'|'.join(suffixes)})", re.IGNORECASE),
        )

    def extract(self, text: str | None) -> PriceExtraction:
        """
        Return the representative price of `text`, or all-None when nothing qualifies.
        """

        if not text:
            return PriceExtraction(price=None, price_formatted=None)

        candidates = self.price_candidates(self.strip_discounts(text))
        if not candidates:
            return PriceExtraction(price=None, price_formatted=None)

        chosen = candidates[0]
        if len(candidates) >= 2:
            runner_up = candidates[1]
            # Lowest far below the next one is leftover savings noise.
            if chosen.value < runner_up.value * self.market.outlier_ratio:
                chosen = runner_up
        return PriceExtraction(price=chosen.value, price_formatted=chosen.formatted.strip())

    def price_candidates(self, text: str) -> list[PriceCandidate]:
        """
        Every in-window price match in `text`, ascending by value.

        Repeats are kept: a price shown twice outweighs a lone lower figure.
        """

        found: list[PriceCandidate] = []
        for pattern in self._price_patterns:
            for match in pattern.finditer(text):
                value = _parse_amount(match.group(1), self.market)
                if value is None or not self.market.in_price_window(value):
                    continue
                found.append(PriceCandidate(value=value, formatted=match.group(0)))
        return sorted(found, key=lambda candidate: candidate.value)

    @staticmethod
    def strip_discounts(text: str) -> str:
        cleaned = strip_savings(text)
        for pattern in PREVIOUS_PRICE_PATTERNS:
            cleaned = pattern.sub(" ", cleaned)
        return cleaned

    def structured_offers(self, fragments: Iterable[str]) -> list[PriceOffer]:
        """
        Build labelled offers from rendered price/variant regions.

        Each fragment with at least one in-window price becomes one offer: the
        lowest price is the offer price, the highest (if different) the original.
        """

        offers: list[PriceOffer] = []
        seen: set[tuple[str, float]] = set()
        for fragment in fragments:
            if not fragment or not fragment.strip():
                continue
            candidates = self.price_candidates(strip_savings(fragment))
            if not candidates:
                continue

            price = candidates[0].value
            original = candidates[-1].value if candidates[-1].value > price else None
            label = self._offer_label(fragment, index=len(offers) + 1)
            key = (label.lower(), price)
            if key in seen:
                continue
            seen.add(key)
            offers.append(PriceOffer(label=label, price=price, original_price=original))
        return offers

    def _offer_label(self, fragment: str, *, index: int) -> str:
        quantity = _QUANTITY_LABEL.search(fragment)
        if quantity is not None:
            return re.sub(r"\s+", " ", quantity.group(0)).strip()

        remainder = fragment
        for pattern in (*self._price_patterns, *PREVIOUS_PRICE_PATTERNS):
            remainder = pattern.sub(" ", remainder)
        remainder = re.sub(r"\s+", " ", remainder).strip(" -:|")
        if 2 <= len(remainder) <= 60:
            return remainder
        return f"Offer {index}"


def strip_savings(text: str) -> str:
    cleaned = text
    for pattern in SAVINGS_PATTERNS:
        cleaned = pattern.sub(" ", cleaned)
    return cleaned


def _market_amount(market: MarketProfile) -> str:
    """
    Amount regex for prices quoted in `market`.

    Whole-unit markets accept either separator for thousands. Cent markets
    anchor on their own separators and allow short amounts like `39.99`.
    """

    if market.price_decimals <= 0:
        return _WHOLE_AMOUNT
    thousands = re.escape(market.thousands_separator)
    decimal = re.escape(market.decimal_separator)
    return (
        rf"(?:\d{{1,3}}(?:{thousands}\d{{3}})+|\d{{1,7}})"
        rf"(?:{decimal}\d{{{market.price_decimals}}}(?!\d))?"
    )


def _parse_amount(raw: str, market: MarketProfile = DEFAULT_MARKET_PROFILE) -> float | None:
    whole, cents = raw, ""
    if market.price_decimals > 0:
        head, separator, tail = raw.rpartition(market.decimal_separator)
        if separator and len(tail) == market.price_decimals and tail.isdigit():
            whole, cents = head, tail

    digits = re.sub(r"[.,]", "", whole)
    if not digits.isdigit():
        return None
    if cents.strip("0"):
        return float(f"{int(digits)}.{cents}")
    return int(digits)

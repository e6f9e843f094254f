"""
competitor_intel/domain/analysis.py

Domain models produced by deep analysis and the margin calculator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

ExtractionSource = Literal["renderer", "text-extractor"]
Verdict = Literal["go", "maybe", "nogo"]


@dataclass(frozen=True)
class PriceOffer:
    """
    One labelled offer tier found on a landing page.
    """

    label: str
    price: float
    original_price: float | None = None


@dataclass(frozen=True)
class CompetitorFindings:
    """
    Fields extracted from one landing page by a content source.
    """

    source: ExtractionSource
    price: float | None = None
    price_formatted: str | None = None
    offers: tuple[PriceOffer, ...] = ()
    has_combo: bool = False
    combo: str | None = None
    gift: str | None = None
    angle: str | None = None
    headline: str | None = None
    cta: str | None = None


@dataclass(frozen=True)
class AnalyzedCompetitor:
    """
    Deep-analysis result for one selected ad. Either populated or carrying `error`.
    """

    id: str
    advertiser_name: str
    landing_url: str
    ad_library_url: str = ""
    ad_text: str = ""
    cta_text: str = ""
    price: float | None = None
    price_formatted: str | None = None
    offers: tuple[PriceOffer, ...] = ()
    has_combo: bool = False
    combo: str | None = None
    gift: str | None = None
    angle: str | None = None
    headline: str | None = None
    cta: str | None = None
    source: ExtractionSource | None = None
    error: str | None = None


@dataclass(frozen=True)
class AnalysisStats:
    """
    Summary statistics over one analysis run.
    """

    total: int
    analyzed: int
    with_price: int
    with_gift: int
    with_combo: int
    price_min: float | None = None
    price_max: float | None = None
    price_avg: float | None = None


@dataclass(frozen=True)
class AnalysisResult:
    """
    Competitors and their statistics for one analysis run.
    """

    competitors: list[AnalyzedCompetitor]
    stats: AnalysisStats


@dataclass(frozen=True)
class MarginInputs:
    """
    User-supplied unit economics. Any field may still be missing.
    """

    supplier_cost: float | None = None
    shipping_cost: float | None = None
    cpa: float | None = None
    effectiveness_rate: float | None = None

    @property
    def is_complete(self) -> bool:
        return None not in (
            self.supplier_cost,
            self.shipping_cost,
            self.cpa,
            self.effectiveness_rate,
        )


@dataclass(frozen=True)
class MarginCalculation:
    """
    Margin figures at competitor prices and the resulting verdict.
    """

    total_cost: float
    total_cost_with_cpa: float
    margin_at_min: float
    margin_at_min_percent: float
    margin_at_avg: float
    margin_at_avg_percent: float
    real_margin_at_min: float
    real_margin_at_avg: float
    min_viable_price: int
    verdict: Verdict
    verdict_reason: str
    inputs: MarginInputs = field(default_factory=MarginInputs)

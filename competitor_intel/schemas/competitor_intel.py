"""
competitor_intel/schemas/competitor_intel.py

Request and response schemas for competitor search, analysis and margin endpoints.
Field names travel as camelCase on the wire.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class CompetitorSearchRequest(CamelModel):
    keyword: str
    country: str | None = Field(default=None, description="ISO country code, defaults to the default market")


class AdCandidateResponse(CamelModel):
    id: str
    advertiser_name: str
    landing_url: str
    ad_text: str
    cta_text: str
    ad_library_url: str
    dropshipping_score: int = Field(..., ge=0)
    image_url: str | None = None
    domain: str


class CompetitorSearchResponse(CamelModel):
    keyword: str
    country: str
    total_found: int = Field(..., ge=0)
    filtered_count: int = Field(..., ge=0)
    ads: list[AdCandidateResponse] = Field(default_factory=list)


class SelectedAdRequest(CamelModel):
    id: str = Field(..., min_length=1)
    advertiser_name: str
    landing_url: str = Field(..., min_length=1)
    ad_text: str | None = None
    cta_text: str | None = None
    ad_library_url: str | None = None


class CompetitorAnalyzeRequest(CamelModel):
    """
    Selection size is checked by the service so that it fails with 400.
    """

    ads: list[SelectedAdRequest] = Field(default_factory=list)
    country: str | None = None


class PriceOfferResponse(CamelModel):
    label: str
    price: int | float
    original_price: int | float | None = None


class AnalyzedCompetitorResponse(CamelModel):
    id: str
    advertiser_name: str
    landing_url: str
    ad_library_url: str = ""
    ad_text: str = ""
    cta_text: str = ""
    price: int | float | None = None
    price_formatted: str | None = None
    offers: list[PriceOfferResponse] = Field(default_factory=list)
    has_combo: bool = False
    combo: str | None = None
    gift: str | None = None
    angle: str | None = None
    headline: str | None = None
    cta: str | None = None
    source: Literal["renderer", "text-extractor"] | None = None
    error: str | None = None


class AnalysisStatsPayload(CamelModel):
    total: int = Field(..., ge=0)
    analyzed: int = Field(..., ge=0)
    with_price: int = Field(..., ge=0)
    with_gift: int = Field(..., ge=0)
    with_combo: int = Field(..., ge=0)
    price_min: int | float | None = None
    price_max: int | float | None = None
    price_avg: int | float | None = None


class CompetitorAnalyzeResponse(CamelModel):
    competitors: list[AnalyzedCompetitorResponse] = Field(default_factory=list)
    stats: AnalysisStatsPayload


class MarginCalculationRequest(CamelModel):
    stats: AnalysisStatsPayload
    supplier_cost: float | None = None
    shipping_cost: float | None = None
    cpa: float | None = None
    effectiveness_rate: float | None = None
    country: str | None = None


class MarginCalculationPayload(CamelModel):
    total_cost: float
    total_cost_with_cpa: float
    margin_at_min: float
    margin_at_min_percent: float
    margin_at_avg: float
    margin_at_avg_percent: float
    real_margin_at_min: float
    real_margin_at_avg: float
    min_viable_price: int
    verdict: Literal["go", "maybe", "nogo"]
    verdict_reason: str


class MarginCalculationResponse(CamelModel):
    calculation: MarginCalculationPayload | None = None

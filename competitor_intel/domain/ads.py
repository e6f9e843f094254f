"""
competitor_intel/domain/ads.py

Domain models for ad discovery and candidate selection.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RawAdCandidate:
    """
    One running ad as returned by the ad-library search collaborator.
    """

    id: str
    advertiser_name: str
    landing_url: str
    ad_text: str
    cta_text: str
    ad_library_url: str
    thumbnail_url: str | None
    domain: str


@dataclass(frozen=True)
class ScoredAdCandidate:
    """
    Raw candidate paired with its dropshipping relevance score.
    """

    candidate: RawAdCandidate
    score: int

    def __post_init__(self) -> None:
        if self.score < 0:
            raise ValueError(f"Relevance score must be >= 0, got {self.score}.")

    @property
    def domain(self) -> str:
        return self.candidate.domain


@dataclass(frozen=True)
class SelectedAd:
    """
    Candidate chosen by the user for deep landing-page analysis.
    """

    id: str
    advertiser_name: str
    landing_url: str
    ad_text: str = ""
    cta_text: str = ""
    ad_library_url: str = ""


@dataclass(frozen=True)
class DiscoveryResult:
    """
    Outcome of one keyword/country discovery run.
    """

    keyword: str
    country: str
    total_found: int
    filtered_count: int
    ads: list[ScoredAdCandidate] = field(default_factory=list)

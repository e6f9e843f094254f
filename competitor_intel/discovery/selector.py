"""
One-per-domain selection of scored candidates.
"""

from __future__ import annotations

from collections.abc import Iterable

from competitor_intel.domain.ads import ScoredAdCandidate

DEFAULT_MAX_RESULTS = 15


def deduplicate_and_select(
    candidates: Iterable[ScoredAdCandidate],
    *,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> list[ScoredAdCandidate]:
    """
    Keep the highest-scoring candidate per domain, best first, capped at `max_results`.

    The sort is stable, so equal scores keep the collaborator's original order.
    Candidates without a resolvable domain are dropped.
    """

    ranked = sorted(candidates, key=lambda item: item.score, reverse=True)
    seen_domains: set[str] = set()
    selected: list[ScoredAdCandidate] = []
    for item in ranked:
        if not item.domain or item.domain in seen_domains:
            continue
        seen_domains.add(item.domain)
        selected.append(item)
        if len(selected) >= max_results:
            break
    return selected

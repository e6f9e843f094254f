"""
Dropshipping relevance scoring for ad candidates.

Score components
----------------
+1  per dropshipping keyword found in ``ad_text + cta_text + landing_url``
+3  CTA uses direct purchase language (comprar / shop / buy)
+2  otherwise, CTA mentions an offer or order (oferta / offer / pedido / order)
+2  landing domain is owned by the advertiser (not in the exclusion set)
+1  domain itself looks like a store (shop / tienda / store)
"""

from __future__ import annotations

from competitor_intel.discovery.filters import is_excluded_domain, resolve_domain
from competitor_intel.domain.ads import RawAdCandidate, ScoredAdCandidate

DROPSHIPPING_KEYWORDS: tuple[str, ...] = (
    "envío gratis",
    "envio gratis",
    "free shipping",
    "pago contra entrega",
    "pago contraentrega",
    "contraentrega",
    "paga en casa",
    "paga cuando recibas",
    "paga al recibir",
    "pago contra reembolso",
    "contrareembolso",
    "cod",
    "cash on delivery",
    "oferta especial",
    "oferta limitada",
    "oferta exclusiva",
    "últimas unidades",
    "ultimas unidades",
    "pocas unidades",
    "limited stock",
    "compra ahora",
    "pídelo ahora",
    "pidelo ahora",
    "garantía de satisfacción",
    "garantia de satisfaccion",
    "devolución gratis",
    "devolucion gratis",
    "50%",
    "60%",
    "70%",
    "descuento",
    "discount",
    "precio especial",
    "promoción",
    "promocion",
    "sin riesgo",
    "prueba gratis",
)

PURCHASE_CTA_TERMS: tuple[str, ...] = ("comprar", "shop", "buy")
OFFER_CTA_TERMS: tuple[str, ...] = ("oferta", "offer", "pedido", "order")
STORE_DOMAIN_TERMS: tuple[str, ...] = ("shop", "tienda", "store")


class RelevanceScorer:
    """
    Deterministic keyword/CTA/domain scorer.
    """

    def __init__(self, keywords: tuple[str, ...] = DROPSHIPPING_KEYWORDS) -> None:
        self._keywords = tuple(keyword.lower() for keyword in keywords)

    def score(self, ad_text: str, cta_text: str, landing_url: str) -> int:
        haystack = f"{ad_text or ''} {cta_text or ''} {landing_url or ''}".lower()
        score = sum(1 for keyword in self._keywords if keyword in haystack)

        cta = (cta_text or "").lower()
        if any(term in cta for term in PURCHASE_CTA_TERMS):
            score += 3
        elif any(term in cta for term in OFFER_CTA_TERMS):
            score += 2

        domain = resolve_domain(landing_url or "")
        if domain:
            if not is_excluded_domain(domain):
                score += 2
            if any(term in domain for term in STORE_DOMAIN_TERMS):
                score += 1

        return score

    def score_candidate(self, candidate: RawAdCandidate) -> ScoredAdCandidate:
        return ScoredAdCandidate(
            candidate=candidate,
            score=self.score(candidate.ad_text, candidate.cta_text, candidate.landing_url),
        )

"""
Regex heuristics for gift, bundle, CTA, sales-angle and headline signals.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

GIFT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"env[ií]o\s*gratis", re.IGNORECASE),
    re.compile(r"free\s*shipping", re.IGNORECASE),
    re.compile(r"regalo\s*(?:sorpresa|incluido|gratis)", re.IGNORECASE),
    re.compile(r"(?:free|bonus)\s*gift", re.IGNORECASE),
    re.compile(r"garant[ií]a\s*(?:de\s*)?\d+\s*(?:d[ií]as|meses|a[ñn]os)", re.IGNORECASE),
    re.compile(r"\d+[\s-]*(?:days?|months?|years?)\s*(?:of\s*)?(?:warranty|guarantee)", re.IGNORECASE),
    re.compile(r"devoluci[oó]n\s*gratis", re.IGNORECASE),
    re.compile(r"free\s*returns?", re.IGNORECASE),
    re.compile(r"incluye\s+[^.\n]{5,50}", re.IGNORECASE),
    re.compile(r"gratis\s+[^.\n]{5,30}", re.IGNORECASE),
)
MAX_GIFTS = 2

COMBO_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b\d+\s*x\s*\d+\b", re.IGNORECASE),
    re.compile(r"kit\s*(?:de\s*|of\s*)?\d+", re.IGNORECASE),
    re.compile(r"pack\s*(?:de\s*|of\s*)?\d+", re.IGNORECASE),
    re.compile(r"combo\s*(?:de\s*|of\s*)?\d+", re.IGNORECASE),
    re.compile(r"paquete\s*(?:familiar|completo)", re.IGNORECASE),
    re.compile(r"\b\d+\s*(?:unidades|units)\b", re.IGNORECASE),
    re.compile(r"oferta\s*(?:especial|limitada)", re.IGNORECASE),
    re.compile(r"\d+%\s*(?:off|descuento|dto)", re.IGNORECASE),
)

CTA_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"comprar?\s*ahora", re.IGNORECASE),
    re.compile(r"buy\s*now", re.IGNORECASE),
    re.compile(r"agregar\s*al\s*carrito", re.IGNORECASE),
    re.compile(r"add\s*to\s*cart", re.IGNORECASE),
    re.compile(r"hacer\s*pedido", re.IGNORECASE),
    re.compile(r"realizar\s*pedido", re.IGNORECASE),
    re.compile(r"obtener\s*oferta", re.IGNORECASE),
    re.compile(r"pedir\s*ahora", re.IGNORECASE),
    re.compile(r"order\s*now", re.IGNORECASE),
    re.compile(r"lo\s*quiero", re.IGNORECASE),
    re.compile(r"ordenar", re.IGNORECASE),
)

# Priority order: first matching angle wins.
ANGLE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("Authenticity", re.compile(r"original|aut[eé]ntic|authentic|genuine", re.IGNORECASE)),
    ("Warranty", re.compile(r"garant[ií]a|devoluc|warranty|guarantee|money[\s-]*back", re.IGNORECASE)),
    ("Free shipping", re.compile(r"env[ií]o\s*gratis|free\s*ship", re.IGNORECASE)),
    ("Price/Offer", re.compile(r"oferta|descuento|promo|offer|discount|\bsale\b", re.IGNORECASE)),
    ("Quality", re.compile(r"calidad|premium|mejor|quality|\bbest\b", re.IGNORECASE)),
    ("Speed", re.compile(r"r[aá]pido|inmediato|\bhoy\b|\bfast\b|same[\s-]*day|\btoday\b", re.IGNORECASE)),
    ("Results", re.compile(r"resultados|funciona|efectivo|results|effective", re.IGNORECASE)),
)

HEADLINE_MIN_CHARS = 10
HEADLINE_MAX_CHARS = 150
HEADLINE_TRUNCATE = 100


@dataclass(frozen=True)
class ContentSignals:
    gift: str | None = None
    combo: str | None = None
    cta: str | None = None
    angle: str | None = None
    headline: str | None = None


class ContentClassifier:
    """
    Independent, ordered regex families over landing-page text.
    """

    def classify(self, content: str | None) -> ContentSignals:
        if not content:
            return ContentSignals()
        return ContentSignals(
            gift=self.detect_gift(content),
            combo=_first_match(COMBO_PATTERNS, content),
            cta=_first_match(CTA_PATTERNS, content),
            angle=self.detect_angle(content),
            headline=self.detect_headline(content),
        )

    @staticmethod
    def detect_gift(content: str) -> str | None:
        gifts: list[str] = []
        for pattern in GIFT_PATTERNS:
            match = pattern.search(content)
            if match is not None:
                gifts.append(match.group(0).strip())
            if len(gifts) >= MAX_GIFTS:
                break
        return ", ".join(gifts) if gifts else None

    @staticmethod
    def detect_angle(content: str) -> str | None:
        for angle, pattern in ANGLE_PATTERNS:
            if pattern.search(content):
                return angle
        return None

    @staticmethod
    def detect_headline(content: str) -> str | None:
        for line in content.splitlines():
            stripped = line.strip()
            if HEADLINE_MIN_CHARS < len(stripped) < HEADLINE_MAX_CHARS:
                return stripped[:HEADLINE_TRUNCATE]
        return None


def _first_match(patterns: tuple[re.Pattern[str], ...], content: str) -> str | None:
    for pattern in patterns:
        match = pattern.search(content)
        if match is not None:
            return match.group(0).strip()
    return None

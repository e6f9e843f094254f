"""
E-commerce intent filter for raw ad candidates.
"""

from __future__ import annotations

from urllib.parse import urlparse

from competitor_intel.domain.ads import RawAdCandidate

# Social networks, messaging, URL shorteners and app stores.
EXCLUDED_DOMAINS: tuple[str, ...] = (
    "facebook.com",
    "fb.com",
    "fb.me",
    "instagram.com",
    "tiktok.com",
    "youtube.com",
    "youtu.be",
    "twitter.com",
    "x.com",
    "linkedin.com",
    "wa.me",
    "whatsapp.com",
    "bit.ly",
    "t.co",
    "goo.gl",
    "t.me",
    "telegram.me",
    "play.google.com",
    "apps.apple.com",
)

COMMERCE_CTAS: tuple[str, ...] = (
    "shop_now",
    "shop now",
    "comprar",
    "comprar ahora",
    "get_offer",
    "get offer",
    "obtener oferta",
    "order_now",
    "order now",
    "realizar pedido",
    "pedir ahora",
    "hacer pedido",
    "learn_more",
    "learn more",
    "más información",
    "mas informacion",
    "ver más",
    "ver mas",
    "buy_now",
    "buy now",
    "compra ahora",
    "see_more",
    "see more",
    "ver oferta",
)

EXCLUDED_CTAS: tuple[str, ...] = (
    "download",
    "descargar",
    "instalar",
    "install",
    "sign_up",
    "sign up",
    "registrarse",
    "registrate",
    "book_now",
    "book now",
    "reservar",
    "agendar",
    "contact_us",
    "contact us",
    "contactar",
    "contactanos",
    "call_now",
    "call now",
    "llamar",
    "send_message",
    "send message",
    "enviar mensaje",
    "watch_more",
    "watch more",
    "ver video",
    "listen_now",
    "listen now",
    "escuchar",
    "play_game",
    "play game",
    "jugar",
    "apply_now",
    "apply now",
    "aplicar",
    "postular",
)


def resolve_domain(url: str) -> str:
    """
    Return the lower-cased hostname of `url` without a leading `www.`.
    """

    try:
        hostname = urlparse(url.strip()).hostname or ""
    except ValueError:
        return ""
    hostname = hostname.lower()
    if hostname.startswith("www."):
        hostname = hostname[4:]
    return hostname


def is_excluded_domain(domain: str) -> bool:
    normalized = domain.strip().lower()
    if not normalized:
        return True
    return any(
        normalized == excluded or normalized.endswith(f".{excluded}")
        for excluded in EXCLUDED_DOMAINS
    )


def is_commerce_cta(cta_text: str | None) -> bool:
    """
    Return False for non-commerce CTAs unless they also carry shop/buy/order phrasing.

    Ads without CTA text are never filtered.
    """

    if not cta_text or not cta_text.strip():
        return True

    cta = cta_text.strip().lower()
    if any(phrase in cta for phrase in COMMERCE_CTAS):
        return True
    return not any(phrase in cta for phrase in EXCLUDED_CTAS)


class EcommerceFilter:
    """
    Drops candidates whose domain or CTA signals non-commerce intent.
    """

    def accepts(self, candidate: RawAdCandidate) -> bool:
        domain = candidate.domain or resolve_domain(candidate.landing_url)
        if is_excluded_domain(domain):
            return False
        return is_commerce_cta(candidate.cta_text)

    def apply(self, candidates: list[RawAdCandidate]) -> list[RawAdCandidate]:
        return [candidate for candidate in candidates if self.accepts(candidate)]

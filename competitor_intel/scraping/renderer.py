"""
Interactive headless-rendering content source (Browserless `/function`).
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from competitor_intel.config import RendererSettings
from competitor_intel.domain.analysis import CompetitorFindings
from competitor_intel.errors import ExtractionError
from competitor_intel.extraction.classifier import HEADLINE_TRUNCATE, ContentClassifier
from competitor_intel.extraction.markup import html_to_text, page_title
from competitor_intel.extraction.offers import OfferExtractor
from competitor_intel.scraping.base import ContentSource, PageContent

logger = logging.getLogger(__name__)

PRICE_REGIONS = ("price", "variant", "modal")

# Ordered region -> CSS selectors. Order matters: earlier regions are read first.
DEFAULT_REGION_SELECTORS: dict[str, list[str]] = {
    "price": [
        ".price",
        ".product-price",
        "[class*='price']",
        ".money",
    ],
    "variant": [
        "[class*='variant']",
        "[class*='bundle']",
        "[class*='quantity-break']",
        "[class*='offer']",
    ],
    "modal": [
        "[class*='modal'] [class*='price']",
        "[class*='popup'] [class*='price']",
        "[class*='drawer'] [class*='price']",
    ],
    "cta": [
        "[class*='add-to-cart']",
        "[class*='buy']",
        "button[type='submit']",
    ],
    "gift": [
        "[class*='gift']",
        "[class*='regalo']",
        "[class*='bonus']",
        "[class*='shipping']",
    ],
}

# Clicked before extraction to reveal prices hidden behind variants or modals.
DEFAULT_CLICK_SELECTORS: list[str] = [
    "[class*='variant'] label",
    "[class*='bundle'] label",
    "button[class*='open-modal']",
    "[class*='cod'] button",
]

RENDER_FUNCTION = """
module.exports = async ({ page, context }) => {
  const { url, waitUntil, timeoutMs, regions, clickSelectors } = context;
  await page.goto(url, { waitUntil, timeout: timeoutMs });
  for (const selector of clickSelectors) {
    const handles = await page.$$(selector);
    for (const handle of handles.slice(0, 5)) {
      try {
        await handle.click();
        await new Promise((resolve) => setTimeout(resolve, 300));
      } catch (err) {}
    }
  }
  const fragments = [];
  for (const { region, selector } of regions) {
    const texts = await page.$$eval(selector, (nodes) =>
      nodes.slice(0, 20).map((node) =>
        node.innerText || node.getAttribute('content') || node.getAttribute('data-price') || ''
      )
    );
    for (const text of texts) {
      if (text && text.trim()) fragments.push({ region, selector, text: text.trim() });
    }
  }
  const html = await page.content();
  return { data: { fragments, html }, type: 'application/json' };
};
"""

GIFT_FRAGMENT_MAX_CHARS = 80


class InteractiveRenderer(ContentSource):
    """
    Renders the landing page, clicks offer toggles and reads price regions.

    Usable only when at least one structured price offer is found.
    """

    source_tag = "renderer"

    def __init__(
        self,
        *,
        settings: RendererSettings,
        session: requests.Session | None = None,
        region_selectors: dict[str, list[str]] | None = None,
        click_selectors: list[str] | None = None,
    ) -> None:
        super().__init__(
            timeout_seconds=settings.timeout_seconds,
            delay_seconds=settings.delay_seconds,
            session=session,
        )
        self._settings = settings
        self._region_selectors = region_selectors or DEFAULT_REGION_SELECTORS
        self._click_selectors = DEFAULT_CLICK_SELECTORS if click_selectors is None else click_selectors

    def build_request(self, url: str) -> dict[str, Any]:
        regions = [
            {"region": region, "selector": selector}
            for region, selectors in self._region_selectors.items()
            for selector in selectors
        ]
        return {
            "code": RENDER_FUNCTION,
            "context": {
                "url": url,
                "waitUntil": self._settings.wait_until,
                "timeoutMs": int(self.timeout_seconds * 1000),
                "regions": regions,
                "clickSelectors": list(self._click_selectors),
            },
        }

    def fetch(self, url: str) -> PageContent | None:
        response = self._send(
            "POST",
            self._settings.function_url,
            params={"token": self._settings.api_key},
            json=self.build_request(url),
        )
        try:
            payload = response.json()
        except ValueError as exc:
            raise ExtractionError(self.source_tag, "renderer response was not valid JSON") from exc

        if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
            payload = payload["data"]
        if not isinstance(payload, dict):
            return None

        fragments: dict[str, list[str]] = {}
        for item in payload.get("fragments") or []:
            if not isinstance(item, dict):
                continue
            region = str(item.get("region") or "").strip().lower()
            text = str(item.get("text") or "").strip()
            if region and text:
                fragments.setdefault(region, []).append(text)

        html = payload.get("html") if isinstance(payload.get("html"), str) else None
        text = html_to_text(html)
        if not fragments and not text:
            return None
        return PageContent(url=url, text=text, fragments=fragments, html=html)

    def build_findings(
        self,
        content: PageContent,
        *,
        offer_extractor: OfferExtractor,
        classifier: ContentClassifier,
    ) -> CompetitorFindings | None:
        price_fragments = [
            fragment for region in PRICE_REGIONS for fragment in content.region(region)
        ]
        offers = offer_extractor.structured_offers(price_fragments)
        if not offers:
            logger.info("Renderer found no structured offers url=%s", content.url)
            return None

        signals = classifier.classify(
            "\n".join([content.text, *content.region("gift"), *content.region("cta")])
        )
        cheapest = min(offers, key=lambda offer: offer.price)
        gift_fragments = content.region("gift")
        cta_fragments = content.region("cta")
        combo = signals.combo
        if combo is None and len(offers) > 1:
            combo = ", ".join(offer.label for offer in offers[:3])

        return CompetitorFindings(
            source=self.source_tag,
            price=cheapest.price,
            price_formatted=offer_extractor.market.format_price(cheapest.price),
            offers=tuple(offers),
            has_combo=combo is not None,
            combo=combo,
            gift=gift_fragments[0][:GIFT_FRAGMENT_MAX_CHARS] if gift_fragments else signals.gift,
            angle=signals.angle,
            headline=(page_title(content.html) or "")[:HEADLINE_TRUNCATE] or signals.headline,
            cta=cta_fragments[0] if cta_fragments else signals.cta,
        )

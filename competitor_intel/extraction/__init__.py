"""
Heuristic extraction of prices and sales signals from page content.
"""

from competitor_intel.extraction.classifier import ContentClassifier, ContentSignals
from competitor_intel.extraction.markup import html_to_text, page_title
from competitor_intel.extraction.offers import OfferExtractor, PriceExtraction

__all__ = [
    "ContentClassifier",
    "ContentSignals",
    "OfferExtractor",
    "PriceExtraction",
    "html_to_text",
    "page_title",
]

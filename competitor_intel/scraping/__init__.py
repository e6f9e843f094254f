"""
Content sources for landing-page extraction.
"""

from competitor_intel.scraping.base import ContentSource, PageContent
from competitor_intel.scraping.pacing import SequentialPacer
from competitor_intel.scraping.renderer import InteractiveRenderer
from competitor_intel.scraping.text_extractor import PassiveTextExtractor

__all__ = [
    "ContentSource",
    "InteractiveRenderer",
    "PageContent",
    "PassiveTextExtractor",
    "SequentialPacer",
]

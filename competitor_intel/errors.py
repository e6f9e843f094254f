"""
Exceptions raised by the competitor intelligence pipeline.
"""

from __future__ import annotations


class CompetitorIntelError(Exception):
    """Base exception for pipeline failures."""


class SelectionValidationError(CompetitorIntelError):
    """Raised when a request is rejected before any external call is made."""


class DiscoveryError(CompetitorIntelError):
    """Raised when the ad-library search collaborator fails or times out."""


class ExtractionError(CompetitorIntelError):
    """
    Raised by a content source when one landing page cannot be fetched.

    Never escapes the analysis orchestrator; it becomes the item's `error`.
    """

    def __init__(self, source: str, message: str) -> None:
        super().__init__(message)
        self.source = source
        self.message = message


class MarginInputError(CompetitorIntelError):
    """Raised when cost inputs are negative or the effectiveness rate is out of range."""

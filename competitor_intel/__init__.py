"""
Competitor intelligence pipeline: ad discovery, landing-page analysis and margin verdicts.
"""

__version__ = "1.0.0"

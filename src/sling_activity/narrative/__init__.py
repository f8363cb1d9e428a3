"""
Headline text and ticker lookup for classified activity rows.
"""
from sling_activity.narrative.builder import NarrativeBuilder, build_narrative
from sling_activity.narrative.ticker import TickerResolver, extract_ticker

__all__ = [
    "NarrativeBuilder",
    "TickerResolver",
    "build_narrative",
    "extract_ticker",
]

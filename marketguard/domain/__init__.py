"""
Domain layer module.

Contains the models exchanged with the content filter and the listing matcher.
"""

from marketguard.domain.entities import (
    BusinessType,
    ContentFilterResult,
    ContentReport,
    Listing,
    MatchingOptions,
    PreferredType,
    ScoredListing,
    ScreeningResult,
    ViolationCategory,
)

__all__ = [
    "BusinessType",
    "ContentFilterResult",
    "ContentReport",
    "Listing",
    "MatchingOptions",
    "PreferredType",
    "ScoredListing",
    "ScreeningResult",
    "ViolationCategory",
]

"""
Listing matching module.

Scores and ranks business listings for a viewer and flags low-quality ones.
"""

from marketguard.matching.geo import haversine_km, haversine_km_many
from marketguard.matching.quality import detect_low_quality_signals
from marketguard.matching.scorer import (
    compute_match_score,
    compute_trust_score,
    default_options,
    rank_listings,
    score_listing,
)

__all__ = [
    "compute_match_score",
    "compute_trust_score",
    "default_options",
    "detect_low_quality_signals",
    "haversine_km",
    "haversine_km_many",
    "rank_listings",
    "score_listing",
]

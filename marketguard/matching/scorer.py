"""
Listing scoring and ranking.

Each listing gets a trust score (viewer independent) and a match score that
blends trust, distance, type fit and activity for one viewer. Every weight and
cap below is a named constant so it can be tuned and tested on its own.
"""

import logging
import math
from typing import Any, Iterable, Mapping, Optional, Union

from pydantic import ValidationError

from marketguard.config.settings import get_settings
from marketguard.domain.entities import (
    BusinessType,
    Listing,
    MatchingOptions,
    PreferredType,
    ScoredListing,
)
from marketguard.matching.geo import haversine_km, haversine_km_many

logger = logging.getLogger(__name__)


# ================================================================================
# Trust Score Weights
# ================================================================================

BASE_TRUST = 50.0
VERIFIED_BONUS = 15.0
REPUTATION_SCALE = 5.0
REPUTATION_MAX_POINTS = 20.0
REVIEWS_DIVISOR = 10.0
REVIEWS_MAX_POINTS = 10.0
ORDERS_DIVISOR = 20.0
ORDERS_MAX_POINTS = 5.0
MAX_TRUST = 100.0

# ================================================================================
# Match Score Weights
# ================================================================================

TRUST_WEIGHT = 0.4
DISTANCE_WEIGHT = 0.3
TYPE_WEIGHT = 0.2
ACTIVITY_WEIGHT = 0.1

FULL_SCORE = 100.0
DISTANCE_DECAY_PER_KM = 2.0
NEUTRAL_DISTANCE_SCORE = 50.0
TYPE_MISMATCH_SCORE = 30.0
INACTIVE_SCORE = 50.0


ListingLike = Union[Listing, Mapping[str, Any]]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def default_options() -> MatchingOptions:
    """Matching options built from settings, used when the caller passes none."""
    settings = get_settings().matching
    return MatchingOptions(
        preferred_type=settings.default_preferred_type,
        max_distance=settings.default_max_distance_km,
    )


def has_activity(listing: Listing) -> bool:
    """True if the listing has at least one review or completed order."""
    return (listing.total_reviews or 0) > 0 or (listing.total_completed_orders or 0) > 0


def compute_trust_score(listing: Listing) -> float:
    """
    Viewer-independent trust score in [50, 100], unrounded.

    Args:
        listing: Listing to score

    Returns:
        Base trust plus verification, reputation, review and order bonuses
    """
    trust = BASE_TRUST

    if listing.verified:
        trust += VERIFIED_BONUS

    if listing.reputation_score is not None:
        trust += min(listing.reputation_score / REPUTATION_SCALE * REPUTATION_MAX_POINTS, REPUTATION_MAX_POINTS)

    if listing.total_reviews:
        trust += min(listing.total_reviews / REVIEWS_DIVISOR, REVIEWS_MAX_POINTS)

    if listing.total_completed_orders:
        trust += min(listing.total_completed_orders / ORDERS_DIVISOR, ORDERS_MAX_POINTS)

    return min(trust, MAX_TRUST)


def distance_score(distance: Optional[float]) -> float:
    """Linear decay from 100 at 0 km to 0 at 50 km; neutral when unknown."""
    if distance is None:
        return NEUTRAL_DISTANCE_SCORE
    return max(0.0, FULL_SCORE - distance * DISTANCE_DECAY_PER_KM)


def type_score(business_type: Optional[BusinessType], preferred_type: PreferredType) -> float:
    """Full score for a type fit, a reduced score otherwise."""
    if preferred_type == PreferredType.ALL:
        return FULL_SCORE
    if business_type is not None and business_type.value in (preferred_type.value, BusinessType.BOTH.value):
        return FULL_SCORE
    return TYPE_MISMATCH_SCORE


def compute_match_score(
    listing: Listing,
    trust_score: float,
    distance: Optional[float],
    preferred_type: PreferredType = PreferredType.ALL,
) -> float:
    """
    Weighted blend of trust, distance, type fit and activity, unrounded.

    Args:
        listing: Listing being scored
        trust_score: Unrounded trust score of the listing
        distance: Viewer distance in km, None when unknown
        preferred_type: Type the viewer is looking for

    Returns:
        Match score in [0, 100]
    """
    activity = FULL_SCORE if has_activity(listing) else INACTIVE_SCORE

    return (
        trust_score * TRUST_WEIGHT
        + distance_score(distance) * DISTANCE_WEIGHT
        + type_score(listing.business_type, preferred_type) * TYPE_WEIGHT
        + activity * ACTIVITY_WEIGHT
    )


def _build_scored(listing: Listing, options: MatchingOptions, distance: Optional[float]) -> ScoredListing:
    trust = compute_trust_score(listing)
    match = compute_match_score(listing, trust, distance, options.preferred_type)

    data = listing.model_dump()
    data.update(
        match_score=_round_half_up(match),
        distance=distance,
        trust_score=_round_half_up(trust),
    )
    return ScoredListing.model_validate(data)


def score_listing(listing: Listing, options: Optional[MatchingOptions] = None) -> ScoredListing:
    """
    Score a single listing for a viewer.

    Args:
        listing: Listing to score
        options: Viewer options; settings defaults when omitted

    Returns:
        ScoredListing with match score, distance and trust score
    """
    options = options or default_options()

    distance = None
    viewer = options.viewer_location
    if viewer is not None and listing.location is not None:
        distance = haversine_km(viewer[0], viewer[1], listing.location[0], listing.location[1])

    return _build_scored(listing, options, distance)


def _coerce_listings(listings: Iterable[ListingLike]) -> list[Listing]:
    valid: list[Listing] = []
    for raw in listings:
        if isinstance(raw, Listing):
            valid.append(raw)
            continue
        try:
            valid.append(Listing.model_validate(raw))
        except ValidationError as e:
            logger.warning(
                "Skipping malformed listing id=%s: %s error(s)",
                raw.get("id") if isinstance(raw, Mapping) else None,
                e.error_count(),
            )
    return valid


def rank_listings(
    listings: Iterable[ListingLike],
    options: Optional[MatchingOptions] = None,
) -> list[ScoredListing]:
    """
    Score listings for a viewer and sort them best first.

    Mappings that fail validation are skipped with a warning. Listings farther
    than `max_distance` are dropped only when the viewer location is known;
    listings with unknown distance are always kept. Equal scores keep their
    input order.

    Args:
        listings: Listing models or raw mappings from storage
        options: Viewer options; settings defaults when omitted

    Returns:
        Scored listings sorted by match score, descending
    """
    options = options or default_options()
    # Materialize once to count inputs and allow generators.
    raw_listings = list(listings)
    valid = _coerce_listings(raw_listings)

    viewer = options.viewer_location
    if viewer is not None:
        distances = haversine_km_many(viewer, [listing.location for listing in valid])
    else:
        distances = [None] * len(valid)

    scored = [_build_scored(listing, options, dist) for listing, dist in zip(valid, distances)]

    if options.max_distance is not None and viewer is not None:
        scored = [s for s in scored if s.distance is None or s.distance <= options.max_distance]

    # list.sort is stable, also with reverse=True
    scored.sort(key=lambda s: s.match_score, reverse=True)

    logger.debug(
        "Ranked listings: received=%s, valid=%s, returned=%s",
        len(raw_listings),
        len(valid),
        len(scored),
    )

    return scored

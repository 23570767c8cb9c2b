"""Warning badges for listings that look risky to buy from."""

from typing import Any, Mapping, Union

from marketguard.domain.entities import Listing

LOW_RATING = "Low rating"
NOT_VERIFIED = "Not verified"
NEW_BUSINESS = "New business"
MIXED_REVIEWS = "Mixed reviews"

LOW_RATING_THRESHOLD = 2.5
MIXED_REVIEWS_THRESHOLD = 3.0


def detect_low_quality_signals(listing: Union[Listing, Mapping[str, Any]]) -> list[str]:
    """
    List the warning labels that apply to a listing.

    Labels are emitted in a fixed order: low rating, not verified, new
    business, mixed reviews. "Mixed reviews" can appear together with
    "Low rating".

    Args:
        listing: Listing model or a mapping with the same keys

    Returns:
        Warning labels, empty for a listing with no warning signs
    """
    if isinstance(listing, Listing):
        reputation = listing.reputation_score
        verified = listing.verified
        reviews = listing.total_reviews or 0
        orders = listing.total_completed_orders or 0
    else:
        reputation = listing.get("reputation_score")
        verified = listing.get("verified")
        reviews = listing.get("total_reviews") or 0
        orders = listing.get("total_completed_orders") or 0

    warnings: list[str] = []

    if reputation is not None and reputation < LOW_RATING_THRESHOLD:
        warnings.append(LOW_RATING)

    if not verified:
        warnings.append(NOT_VERIFIED)

    if reviews == 0 and orders == 0:
        warnings.append(NEW_BUSINESS)

    if reviews > 0 and reputation is not None and reputation < MIXED_REVIEWS_THRESHOLD:
        warnings.append(MIXED_REVIEWS)

    return warnings

"""
Demo script for content filtering and listing matching.

Shows what a message-send handler and a listing feed would do with the
library: screen free text before accepting it, then rank listings for a viewer.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from marketguard.domain.entities import BusinessType, Listing, MatchingOptions, PreferredType
from marketguard.filters import (
    ScreeningConfig,
    filter_content,
    get_content_report,
    get_input_warning,
    screen_fields,
    screening_warning,
)
from marketguard.infra.logging.config import LogContext, setup_logging
from marketguard.matching import detect_low_quality_signals, rank_listings


def demo_content_filter():
    """Demonstrate single-message filtering."""
    print("=" * 80)
    print("DEMO 1: Content Filter")
    print("=" * 80)

    messages = [
        "Is the blue dress still in stock?",
        "Call me on 08012345678",
        "Follow @shop_lagos for deals",
        "my line is zero eight one two three",
        "email jane@example.org",
    ]

    for text in messages:
        result = filter_content(text)
        report = get_content_report(text)
        print(f"\nText: {text}")
        print(f"  Clean: {result.is_clean}")
        print(f"  Violations: {result.violations}")
        print(f"  Sanitized: {result.sanitized_content}")
        print(f"  Confidence: {result.confidence:.2f}")
        print(f"  Report: {report.message}")
        warning = get_input_warning(result)
        if warning:
            print(f"  Warning: {warning}")


def demo_screening():
    """Demonstrate multi-field submission screening."""
    print("\n" + "=" * 80)
    print("DEMO 2: Offer Screening")
    print("=" * 80)

    config = ScreeningConfig()
    offers = [
        {"title": "Fresh bread", "description": "Baked every morning"},
        {"title": "Tailoring", "description": "DM me on instagram.com/tailor"},
    ]

    for fields in offers:
        with LogContext(user_id="demo-user"):
            result = screen_fields(fields, config=config)
        print(f"\nOffer: {fields}")
        print(f"  Accepted: {result.is_clean}")
        print(f"  Flagged fields: {result.flagged_fields}")
        if not result.is_clean:
            print(f"  Warning: {screening_warning(result, config=config)}")


def demo_ranking():
    """Demonstrate ranking listings for a viewer in Lagos."""
    print("\n" + "=" * 80)
    print("DEMO 3: Listing Ranking")
    print("=" * 80)

    listings = [
        Listing(
            id="1",
            company_name="Ikeja Fabrics",
            latitude=6.6018,
            longitude=3.3515,
            reputation_score=4.6,
            verified=True,
            business_type=BusinessType.GOODS,
            total_reviews=58,
            total_completed_orders=120,
        ),
        Listing(
            id="2",
            company_name="Lekki Cleaners",
            latitude=6.4474,
            longitude=3.4723,
            reputation_score=2.2,
            verified=False,
            business_type=BusinessType.SERVICES,
            total_reviews=4,
        ),
        Listing(id="3", company_name="New Stall", business_type=BusinessType.BOTH),
        Listing(
            id="4",
            company_name="Ibadan Foods",
            latitude=7.3775,
            longitude=3.9470,
            reputation_score=4.9,
            verified=True,
            business_type=BusinessType.GOODS,
            total_reviews=300,
        ),
    ]

    options = MatchingOptions(
        user_latitude=6.5244,
        user_longitude=3.3792,
        preferred_type=PreferredType.GOODS,
        max_distance=50,
    )

    for scored in rank_listings(listings, options):
        distance = f"{scored.distance:.1f} km" if scored.distance is not None else "unknown"
        print(
            f"\n{scored.company_name}: match={scored.match_score} "
            f"trust={scored.trust_score} distance={distance}"
        )
        signals = detect_low_quality_signals(scored)
        if signals:
            print(f"  Signals: {', '.join(signals)}")


def main():
    """Run all demos."""
    setup_logging()

    demo_content_filter()
    demo_screening()
    demo_ranking()

    print("\n" + "=" * 80)
    print("All demos completed!")
    print("=" * 80)


if __name__ == "__main__":
    main()

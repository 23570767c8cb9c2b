"""
Domain entities for marketguard.

This module defines Pydantic models for the content filter and the listing
matcher. All of them are transient view-models built per call; none of them
maps onto a database table.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ViolationCategory(str, Enum):
    """Labels reported by the content filter."""

    SOCIAL_HANDLE = "Social media handle detected"
    PHONE_IN_WORDS = "Potential phone number in words detected"
    SUSPICIOUS_SHARING = "Suspicious contact sharing attempt"


class PreferredType(str, Enum):
    """Kind of business a viewer is looking for."""

    GOODS = "goods"
    SERVICES = "services"
    ALL = "all"


class BusinessType(str, Enum):
    """Kind of business a listing offers."""

    GOODS = "goods"
    SERVICES = "services"
    BOTH = "both"


# ================================================================================
# Content Filter Entities
# ================================================================================


class ContentFilterResult(BaseModel):
    """
    Result of running the content filter over a piece of text.

    `confidence` is a saturating heuristic derived from the raw match count,
    not a probability.
    """

    is_clean: bool = Field(description="True iff no violation was detected")
    violations: list[str] = Field(
        default_factory=list,
        description="Distinct violation labels in first-detected order",
    )
    sanitized_content: str = Field(description="Input with redacted contact details")
    confidence: float = Field(default=0.0, ge=0.0, le=1.0, description="Detection strength")

    @property
    def first_violation(self) -> Optional[str]:
        """First detected violation label, if any."""
        return self.violations[0] if self.violations else None


class ContentReport(BaseModel):
    """Human-readable summary of a content check."""

    safe: bool
    message: str
    details: list[str] = Field(default_factory=list)


class ScreeningResult(BaseModel):
    """
    Result of screening several free-text fields of one submission.

    A submission is clean only when every field is clean.
    """

    is_clean: bool
    field_results: dict[str, ContentFilterResult] = Field(default_factory=dict)
    flagged_fields: list[str] = Field(
        default_factory=list,
        description="Names of unclean fields, in input order",
    )
    violations: list[str] = Field(
        default_factory=list,
        description="Distinct labels across all fields, first-seen order",
    )
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)


# ================================================================================
# Matching Entities
# ================================================================================


class MatchingOptions(BaseModel):
    """
    Viewer context used to rank listings.

    The viewer location only counts when both coordinates are given.
    """

    user_latitude: Optional[float] = Field(default=None, ge=-90.0, le=90.0)
    user_longitude: Optional[float] = Field(default=None, ge=-180.0, le=180.0)
    preferred_type: PreferredType = Field(default=PreferredType.ALL)
    max_distance: Optional[float] = Field(
        default=None,
        ge=0.0,
        description="Drop listings farther than this many km (needs viewer location)",
    )

    @field_validator("preferred_type", mode="before")
    @classmethod
    def default_missing_type(cls, v: Optional[str]) -> str:
        """Treat an explicit None as 'all'."""
        return PreferredType.ALL if v is None else v

    @property
    def viewer_location(self) -> Optional[tuple[float, float]]:
        """(latitude, longitude) or None when either coordinate is missing."""
        if self.user_latitude is None or self.user_longitude is None:
            return None
        return (self.user_latitude, self.user_longitude)


class Listing(BaseModel):
    """
    A business record being ranked for display.

    Unknown fields are kept, so the scored output carries the caller's whole
    record through.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    company_name: str = ""
    latitude: Optional[float] = Field(default=None, ge=-90.0, le=90.0)
    longitude: Optional[float] = Field(default=None, ge=-180.0, le=180.0)
    reputation_score: Optional[float] = Field(default=None, ge=0.0, le=5.0)
    verified: Optional[bool] = None
    business_type: Optional[BusinessType] = None
    total_reviews: Optional[int] = Field(default=None, ge=0)
    total_completed_orders: Optional[int] = Field(default=None, ge=0)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: object) -> object:
        """Accept integer ids from storage rows."""
        return str(v) if isinstance(v, int) else v

    @property
    def location(self) -> Optional[tuple[float, float]]:
        """(latitude, longitude) or None when either coordinate is missing."""
        if self.latitude is None or self.longitude is None:
            return None
        return (self.latitude, self.longitude)


class ScoredListing(Listing):
    """A listing plus the scores computed for one viewer."""

    match_score: int = Field(ge=0, le=100)
    distance: Optional[float] = Field(default=None, ge=0.0, description="Kilometres")
    trust_score: int = Field(ge=0, le=100)

    @model_validator(mode="after")
    def check_distance_needs_location(self) -> "ScoredListing":
        """A known distance implies the listing has coordinates."""
        if self.distance is not None and self.location is None:
            raise ValueError("distance is set but listing has no coordinates")
        return self

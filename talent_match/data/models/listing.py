"""
Store listing data models.

A listing is a store's published recruitment profile: location, service
type, pay range, eligibility requirements and perks.
"""

from typing import Optional

from pydantic import Field, field_validator

from talent_match.utils.constants import ListingStatus, Prefecture, ServiceType

from .base import BaseDocument, EmbeddedModel


class CupSizeCondition(EmbeddedModel):
    """Spec override that applies to one cup size."""

    cup_size: str
    spec_min: Optional[int] = None
    spec_max: Optional[int] = None


class SpecialOffer(EmbeddedModel):
    """A promotional offer attached to a listing."""

    title: Optional[str] = None
    description: Optional[str] = None


class ListingRequirements(EmbeddedModel):
    """Eligibility requirements stated by a store."""

    age_min: Optional[int] = None
    age_max: Optional[int] = None
    spec_min: Optional[int] = None
    spec_max: Optional[int] = None

    # Accepted but not consumed by the default scorers
    cup_size_conditions: list[CupSizeCondition] = Field(default_factory=list)

    preferred_body_types: list[str] = Field(default_factory=list)
    preferred_look_types: list[str] = Field(default_factory=list)
    preferred_hair_colors: list[str] = Field(default_factory=list)
    tattoo_acceptance: Optional[str] = None

    @field_validator(
        "cup_size_conditions",
        "preferred_body_types",
        "preferred_look_types",
        "preferred_hair_colors",
        mode="before",
    )
    @classmethod
    def none_to_empty(cls, v):
        """Stored documents use null for 'no preference'."""
        return [] if v is None else v


class Listing(BaseDocument):
    """
    A store listing.

    Only listings with status == published are eligible for scoring.
    """

    business_name: str = ""
    location: Prefecture
    service_type: ServiceType

    minimum_guarantee: Optional[int] = Field(default=None, ge=0)
    maximum_guarantee: Optional[int] = Field(default=None, ge=0)

    requirements: ListingRequirements = Field(default_factory=ListingRequirements)

    benefits: list[str] = Field(default_factory=list)
    transportation_support: bool = False
    housing_support: bool = False
    special_offers: list[SpecialOffer] = Field(default_factory=list)

    status: ListingStatus = ListingStatus.DRAFT

    @field_validator("requirements", mode="before")
    @classmethod
    def default_requirements(cls, v):
        """Treat a missing requirements document as no requirements."""
        return {} if v is None else v

    @field_validator("benefits", "special_offers", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return [] if v is None else v

    @property
    def is_published(self) -> bool:
        """Check if the listing is eligible for scoring."""
        return self.status == ListingStatus.PUBLISHED.value

    class Settings:
        """MongoDB collection settings."""

        name = "store_profiles"
        indexes = [
            "status",
            "location",
            "service_type",
            "created_at",
        ]

"""
Match request and result models.

MatchOptions carries per-request overrides; MatchResult is one ranked,
explained entry of the engine's output.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from talent_match.utils.constants import Prefecture, ServiceType

from .base import EmbeddedModel, PyObjectId


class MatchOptions(BaseModel):
    """Per-request options for computing matches."""

    # Pagination; None falls back to the configured default (full list)
    limit: Optional[int] = Field(default=None, ge=1)
    offset: int = Field(default=0, ge=0)

    # None falls back to the configured default (on)
    personalize: Optional[bool] = None

    # Weight presets and overrides
    prioritize_location: bool = False
    prioritize_guarantee: bool = False
    custom_weights: Optional[dict[str, float]] = None

    # Talent preference overrides
    desired_guarantee: Optional[int] = Field(default=None, gt=0)
    service_types: Optional[list[ServiceType]] = None
    locations: list[Prefecture] = Field(default_factory=list)

    # Candidate pool filters
    filter_by_location: Optional[Prefecture] = None
    filter_by_service: Optional[ServiceType] = None
    filter_by_min_guarantee: Optional[int] = Field(default=None, ge=0)

    model_config = {"use_enum_values": True}


class MatchResult(EmbeddedModel):
    """A scored listing with its human-readable match reasons."""

    listing_id: PyObjectId
    score: int = Field(ge=0, le=100)
    reasons: list[str] = Field(default_factory=list)

    # Explainability
    total_score: float = Field(default=0.0, ge=0, le=1)
    dimension_scores: dict[str, float] = Field(default_factory=dict)

    # Listing summary
    listing_created_at: Optional[datetime] = None
    business_name: str = ""
    location: Optional[str] = None
    service_type: Optional[str] = None
    minimum_guarantee: Optional[int] = None
    maximum_guarantee: Optional[int] = None

    model_config = {"arbitrary_types_allowed": True, "use_enum_values": True, "populate_by_name": True}

"""
Pydantic data models for the matching engine.

This module provides the read models the engine consumes (users, talent
profiles, listings, interaction history) and the request/result schemas
it produces.
"""

# Base models
from .base import (
    BaseDocument,
    EmbeddedModel,
    PyObjectId,
    TimestampMixin,
    comparable_timestamp,
)

# Talent models
from .talent import TalentProfile, User

# Listing models
from .listing import CupSizeCondition, Listing, ListingRequirements, SpecialOffer

# Interaction models
from .interaction import Application, Interaction, Keep, View

# Match models
from .match import MatchOptions, MatchResult

__all__ = [
    # Base
    "BaseDocument",
    "EmbeddedModel",
    "PyObjectId",
    "TimestampMixin",
    "comparable_timestamp",
    # Talent
    "TalentProfile",
    "User",
    # Listing
    "CupSizeCondition",
    "Listing",
    "ListingRequirements",
    "SpecialOffer",
    # Interaction
    "Application",
    "Interaction",
    "Keep",
    "View",
    # Match
    "MatchOptions",
    "MatchResult",
]

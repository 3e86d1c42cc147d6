"""
Talent-side data models.

The user record carries identity-level fields (birth date, registered and
preferred locations); the talent profile carries body measurements and
work preferences.
"""

from datetime import date, datetime
from typing import Optional, Union

from pydantic import Field

from talent_match.utils.constants import Prefecture, ServiceType

from .base import BaseDocument, PyObjectId


class User(BaseDocument):
    """A registered user as exposed by the account service."""

    username: Optional[str] = None

    # Stored as entered; unparsable values make age scoring neutral
    birth_date: Optional[Union[datetime, date, str]] = None

    location: Optional[Prefecture] = None
    preferred_locations: list[Prefecture] = Field(default_factory=list)

    class Settings:
        """MongoDB collection settings."""

        name = "users"


class TalentProfile(BaseDocument):
    """A talent's profile as exposed by the profile service."""

    user_id: PyObjectId

    height: Optional[int] = Field(default=None, description="Height in cm")
    weight: Optional[int] = Field(default=None, description="Weight in kg")
    cup_size: Optional[str] = None

    desired_guarantee: Optional[int] = Field(default=None, ge=0)
    preferred_service_types: list[ServiceType] = Field(default_factory=list)

    @property
    def spec(self) -> Optional[int]:
        """Height minus weight, or None when either measurement is missing."""
        if self.height is None or self.weight is None:
            return None
        return self.height - self.weight

    class Settings:
        """MongoDB collection settings."""

        name = "talent_profiles"

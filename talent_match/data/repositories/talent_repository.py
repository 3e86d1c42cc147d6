"""
User and talent profile repositories.
"""

from typing import Any, Optional

from talent_match.data.models import TalentProfile, User

from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Read access to user documents."""

    @property
    def collection_name(self) -> str:
        return "users"

    @property
    def model_class(self) -> type[User]:
        return User


class TalentProfileRepository(BaseRepository[TalentProfile]):
    """Read access to talent profile documents."""

    @property
    def collection_name(self) -> str:
        return "talent_profiles"

    @property
    def model_class(self) -> type[TalentProfile]:
        return TalentProfile

    def get_by_user_id(self, user_id: Any) -> Optional[TalentProfile]:
        """Get the profile owned by a user."""
        object_id = self._to_object_id(user_id)
        if object_id is None:
            return None
        return self.find_one({"user_id": object_id})

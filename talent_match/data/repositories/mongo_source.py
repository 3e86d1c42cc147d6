"""
MongoDB-backed data source for the matching engine.
"""

from typing import Any, Optional

from talent_match.data.database import DatabaseManager, get_database_manager
from talent_match.data.models import (
    Application,
    Keep,
    Listing,
    TalentProfile,
    User,
    View,
)

from .interaction_repository import ApplicationRepository, KeepRepository, ViewRepository
from .listing_repository import ListingRepository
from .talent_repository import TalentProfileRepository, UserRepository


class MongoMatchingDataSource:
    """Implements MatchingDataSource on top of the read-only repositories."""

    def __init__(self, db_manager: Optional[DatabaseManager] = None) -> None:
        db_manager = db_manager or get_database_manager()
        self.users = UserRepository(db_manager)
        self.profiles = TalentProfileRepository(db_manager)
        self.listings = ListingRepository(db_manager)
        self.applications = ApplicationRepository(db_manager)
        self.keeps = KeepRepository(db_manager)
        self.views = ViewRepository(db_manager)

    def get_user_by_id(self, user_id: Any) -> Optional[User]:
        return self.users.get_by_id(user_id)

    def get_talent_profile(self, user_id: Any) -> Optional[TalentProfile]:
        return self.profiles.get_by_user_id(user_id)

    def get_published_listings(self) -> list[Listing]:
        return self.listings.get_published()

    def get_application_history(self, user_id: Any) -> list[Application]:
        return self.applications.get_for_user(user_id)

    def get_keep_list(self, user_id: Any) -> list[Keep]:
        return self.keeps.get_for_user(user_id)

    def get_view_history(self, user_id: Any, limit: int) -> list[View]:
        # A limit of 0 would mean "unbounded" to pymongo
        if limit <= 0:
            return []
        return self.views.get_for_user(user_id, limit=limit)

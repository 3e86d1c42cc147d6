"""
In-memory data source.

Holds an already-loaded slice of records and serves the engine's read
interface from it. Useful for batch jobs that load once and match many
users, and for tests.
"""

from typing import Any, Iterable, Optional

from bson import ObjectId

from talent_match.data.models import (
    Application,
    Keep,
    Listing,
    TalentProfile,
    User,
    View,
    comparable_timestamp,
)


def _key(value: Any) -> str:
    return str(value)


class InMemoryDataSource:
    """Implements MatchingDataSource over record lists."""

    def __init__(
        self,
        users: Iterable[User] = (),
        profiles: Iterable[TalentProfile] = (),
        listings: Iterable[Listing] = (),
        applications: Iterable[Application] = (),
        keeps: Iterable[Keep] = (),
        views: Iterable[View] = (),
    ) -> None:
        self._users = {_key(u.id): u for u in users}
        self._profiles = {_key(p.user_id): p for p in profiles}
        self._listings = list(listings)
        for listing in self._listings:
            if listing.id is None:
                listing.id = ObjectId()
        self._applications = list(applications)
        self._keeps = list(keeps)
        self._views = list(views)

    def get_user_by_id(self, user_id: Any) -> Optional[User]:
        return self._users.get(_key(user_id))

    def get_talent_profile(self, user_id: Any) -> Optional[TalentProfile]:
        return self._profiles.get(_key(user_id))

    def get_published_listings(self) -> list[Listing]:
        return [l for l in self._listings if l.is_published]

    def get_application_history(self, user_id: Any) -> list[Application]:
        return self._history(self._applications, user_id)

    def get_keep_list(self, user_id: Any) -> list[Keep]:
        return self._history(self._keeps, user_id)

    def get_view_history(self, user_id: Any, limit: int) -> list[View]:
        if limit <= 0:
            return []
        return self._history(self._views, user_id)[:limit]

    @staticmethod
    def _history(records: list, user_id: Any) -> list:
        owned = [r for r in records if _key(r.user_id) == _key(user_id)]
        return sorted(owned, key=lambda r: comparable_timestamp(r.timestamp), reverse=True)

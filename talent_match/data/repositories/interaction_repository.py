"""
Interaction history repositories (applications, keeps, views).
"""

from typing import Any, TypeVar

from talent_match.data.models import Application, Interaction, Keep, View

from .base import BaseRepository

I = TypeVar("I", bound=Interaction)


class _HistoryRepository(BaseRepository[I]):
    """Shared per-user history query, newest first."""

    def get_for_user(self, user_id: Any, limit: int = 0) -> list[I]:
        object_id = self._to_object_id(user_id)
        if object_id is None:
            return []
        return self.find(
            {"user_id": object_id},
            limit=limit,
            sort_by="timestamp",
        )


class ApplicationRepository(_HistoryRepository[Application]):
    @property
    def collection_name(self) -> str:
        return "applications"

    @property
    def model_class(self) -> type[Application]:
        return Application


class KeepRepository(_HistoryRepository[Keep]):
    @property
    def collection_name(self) -> str:
        return "keep_list"

    @property
    def model_class(self) -> type[Keep]:
        return Keep


class ViewRepository(_HistoryRepository[View]):
    @property
    def collection_name(self) -> str:
        return "view_history"

    @property
    def model_class(self) -> type[View]:
        return View

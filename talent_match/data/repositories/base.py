"""
Repository base class and the engine's data source interface.

The engine never talks to a database directly: it reads through a
MatchingDataSource. The MongoDB-backed source is composed of the
read-only repositories built on BaseRepository.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, Protocol, TypeVar, runtime_checkable

from bson import ObjectId
from pymongo.collection import Collection

from talent_match.data.database import DatabaseManager, get_database_manager
from talent_match.data.models import (
    Application,
    Keep,
    Listing,
    TalentProfile,
    User,
    View,
)
from talent_match.data.models.base import BaseDocument
from talent_match.utils.logger import get_logger

logger = get_logger(__name__)

# Type variable for document models
T = TypeVar("T", bound=BaseDocument)


@runtime_checkable
class MatchingDataSource(Protocol):
    """
    Read-only collaborator interface consumed by the engine.

    Implementations may raise any exception on failure; the engine
    converts failures and timeouts into DataUnavailable.
    """

    def get_user_by_id(self, user_id: Any) -> Optional[User]:
        ...

    def get_talent_profile(self, user_id: Any) -> Optional[TalentProfile]:
        ...

    def get_published_listings(self) -> list[Listing]:
        ...

    def get_application_history(self, user_id: Any) -> list[Application]:
        ...

    def get_keep_list(self, user_id: Any) -> list[Keep]:
        ...

    def get_view_history(self, user_id: Any, limit: int) -> list[View]:
        ...


class BaseRepository(ABC, Generic[T]):
    """
    Abstract read-only repository over one MongoDB collection.

    Subclasses must define the collection name and model class.
    All queries are filter documents, never interpolated strings.
    """

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """Name of the MongoDB collection."""
        pass

    @property
    @abstractmethod
    def model_class(self) -> type[T]:
        """Pydantic model class for this repository."""
        pass

    def __init__(self, db_manager: Optional[DatabaseManager] = None) -> None:
        """Initialize repository with database connection."""
        self._db_manager = db_manager or get_database_manager()

    def _get_collection(self) -> Collection:
        return self._db_manager.get_collection(self.collection_name)

    # -------------------------------------------------------------------------
    # Document Conversion
    # -------------------------------------------------------------------------

    def _to_model(self, document: Optional[dict[str, Any]]) -> Optional[T]:
        """Convert MongoDB document to Pydantic model."""
        if document is None:
            return None
        return self.model_class.model_validate(document)

    def _to_models(self, documents: list[dict[str, Any]]) -> list[T]:
        """Convert list of MongoDB documents to Pydantic models."""
        return [self._to_model(doc) for doc in documents if doc is not None]

    @staticmethod
    def _to_object_id(id_value: Any) -> Optional[ObjectId]:
        """Convert string to ObjectId if needed. Malformed ids give None."""
        if isinstance(id_value, ObjectId):
            return id_value
        if not ObjectId.is_valid(str(id_value)):
            return None
        return ObjectId(str(id_value))

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    def get_by_id(self, id_value: Any) -> Optional[T]:
        """Get a document by its ID."""
        object_id = self._to_object_id(id_value)
        if object_id is None:
            # No stored document can carry a malformed id
            return None
        return self._to_model(self._get_collection().find_one({"_id": object_id}))

    def find(
        self,
        query: dict[str, Any],
        limit: int = 0,
        sort_by: str = "created_at",
        sort_order: int = -1,
    ) -> list[T]:
        """Find documents matching a query. A limit of 0 means no limit."""
        cursor = self._get_collection().find(query).sort(sort_by, sort_order)
        if limit:
            cursor = cursor.limit(limit)
        return self._to_models(list(cursor))

    def find_one(self, query: dict[str, Any]) -> Optional[T]:
        """Find a single document matching a query."""
        return self._to_model(self._get_collection().find_one(query))

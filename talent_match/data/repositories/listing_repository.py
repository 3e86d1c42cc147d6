"""
Listing repository.

Reads store listings; only published listings are ever handed to the
matching engine.
"""

from talent_match.data.models import Listing
from talent_match.utils.constants import ListingStatus
from talent_match.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class ListingRepository(BaseRepository[Listing]):
    """Read access to store listing documents."""

    @property
    def collection_name(self) -> str:
        return "store_profiles"

    @property
    def model_class(self) -> type[Listing]:
        return Listing

    def get_published(self) -> list[Listing]:
        """Get all published listings, newest first."""
        listings = self.find({"status": ListingStatus.PUBLISHED.value})
        logger.debug(f"Loaded {len(listings)} published listings")
        return listings

"""
Talent interaction history models.

Applications, bookmarks ("keeps") and listing views are the behavioral
signals the weight adjuster reads.
"""

from datetime import datetime
from typing import Optional

from .base import BaseDocument, PyObjectId


class Interaction(BaseDocument):
    """A talent's interaction with one listing."""

    user_id: PyObjectId
    listing_id: PyObjectId
    timestamp: Optional[datetime] = None


class Application(Interaction):
    """The talent applied to the listing."""

    status: Optional[str] = None  # pending, accepted, rejected

    class Settings:
        name = "applications"


class Keep(Interaction):
    """The talent bookmarked the listing."""

    class Settings:
        name = "keep_list"


class View(Interaction):
    """The talent opened the listing's detail page."""

    class Settings:
        name = "view_history"

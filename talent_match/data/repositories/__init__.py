"""
Data access for the matching engine.

This module provides the MatchingDataSource interface, the read-only
MongoDB repositories behind it, and an in-memory implementation.
"""

# Base repository and interface
from .base import BaseRepository, MatchingDataSource

# Entity repositories
from .talent_repository import TalentProfileRepository, UserRepository
from .listing_repository import ListingRepository
from .interaction_repository import ApplicationRepository, KeepRepository, ViewRepository

# Data sources
from .mongo_source import MongoMatchingDataSource
from .memory import InMemoryDataSource

__all__ = [
    # Base
    "BaseRepository",
    "MatchingDataSource",
    # Entities
    "UserRepository",
    "TalentProfileRepository",
    "ListingRepository",
    "ApplicationRepository",
    "KeepRepository",
    "ViewRepository",
    # Sources
    "MongoMatchingDataSource",
    "InMemoryDataSource",
]

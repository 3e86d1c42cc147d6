"""
Shared test fixtures for the talent-match test suite.

Sets environment variables before any talent_match imports so settings
resolve to the testing environment, then provides factory fixtures for
users, profiles, listings and interaction history, and an engine factory
over the in-memory data source.
"""

import os

# === Set environment BEFORE any talent_match imports ===
os.environ.setdefault("APP_ENVIRONMENT", "testing")
os.environ.setdefault("DB_NAME", "talent_match_test")

from datetime import date, datetime, timedelta
from typing import Any, Optional

import pytest
from bson import ObjectId

from talent_match.core.matching import MatchingEngine
from talent_match.data.models import (
    Application,
    Keep,
    Listing,
    ListingRequirements,
    TalentProfile,
    User,
    View,
)
from talent_match.data.repositories import InMemoryDataSource
from talent_match.utils.config import MatchingSettings
from talent_match.utils.constants import ListingStatus, Prefecture, ServiceType

# Reference date for every age calculation in the suite
TODAY = date(2025, 6, 1)


# ---------------------------------------------------------------------------
# Factory fixtures for read models
# ---------------------------------------------------------------------------


@pytest.fixture
def make_user():
    """Factory that returns a callable to build User records (age 25 on TODAY)."""

    def _factory(
        user_id: Optional[ObjectId] = None,
        birth_date: Any = "2000-01-15",
        location: Optional[Prefecture] = Prefecture.TOKYO,
        preferred_locations: Optional[list[Prefecture]] = None,
        **kwargs,
    ) -> User:
        return User(
            id=user_id or ObjectId(),
            username="hanako",
            birth_date=birth_date,
            location=location,
            preferred_locations=preferred_locations or [],
            **kwargs,
        )

    return _factory


@pytest.fixture
def make_profile():
    """Factory that returns a callable to build TalentProfile records (spec 115)."""

    def _factory(
        user_id: ObjectId,
        height: Optional[int] = 165,
        weight: Optional[int] = 50,
        desired_guarantee: Optional[int] = 20000,
        preferred_service_types: Optional[list[ServiceType]] = None,
        **kwargs,
    ) -> TalentProfile:
        if preferred_service_types is None:
            preferred_service_types = [ServiceType.DERIHERU]
        return TalentProfile(
            user_id=user_id,
            height=height,
            weight=weight,
            desired_guarantee=desired_guarantee,
            preferred_service_types=preferred_service_types,
            **kwargs,
        )

    return _factory


@pytest.fixture
def make_listing():
    """Factory that returns a callable to build published Listing records."""

    def _factory(
        location: Prefecture = Prefecture.TOKYO,
        service_type: ServiceType = ServiceType.DERIHERU,
        minimum_guarantee: Optional[int] = None,
        maximum_guarantee: Optional[int] = None,
        requirements: Optional[dict[str, Any]] = None,
        status: ListingStatus = ListingStatus.PUBLISHED,
        created_at: Optional[datetime] = None,
        listing_id: Optional[ObjectId] = None,
        business_name: str = "Club Sakura",
        **kwargs,
    ) -> Listing:
        return Listing(
            id=listing_id or ObjectId(),
            business_name=business_name,
            location=location,
            service_type=service_type,
            minimum_guarantee=minimum_guarantee,
            maximum_guarantee=maximum_guarantee,
            requirements=ListingRequirements(**(requirements or {})),
            status=status,
            created_at=created_at or datetime(2025, 1, 1),
            **kwargs,
        )

    return _factory


@pytest.fixture
def make_history():
    """Factory that returns a callable to build interaction records."""

    kinds = {"application": Application, "keep": Keep, "view": View}

    def _factory(
        kind: str,
        user_id: ObjectId,
        listing: Listing,
        minutes_ago: int = 0,
    ):
        return kinds[kind](
            user_id=user_id,
            listing_id=listing.id,
            timestamp=datetime(2025, 5, 1) - timedelta(minutes=minutes_ago),
        )

    return _factory


# ---------------------------------------------------------------------------
# Sample records
# ---------------------------------------------------------------------------


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def sample_user(make_user):
    return make_user()


@pytest.fixture
def sample_profile(make_profile, sample_user):
    return make_profile(sample_user.id)


# ---------------------------------------------------------------------------
# Matching engine fixtures (no external services)
# ---------------------------------------------------------------------------


@pytest.fixture
def matching_settings():
    """Default matching settings, independent of the process environment."""
    return MatchingSettings(
        default_limit=None,
        query_timeout_seconds=5.0,
        view_history_limit=50,
        default_desired_guarantee=20000,
        personalize=True,
        learning_factor=1.0,
        parallel_threshold=200,
        max_workers=8,
    )


@pytest.fixture
def make_engine(matching_settings):
    """Factory for MatchingEngine over an in-memory or custom data source."""
    engines: list[MatchingEngine] = []

    def _factory(
        data_source: Any = None,
        settings: Optional[MatchingSettings] = None,
        **source_records,
    ) -> MatchingEngine:
        if data_source is None:
            data_source = InMemoryDataSource(**source_records)
        engine = MatchingEngine(
            data_source,
            settings=settings or matching_settings,
            today=lambda: TODAY,
        )
        engines.append(engine)
        return engine

    yield _factory

    for engine in engines:
        engine.close()

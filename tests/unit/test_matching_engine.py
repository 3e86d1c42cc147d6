"""
Tests for talent_match.core.matching.engine: MatchingEngine orchestration.

All tests run against InMemoryDataSource so no database is required.
"""

import time
from datetime import datetime, timedelta, timezone

import pytest
from bson import ObjectId

import talent_match.core.matching.engine as engine_module
from talent_match.core.exceptions import ConfigurationError, DataUnavailable, ProfileNotFound
from talent_match.core.matching.engine import (
    close_matching_engine,
    filter_listings,
    rank_matches,
    score_dimensions,
    score_listing,
)
from talent_match.core.matching.features import extract_features
from talent_match.core.matching.weights import WeightProfile
from talent_match.data.models import Listing, MatchOptions, MatchResult
from talent_match.data.repositories import InMemoryDataSource
from talent_match.utils.config import MatchingSettings
from talent_match.utils.constants import Dimension, ListingStatus, Prefecture, ServiceType


@pytest.fixture
def features(sample_user, sample_profile, today):
    return extract_features(sample_user, sample_profile, today=today)


@pytest.fixture
def ideal_listing(make_listing):
    """Listing where every dimension but cup size and guarantee is a perfect fit."""
    return make_listing(
        minimum_guarantee=15000,
        requirements={"age_min": 20, "age_max": 30, "spec_min": 110, "spec_max": 120},
        business_name="Ideal",
    )


# ── Pure pipeline helpers ────────────────────────────────────────────────────


class TestScoreDimensions:
    def test_scenario_scores(self, features, ideal_listing):
        scores = score_dimensions(features, ideal_listing)
        assert scores == {
            Dimension.AGE: 1.0,
            Dimension.LOCATION: 1.0,
            Dimension.BODY_TYPE: 1.0,
            Dimension.CUP_SIZE: 0.5,
            Dimension.GUARANTEE: pytest.approx(0.75),
            Dimension.SERVICE: 1.0,
        }

    def test_unconstrained_listing_is_neutral(self, features, make_listing):
        scores = score_dimensions(features, make_listing(location=Prefecture.OSAKA))
        assert scores[Dimension.AGE] == 1.0
        assert scores[Dimension.BODY_TYPE] == 1.0
        assert scores[Dimension.GUARANTEE] == 0.5
        assert scores[Dimension.LOCATION] == 0.2

    def test_preferred_body_types_use_category_ladder(self, features, make_listing):
        listing = make_listing(requirements={"spec_min": 130, "preferred_body_types": ["やや細め"]})
        # spec 115 is slim, one step from the preferred category
        assert score_dimensions(features, listing)[Dimension.BODY_TYPE] == pytest.approx(0.85)


class TestScoreListing:
    def test_result_fields(self, features, ideal_listing):
        result = score_listing(features, ideal_listing, WeightProfile.from_defaults())

        assert isinstance(result, MatchResult)
        assert result.listing_id == ideal_listing.id
        assert result.score == 89
        assert result.total_score == pytest.approx(0.8875)
        assert result.dimension_scores["guarantee"] == pytest.approx(0.75)
        assert result.business_name == "Ideal"
        assert result.location == "東京都"
        assert result.listing_created_at == ideal_listing.created_at
        assert "Matches your preferred service type" in result.reasons


class TestRankMatches:
    def _result(self, score, created_at, listing_id=None):
        return MatchResult(
            listing_id=listing_id or ObjectId(),
            score=score,
            listing_created_at=created_at,
        )

    def test_descending_score(self):
        results = [self._result(s, datetime(2025, 1, 1)) for s in (40, 90, 65)]
        assert [r.score for r in rank_matches(results)] == [90, 65, 40]

    def test_tie_broken_by_recency(self):
        older = self._result(72, datetime(2024, 1, 1))
        newer = self._result(72, datetime(2025, 1, 1))
        assert rank_matches([older, newer]) == [newer, older]
        assert rank_matches([newer, older]) == [newer, older]

    def test_full_tie_is_deterministic(self):
        created = datetime(2025, 1, 1)
        results = [self._result(50, created) for _ in range(5)]
        assert rank_matches(results) == rank_matches(list(reversed(results)))

    def test_missing_created_at_ranks_oldest(self):
        dated = self._result(60, datetime(2020, 1, 1))
        undated = self._result(60, None)
        assert rank_matches([undated, dated]) == [dated, undated]

    def test_mixed_naive_and_aware_timestamps(self):
        utc_eight = self._result(60, datetime(2025, 1, 1, 8))
        utc_nine = self._result(60, datetime(2025, 1, 1, 18, tzinfo=timezone(timedelta(hours=9))))
        assert rank_matches([utc_eight, utc_nine]) == [utc_nine, utc_eight]


class TestFilterListings:
    def test_filters(self, make_listing):
        tokyo = make_listing(minimum_guarantee=30000)
        osaka = make_listing(location=Prefecture.OSAKA, minimum_guarantee=30000)
        esthe = make_listing(service_type=ServiceType.ESTHE, minimum_guarantee=10000)
        listings = [tokyo, osaka, esthe]

        assert filter_listings(listings, MatchOptions()) == listings
        assert filter_listings(listings, MatchOptions(filter_by_location=Prefecture.OSAKA)) == [osaka]
        assert filter_listings(listings, MatchOptions(filter_by_service=ServiceType.ESTHE)) == [esthe]
        assert filter_listings(listings, MatchOptions(filter_by_min_guarantee=20000)) == [tokyo, osaka]


# ── MatchingEngine.compute_matches ───────────────────────────────────────────


class TestComputeMatches:
    def test_ranked_results(self, make_engine, sample_user, sample_profile, ideal_listing, make_listing):
        weak = make_listing(location=Prefecture.OSAKA, service_type=ServiceType.ESTHE)
        engine = make_engine(users=[sample_user], profiles=[sample_profile], listings=[weak, ideal_listing])

        results = engine.compute_matches(sample_user.id)

        assert [r.listing_id for r in results] == [ideal_listing.id, weak.id]
        assert results[0].score == 89

    def test_accepts_string_user_id(self, make_engine, sample_user, sample_profile, ideal_listing):
        engine = make_engine(users=[sample_user], profiles=[sample_profile], listings=[ideal_listing])
        assert len(engine.match(str(sample_user.id))) == 1

    def test_only_published_listings(self, make_engine, sample_user, sample_profile, make_listing):
        draft = make_listing(status=ListingStatus.DRAFT)
        published = make_listing()
        engine = make_engine(users=[sample_user], profiles=[sample_profile], listings=[draft, published])

        assert [r.listing_id for r in engine.compute_matches(sample_user.id)] == [published.id]

    def test_no_listings(self, make_engine, sample_user, sample_profile):
        engine = make_engine(users=[sample_user], profiles=[sample_profile])
        assert engine.compute_matches(sample_user.id) == []

    def test_tie_at_72_newer_listing_first(self, make_engine, sample_user, sample_profile, make_listing):
        # age 1.0, location 0.2, body 1.0, cup 0.5, guarantee 0.7, service 1.0
        older = make_listing(
            location=Prefecture.OSAKA, minimum_guarantee=14000, created_at=datetime(2024, 3, 1)
        )
        newer = make_listing(
            location=Prefecture.OSAKA, minimum_guarantee=14000, created_at=datetime(2025, 3, 1)
        )
        engine = make_engine(users=[sample_user], profiles=[sample_profile], listings=[older, newer])

        results = engine.compute_matches(sample_user.id)

        assert [r.score for r in results] == [72, 72]
        assert [r.listing_id for r in results] == [newer.id, older.id]

    def test_undated_tie_ignores_load_order(self, make_engine, sample_user, sample_profile):
        low_id, high_id = ObjectId("0" * 24), ObjectId("f" * 24)
        documents = [
            {"_id": oid, "location": "東京都", "service_type": "deriheru", "status": "published"}
            for oid in (low_id, high_id)
        ]

        orders = []
        for docs in (documents, list(reversed(documents))):
            engine = make_engine(
                users=[sample_user],
                profiles=[sample_profile],
                listings=[Listing.model_validate(d) for d in docs],
            )
            results = engine.compute_matches(sample_user.id)
            assert results[0].score == results[1].score
            orders.append([r.listing_id for r in results])

        assert orders == [[high_id, low_id], [high_id, low_id]]

    def test_missing_user(self, make_engine, sample_profile):
        engine = make_engine(profiles=[sample_profile])
        with pytest.raises(ProfileNotFound) as exc_info:
            engine.compute_matches(sample_profile.user_id)
        assert exc_info.value.missing == "user record"

    def test_missing_profile(self, make_engine, sample_user):
        engine = make_engine(users=[sample_user])
        with pytest.raises(ProfileNotFound) as exc_info:
            engine.compute_matches(sample_user.id)
        assert exc_info.value.user_id == sample_user.id


class TestOptions:
    @pytest.fixture
    def engine_with_pool(self, make_engine, sample_user, sample_profile, make_listing):
        listings = [
            make_listing(minimum_guarantee=g, created_at=datetime(2025, 1, i + 1))
            for i, g in enumerate((10000, 12000, 14000, 16000, 18000))
        ]
        engine = make_engine(users=[sample_user], profiles=[sample_profile], listings=listings)
        return engine, listings

    def test_full_list_by_default(self, engine_with_pool, sample_user):
        engine, listings = engine_with_pool
        assert len(engine.compute_matches(sample_user.id)) == len(listings)

    def test_limit_and_offset(self, engine_with_pool, sample_user):
        engine, listings = engine_with_pool
        full = engine.compute_matches(sample_user.id)
        page = engine.compute_matches(sample_user.id, MatchOptions(limit=2, offset=1))
        assert [r.listing_id for r in page] == [r.listing_id for r in full[1:3]]

    def test_default_limit_from_settings(self, make_engine, sample_user, sample_profile, make_listing):
        listings = [make_listing() for _ in range(4)]
        engine = make_engine(
            settings=MatchingSettings(default_limit=3),
            users=[sample_user],
            profiles=[sample_profile],
            listings=listings,
        )
        assert len(engine.compute_matches(sample_user.id)) == 3

    def test_filter_options(self, make_engine, sample_user, sample_profile, make_listing):
        osaka = make_listing(location=Prefecture.OSAKA)
        engine = make_engine(
            users=[sample_user], profiles=[sample_profile], listings=[make_listing(), osaka]
        )
        results = engine.compute_matches(sample_user.id, MatchOptions(filter_by_location=Prefecture.OSAKA))
        assert [r.listing_id for r in results] == [osaka.id]

    def test_desired_guarantee_override(self, make_engine, sample_user, sample_profile, make_listing):
        listing = make_listing(minimum_guarantee=15000)
        engine = make_engine(users=[sample_user], profiles=[sample_profile], listings=[listing])

        result = engine.compute_matches(sample_user.id, MatchOptions(desired_guarantee=30000))[0]
        assert result.dimension_scores["guarantee"] == pytest.approx(0.5)

    def test_location_preset(self, make_engine, sample_user, sample_profile, make_listing):
        local = make_listing(service_type=ServiceType.ESTHE, maximum_guarantee=18000)
        remote = make_listing(location=Prefecture.OKINAWA, minimum_guarantee=20000)
        engine = make_engine(users=[sample_user], profiles=[sample_profile], listings=[local, remote])

        default_order = [r.listing_id for r in engine.compute_matches(sample_user.id)]
        location_order = [
            r.listing_id
            for r in engine.compute_matches(sample_user.id, MatchOptions(prioritize_location=True))
        ]

        # default: local 72 vs remote 76.5 of 100; location preset: local 69.5 vs remote 62 of 95
        assert default_order == [remote.id, local.id]
        assert location_order == [local.id, remote.id]

    def test_custom_weights(self, make_engine, sample_user, sample_profile, make_listing):
        listing = make_listing(service_type=ServiceType.ESTHE)
        engine = make_engine(users=[sample_user], profiles=[sample_profile], listings=[listing])

        only_service = {d.value: 0 for d in Dimension}
        only_service["service"] = 1
        options = MatchOptions(custom_weights=only_service, personalize=False)

        assert engine.compute_matches(sample_user.id, options)[0].score == 0

    def test_invalid_custom_weights(self, make_engine, sample_user, sample_profile):
        engine = make_engine(users=[sample_user], profiles=[sample_profile])
        with pytest.raises(ConfigurationError):
            engine.compute_matches(sample_user.id, MatchOptions(custom_weights={"age": -5}))


class TestPersonalization:
    @pytest.fixture
    def engine_with_history(self, make_engine, sample_user, sample_profile, make_listing, make_history):
        # location 1.0 and service 0.0, so extra location and service weight lowers the total
        listing = make_listing(service_type=ServiceType.ESTHE)
        engine = make_engine(
            users=[sample_user],
            profiles=[sample_profile],
            listings=[listing],
            applications=[make_history("application", sample_user.id, listing)],
        )
        return engine

    def test_history_adjusts_weights(self, engine_with_history, sample_user):
        static = engine_with_history.compute_matches(sample_user.id, MatchOptions(personalize=False))[0]
        personalized = engine_with_history.compute_matches(sample_user.id)[0]

        assert static.total_score == pytest.approx(0.75)
        assert personalized.total_score == pytest.approx(75.5 / 101)

    def test_personalization_disabled_in_settings(
        self, make_engine, sample_user, sample_profile, make_listing, make_history
    ):
        listing = make_listing(service_type=ServiceType.ESTHE)
        engine = make_engine(
            settings=MatchingSettings(personalize=False),
            users=[sample_user],
            profiles=[sample_profile],
            listings=[listing],
            applications=[make_history("application", sample_user.id, listing)],
        )
        assert engine.compute_matches(sample_user.id)[0].total_score == pytest.approx(0.75)

    def test_history_failure_falls_back_to_defaults(
        self, make_engine, sample_user, sample_profile, make_listing
    ):
        class BrokenHistory(InMemoryDataSource):
            def get_keep_list(self, user_id):
                raise ConnectionError("keep_list unavailable")

        source = BrokenHistory(
            users=[sample_user],
            profiles=[sample_profile],
            listings=[make_listing(service_type=ServiceType.ESTHE)],
        )
        engine = make_engine(data_source=source)

        assert engine.compute_matches(sample_user.id)[0].total_score == pytest.approx(0.75)


class TestDataUnavailable:
    def test_read_error(self, make_engine, sample_user, sample_profile):
        class BrokenListings(InMemoryDataSource):
            def get_published_listings(self):
                raise ConnectionError("connection refused")

        engine = make_engine(data_source=BrokenListings(users=[sample_user], profiles=[sample_profile]))

        with pytest.raises(DataUnavailable) as exc_info:
            engine.compute_matches(sample_user.id)
        assert exc_info.value.operation == "get_published_listings"
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_read_timeout(self, make_engine, sample_user, sample_profile):
        class SlowProfiles(InMemoryDataSource):
            def get_talent_profile(self, user_id):
                time.sleep(1.0)
                return super().get_talent_profile(user_id)

        engine = make_engine(
            data_source=SlowProfiles(users=[sample_user], profiles=[sample_profile]),
            settings=MatchingSettings(query_timeout_seconds=0.2),
        )

        with pytest.raises(DataUnavailable) as exc_info:
            engine.compute_matches(sample_user.id)
        assert exc_info.value.operation == "get_talent_profile"
        assert "timed out" in str(exc_info.value)


class TestParallelScoring:
    def test_same_order_as_sequential(self, make_engine, sample_user, sample_profile, make_listing):
        listings = [
            make_listing(
                location=location,
                minimum_guarantee=guarantee,
                created_at=datetime(2025, 1, day),
            )
            for day, (location, guarantee) in enumerate(
                [
                    (Prefecture.TOKYO, 12000),
                    (Prefecture.OSAKA, 12000),
                    (Prefecture.TOKYO, 30000),
                    (Prefecture.CHIBA, 18000),
                    (Prefecture.TOKYO, 12000),
                    (Prefecture.OSAKA, None),
                ],
                start=1,
            )
        ]
        records = dict(users=[sample_user], profiles=[sample_profile], listings=listings)

        sequential = make_engine(**records).compute_matches(sample_user.id)
        parallel = make_engine(
            settings=MatchingSettings(parallel_threshold=1, max_workers=3), **records
        ).compute_matches(sample_user.id)

        assert [r.listing_id for r in parallel] == [r.listing_id for r in sequential]
        assert [r.score for r in parallel] == [r.score for r in sequential]


class TestLifecycle:
    def test_close_releases_executors(self, make_engine):
        engine = make_engine()
        engine.close()
        with pytest.raises(RuntimeError):
            engine._executor.submit(int)

    def test_close_matching_engine_resets_singleton(self, make_engine, monkeypatch):
        engine = make_engine()
        monkeypatch.setattr(engine_module, "_matching_engine", engine)

        close_matching_engine()

        assert engine_module._matching_engine is None
        with pytest.raises(RuntimeError):
            engine._executor.submit(int)
        close_matching_engine()

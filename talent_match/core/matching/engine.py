"""
Talent-listing matching engine.

Scores every published store listing against a talent's profile along
six weighted dimensions and returns a ranked, explained match list.
The weight profile may be personalized from the talent's application,
keep and view history.
"""

import atexit
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Any, Callable, Iterable, Optional

from talent_match.core.exceptions import ProfileNotFound
from talent_match.data.models import Listing, MatchOptions, MatchResult, comparable_timestamp
from talent_match.data.repositories import MatchingDataSource, MongoMatchingDataSource
from talent_match.utils.config import MatchingSettings, get_settings
from talent_match.utils.constants import Dimension
from talent_match.utils.logger import audit_log, get_logger

from .adjuster import BehavioralWeightAdjuster
from .aggregator import aggregate, build_reasons, to_match_score
from .features import TalentFeatures, extract_features
from .reads import call_with_timeout
from .scorers import (
    score_age,
    score_body_category,
    score_body_type,
    score_cup_size,
    score_guarantee,
    score_location,
    score_service,
)
from .weights import WeightProfile

logger = get_logger(__name__)


def score_dimensions(features: TalentFeatures, listing: Listing) -> dict[Dimension, float]:
    """
    Run every dimension scorer for one (talent, listing) pair.

    Args:
        features: Talent scoring inputs
        listing: Candidate listing

    Returns:
        Mapping of the six scored dimensions to [0, 1] scores
    """
    requirements = listing.requirements

    if requirements.preferred_body_types:
        body_type = score_body_category(features.body_spec, requirements.preferred_body_types)
    else:
        body_type = score_body_type(
            features.body_spec,
            requirements.spec_min,
            requirements.spec_max,
            requirements.cup_size_conditions,
        )

    return {
        Dimension.AGE: score_age(features.age, requirements.age_min, requirements.age_max),
        Dimension.LOCATION: score_location(
            features.location, listing.location, features.preferred_locations
        ),
        Dimension.BODY_TYPE: body_type,
        Dimension.CUP_SIZE: score_cup_size(features.cup_size, requirements.cup_size_conditions),
        Dimension.GUARANTEE: score_guarantee(
            features.desired_guarantee, listing.minimum_guarantee, listing.maximum_guarantee
        ),
        Dimension.SERVICE: score_service(features.service_type_preferences, listing.service_type),
    }


def score_listing(
    features: TalentFeatures,
    listing: Listing,
    weights: WeightProfile,
) -> MatchResult:
    """Score one listing and explain the result."""
    scores = score_dimensions(features, listing)
    total = aggregate(scores, weights)

    return MatchResult(
        listing_id=listing.id,
        score=to_match_score(total),
        reasons=build_reasons(scores, listing),
        total_score=min(1.0, max(0.0, total)),
        dimension_scores={d.value: s for d, s in scores.items()},
        listing_created_at=listing.created_at,
        business_name=listing.business_name,
        location=listing.location,
        service_type=listing.service_type,
        minimum_guarantee=listing.minimum_guarantee,
        maximum_guarantee=listing.maximum_guarantee,
    )


def rank_matches(matches: Iterable[MatchResult]) -> list[MatchResult]:
    """
    Rank matches by score, newest listing first on ties.

    Creation times are compared in naive UTC and a missing one counts
    as oldest. The listing id is the final key so equal score and
    recency still yield a stable order whatever order the listings were
    scored in.
    """
    return sorted(
        matches,
        key=lambda m: (m.score, comparable_timestamp(m.listing_created_at), str(m.listing_id)),
        reverse=True,
    )


def filter_listings(listings: Iterable[Listing], options: MatchOptions) -> list[Listing]:
    """Apply the request's candidate pool filters."""
    selected = []
    for listing in listings:
        if options.filter_by_location and listing.location != options.filter_by_location:
            continue
        if options.filter_by_service and listing.service_type != options.filter_by_service:
            continue
        if (
            options.filter_by_min_guarantee is not None
            and (listing.minimum_guarantee or 0) < options.filter_by_min_guarantee
        ):
            continue
        selected.append(listing)
    return selected


class MatchingEngine:
    """
    Engine for ranking store listings for a talent.

    Pipeline per request:
    - Load user record and talent profile
    - Extract talent features
    - Load and filter published listings
    - Resolve the weight profile (preset, custom weights, behavioral deltas)
    - Score, rank and paginate
    """

    def __init__(
        self,
        data_source: Optional[MatchingDataSource] = None,
        settings: Optional[MatchingSettings] = None,
        weights: Optional[WeightProfile] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        """
        Initialize the matching engine.

        Args:
            data_source: Read interface to users, profiles, listings and history
                (defaults to the MongoDB adapter)
            settings: Matching policy settings (defaults to the global settings)
            weights: Base weight profile (defaults to the static defaults)
            today: Clock used for age calculation
        """
        self.data_source = data_source if data_source is not None else MongoMatchingDataSource()
        self.settings = settings or get_settings().matching
        self.base_weights = weights or WeightProfile.from_defaults()
        self._today = today or date.today
        self._executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="match-read")
        self.adjuster = BehavioralWeightAdjuster(
            self.data_source,
            executor=self._executor,
            timeout=self.settings.query_timeout_seconds,
            view_history_limit=self.settings.view_history_limit,
        )

    def _read(self, operation: str, func: Callable, *args: Any):
        return call_with_timeout(
            self._executor, self.settings.query_timeout_seconds, operation, func, *args
        )

    # -------------------------------------------------------------------------
    # Weights
    # -------------------------------------------------------------------------

    def resolve_weights(self, options: MatchOptions) -> WeightProfile:
        """
        Resolve the request's base weight profile.

        Presets replace the engine's base profile (guarantee wins when both
        are requested); custom weights then override individual dimensions.
        """
        weights = self.base_weights
        if options.prioritize_location:
            weights = WeightProfile.preset("location")
        if options.prioritize_guarantee:
            weights = WeightProfile.preset("guarantee")
        if options.custom_weights:
            weights = WeightProfile.from_mapping(options.custom_weights, base=weights)
        return weights

    # -------------------------------------------------------------------------
    # Matching
    # -------------------------------------------------------------------------

    def compute_matches(
        self,
        user_id: Any,
        options: Optional[MatchOptions] = None,
    ) -> list[MatchResult]:
        """
        Compute the ranked match list for a talent.

        Args:
            user_id: The talent's user ID
            options: Pagination, personalization, weight and filter options

        Returns:
            MatchResult list ordered by score, newest listing first on ties

        Raises:
            ProfileNotFound: The user record or talent profile is absent
            DataUnavailable: A collaborator read failed or timed out
            ConfigurationError: The requested weights are malformed
        """
        options = options or MatchOptions()
        logger.info(f"Computing matches for user {user_id}")

        # Resolve weights first so malformed options fail before any read
        weights = self.resolve_weights(options)

        user = self._read("get_user_by_id", self.data_source.get_user_by_id, user_id)
        if user is None:
            raise ProfileNotFound(user_id, missing="user record")
        profile = self._read("get_talent_profile", self.data_source.get_talent_profile, user_id)
        if profile is None:
            raise ProfileNotFound(user_id)

        features = extract_features(
            user,
            profile,
            options,
            today=self._today(),
            default_desired_guarantee=self.settings.default_desired_guarantee,
        )

        published = [
            listing
            for listing in self._read("get_published_listings", self.data_source.get_published_listings)
            if listing.is_published
        ]
        candidates = filter_listings(published, options)
        logger.debug(f"Candidate pool: {len(candidates)} of {len(published)} published listings")

        personalize = self.settings.personalize if options.personalize is None else options.personalize
        if personalize:
            arena = {str(listing.id): listing for listing in published}
            deltas = self.adjuster.compute_deltas(user_id, arena)
            weights = weights.with_deltas(deltas, self.settings.learning_factor)

        ranked = rank_matches(self._score_all(features, candidates, weights))

        limit = options.limit if options.limit is not None else self.settings.default_limit
        end = options.offset + limit if limit is not None else None
        results = ranked[options.offset:end]

        logger.info(
            f"Matched user {user_id} against {len(candidates)} listings, "
            f"top score {ranked[0].score if ranked else 'n/a'}"
        )
        audit_log(
            "matches_computed",
            {
                "user_id": str(user_id),
                "candidates": len(candidates),
                "returned": len(results),
                "personalized": personalize,
                "weights": weights.to_dict(),
            },
        )
        return results

    def match(self, user_id: Any, options: Optional[MatchOptions] = None) -> list[MatchResult]:
        """Alias of compute_matches."""
        return self.compute_matches(user_id, options)

    def _score_all(
        self,
        features: TalentFeatures,
        listings: list[Listing],
        weights: WeightProfile,
    ) -> list[MatchResult]:
        if len(listings) < self.settings.parallel_threshold:
            return [score_listing(features, listing, weights) for listing in listings]

        logger.debug(f"Scoring {len(listings)} listings on {self.settings.max_workers} workers")
        with ThreadPoolExecutor(max_workers=self.settings.max_workers) as pool:
            return list(pool.map(lambda listing: score_listing(features, listing, weights), listings))

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Release the read executor shared with the adjuster."""
        self.adjuster.close()
        self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> "MatchingEngine":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


# Singleton instance
_matching_engine: Optional[MatchingEngine] = None


def get_matching_engine() -> MatchingEngine:
    """Get the matching engine singleton instance."""
    global _matching_engine
    if _matching_engine is None:
        _matching_engine = MatchingEngine()
        atexit.register(close_matching_engine)
    return _matching_engine


def close_matching_engine() -> None:
    """Close the singleton engine, if one was created, and forget it."""
    global _matching_engine
    if _matching_engine is not None:
        _matching_engine.close()
        _matching_engine = None

"""
Behavioral weight adjustment.

Biases the weight profile toward what a talent has shown interest in:
applications count most, bookmarks ("keeps") less, views least. The
result is a per-dimension delta mapping capped at MAX_WEIGHT_DELTA.
"""

from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Iterable, Mapping, Optional

from talent_match.data.models import Interaction, Listing
from talent_match.data.repositories import MatchingDataSource
from talent_match.utils.config import get_settings
from talent_match.utils.constants import (
    APPLIED_INCREMENTS,
    HIGH_GUARANTEE_THRESHOLD,
    KEPT_INCREMENTS,
    MAX_WEIGHT_DELTA,
    STRICTEST_TATTOO_ACCEPTANCE,
    VIEWED_INCREMENTS,
    Dimension,
)
from talent_match.utils.logger import audit_log, get_logger

from .reads import call_with_timeout
from .weights import WeightProfile

logger = get_logger(__name__)


def empty_deltas() -> dict[Dimension, float]:
    """A delta mapping with every tracked dimension at zero."""
    return {dimension: 0.0 for dimension in Dimension}


def _pays_well(listing: Listing) -> bool:
    return (listing.minimum_guarantee or 0) > HIGH_GUARANTEE_THRESHOLD


def accumulate_deltas(
    applied: Iterable[Listing] = (),
    kept: Iterable[Listing] = (),
    viewed: Iterable[Listing] = (),
) -> dict[Dimension, float]:
    """
    Accumulate weight deltas from the listings a talent interacted with.

    Pure function over already-resolved listings; each total is clamped
    to [0, MAX_WEIGHT_DELTA].
    """
    deltas = empty_deltas()

    for listing in applied:
        requirements = listing.requirements
        deltas[Dimension.LOCATION] += APPLIED_INCREMENTS[Dimension.LOCATION]
        deltas[Dimension.SERVICE] += APPLIED_INCREMENTS[Dimension.SERVICE]
        if _pays_well(listing):
            deltas[Dimension.GUARANTEE] += APPLIED_INCREMENTS[Dimension.GUARANTEE]
        if requirements.preferred_look_types:
            deltas[Dimension.APPEARANCE] += APPLIED_INCREMENTS[Dimension.APPEARANCE]
        if requirements.preferred_hair_colors:
            deltas[Dimension.HAIR_COLOR] += APPLIED_INCREMENTS[Dimension.HAIR_COLOR]
        if requirements.tattoo_acceptance == STRICTEST_TATTOO_ACCEPTANCE:
            deltas[Dimension.TATTOO] += APPLIED_INCREMENTS[Dimension.TATTOO]

    for listing in kept:
        deltas[Dimension.LOCATION] += KEPT_INCREMENTS[Dimension.LOCATION]
        if _pays_well(listing):
            deltas[Dimension.GUARANTEE] += KEPT_INCREMENTS[Dimension.GUARANTEE]
        deltas[Dimension.SERVICE] += KEPT_INCREMENTS[Dimension.SERVICE]
        if listing.requirements.preferred_body_types:
            deltas[Dimension.BODY_TYPE] += KEPT_INCREMENTS[Dimension.BODY_TYPE]

    for _listing in viewed:
        for dimension, increment in VIEWED_INCREMENTS.items():
            deltas[dimension] += increment

    return {d: min(MAX_WEIGHT_DELTA, max(0.0, v)) for d, v in deltas.items()}


def resolve_listings(
    history: Iterable[Interaction],
    arena: Mapping[str, Listing],
) -> list[Listing]:
    """
    Map history entries to listings, once per listing.

    Entries whose listing is not in the arena are skipped.
    """
    seen: set[str] = set()
    resolved: list[Listing] = []
    for entry in history:
        key = str(entry.listing_id)
        if key in seen or key not in arena:
            continue
        seen.add(key)
        resolved.append(arena[key])
    return resolved


class BehavioralWeightAdjuster:
    """
    Computes per-user weight deltas from interaction history.

    History read failures never propagate: they are logged and the
    adjuster returns all-zero deltas so matching continues on defaults.
    """

    def __init__(
        self,
        data_source: MatchingDataSource,
        executor: Optional[Executor] = None,
        timeout: Optional[float] = None,
        view_history_limit: Optional[int] = None,
    ):
        """
        Initialize the adjuster.

        Args:
            data_source: Read interface for history and listings
            executor: Executor for bounded reads. When omitted a private one is
                created, and close() shuts it down
            timeout: Per-read timeout in seconds
            view_history_limit: Number of most recent views to consider
        """
        settings = get_settings().matching
        self.data_source = data_source
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=3, thread_name_prefix="history-read")
        self.timeout = timeout if timeout is not None else settings.query_timeout_seconds
        self.view_history_limit = (
            view_history_limit if view_history_limit is not None else settings.view_history_limit
        )

    def _read(self, operation: str, func, *args: Any):
        return call_with_timeout(self._executor, self.timeout, operation, func, *args)

    def compute_deltas(
        self,
        user_id: Any,
        listings: Optional[Mapping[str, Listing]] = None,
    ) -> dict[Dimension, float]:
        """
        Compute the weight delta mapping for a user.

        Args:
            user_id: The talent's user ID
            listings: Listings keyed by str(id); loaded from the data source
                when omitted

        Returns:
            Deltas for every tracked dimension, each in [0, 5.0]
        """
        try:
            applications = self._read("get_application_history", self.data_source.get_application_history, user_id)
            keeps = self._read("get_keep_list", self.data_source.get_keep_list, user_id)
            views = self._read(
                "get_view_history", self.data_source.get_view_history, user_id, self.view_history_limit
            )
            if listings is None:
                loaded = self._read("get_published_listings", self.data_source.get_published_listings)
                listings = {str(listing.id): listing for listing in loaded}
        except Exception as e:
            logger.error(f"Behavioral weight adjustment failed for user {user_id}, using defaults: {e}")
            return empty_deltas()

        deltas = accumulate_deltas(
            applied=resolve_listings(applications, listings),
            kept=resolve_listings(keeps, listings),
            viewed=resolve_listings(views, listings),
        )

        logger.debug(
            f"Weight deltas for user {user_id} from {len(applications)} applications, "
            f"{len(keeps)} keeps, {len(views)} views"
        )
        audit_log(
            "weights_adjusted",
            {"user_id": str(user_id), "deltas": {d.value: v for d, v in deltas.items() if v}},
            audit_type="PERSONALIZATION",
        )
        return deltas

    def adjusted_profile(
        self,
        user_id: Any,
        base: Optional[WeightProfile] = None,
        listings: Optional[Mapping[str, Listing]] = None,
        learning_factor: float = 1.0,
    ) -> WeightProfile:
        """Return ``base`` (the defaults if omitted) plus the user's deltas."""
        base = base or WeightProfile.from_defaults()
        deltas = self.compute_deltas(user_id, listings)
        return base.with_deltas(deltas, learning_factor)

    def close(self) -> None:
        """Shut down the read executor if this adjuster created it."""
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> "BehavioralWeightAdjuster":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

"""
Dimension scorers.

Each scorer is a pure, total function returning a score in [0, 1].
A missing constraint scores 1.0, except guarantee (0.5 neutral, 0.3
fallback) and location, which always compares two known places.
Constraint bounds of 0 are treated as absent, like None.
"""

from typing import Iterable, Optional, Sequence

from talent_match.utils.constants import (
    AGE_DECAY_YEARS,
    BODY_TYPE_LADDER,
    BODY_TYPE_MIN_SCORE,
    BODY_TYPE_STEP_PENALTY,
    CUP_SIZE_NEUTRAL_SCORE,
    GUARANTEE_FALLBACK_SCORE,
    GUARANTEE_NEUTRAL_SCORE,
    INVALID_SPEC_RANGE_SCORE,
    LOCATION_SCORES,
    NO_CONSTRAINT_SCORE,
    SPEC_DECAY_POINTS,
)


def _range_decay(
    value: float,
    lower: Optional[float],
    upper: Optional[float],
    window: float,
) -> float:
    """Linear decay to 0 over `window` units outside [lower, upper]."""
    if lower and value < lower:
        distance = lower - value
    elif upper and value > upper:
        distance = value - upper
    else:
        return 1.0
    return max(0.0, 1.0 - distance / window)


def score_age(
    age: Optional[int],
    age_min: Optional[int] = None,
    age_max: Optional[int] = None,
) -> float:
    """Score talent age against the listing's age range (10-year decay)."""
    if not age_min and not age_max:
        return NO_CONSTRAINT_SCORE
    if age is None:
        return NO_CONSTRAINT_SCORE
    return _range_decay(age, age_min, age_max, AGE_DECAY_YEARS)


def score_body_type(
    spec: Optional[int],
    spec_min: Optional[int] = None,
    spec_max: Optional[int] = None,
    cup_size_conditions: Optional[Sequence] = None,
) -> float:
    """
    Score the talent's spec (height - weight) against the listing's range.

    Uses a 20-point decay window. A closed range whose width is zero or
    negative scores 0.5 when the spec falls outside it.

    ``cup_size_conditions`` is accepted for cup-size specific overrides
    but does not change the result until profiles carry usable cup data.
    """
    if not spec_min and not spec_max:
        return NO_CONSTRAINT_SCORE
    if spec is None:
        return NO_CONSTRAINT_SCORE

    if spec_min and spec_max:
        if spec_min <= spec <= spec_max:
            return 1.0
        if spec_max - spec_min <= 0:
            return INVALID_SPEC_RANGE_SCORE

    return _range_decay(spec, spec_min, spec_max, SPEC_DECAY_POINTS)


def body_category(spec: int) -> str:
    """Map a spec value onto the body category ladder."""
    for category, minimum in BODY_TYPE_LADDER:
        if minimum is None or spec >= minimum:
            return category
    return BODY_TYPE_LADDER[-1][0]


def score_body_category(spec: Optional[int], preferred_body_types: Iterable[str]) -> float:
    """Score the talent's body category against a listing's preferred categories."""
    preferred = [p for p in preferred_body_types if p]
    if not preferred or spec is None:
        return NO_CONSTRAINT_SCORE

    ladder = [category for category, _ in BODY_TYPE_LADDER]
    talent_category = body_category(spec)
    if talent_category in preferred:
        return 1.0

    talent_index = ladder.index(talent_category)
    closest = len(ladder)
    for category in preferred:
        if category in ladder:
            closest = min(closest, abs(talent_index - ladder.index(category)))

    return max(BODY_TYPE_MIN_SCORE, 1.0 - closest * BODY_TYPE_STEP_PENALTY)


def score_cup_size(
    cup_size: Optional[str] = None,
    cup_size_conditions: Optional[Sequence] = None,
) -> float:
    """Placeholder: always neutral until cup-size compatibility data exists."""
    return CUP_SIZE_NEUTRAL_SCORE


def score_location(
    talent_location: Optional[str],
    listing_location: Optional[str],
    preferred_locations: Iterable[str] = (),
) -> float:
    """Exact area 1.0, a preferred area 0.8, anywhere else 0.2."""
    if talent_location is not None and talent_location == listing_location:
        return LOCATION_SCORES["exact"]
    if listing_location in set(preferred_locations):
        return LOCATION_SCORES["preferred"]
    return LOCATION_SCORES["other"]


def score_guarantee(
    desired_guarantee: int,
    minimum_guarantee: Optional[int] = None,
    maximum_guarantee: Optional[int] = None,
) -> float:
    """Score the listing's pay range against the talent's desired guarantee."""
    if not minimum_guarantee and not maximum_guarantee:
        return GUARANTEE_NEUTRAL_SCORE

    if maximum_guarantee and maximum_guarantee >= desired_guarantee:
        return 1.0
    if minimum_guarantee and minimum_guarantee >= desired_guarantee:
        return 1.0

    if minimum_guarantee:
        return min(1.0, max(0.0, minimum_guarantee / desired_guarantee))

    return GUARANTEE_FALLBACK_SCORE


def score_service(service_preferences: Iterable[str], service_type: Optional[str]) -> float:
    """Binary: 1.0 if the listing's service type is preferred, else 0.0."""
    return 1.0 if service_type in set(service_preferences) else 0.0

"""
Score aggregation and match explanation.
"""

import math
from typing import Mapping

from talent_match.data.models import Listing
from talent_match.utils.constants import (
    KEY_BENEFITS,
    MAX_BENEFIT_REASONS,
    REASON_THRESHOLD,
    SCORED_DIMENSIONS,
    STRONG_REASON_THRESHOLD,
    Dimension,
)

from .weights import WeightProfile


def aggregate(scores: Mapping[Dimension, float], weights: WeightProfile) -> float:
    """
    Weighted mean of the scored dimensions.

    Missing dimensions score 0. Returns 0.0 when every weight is zero.
    """
    total_weight = 0.0
    weighted_score = 0.0
    for dimension in SCORED_DIMENSIONS:
        weight = weights.weight(dimension)
        weighted_score += scores.get(dimension, 0.0) * weight
        total_weight += weight

    if total_weight <= 0:
        return 0.0
    return weighted_score / total_weight


def to_match_score(total_score: float) -> int:
    """Scale a [0, 1] score to the public 0-100 match score, rounding half up."""
    return max(0, min(100, math.floor(total_score * 100 + 0.5)))


def build_reasons(scores: Mapping[Dimension, float], listing: Listing) -> list[str]:
    """
    Generate human-readable match reasons.

    Dimension reasons come first in fixed order, each gated at > 0.8
    (SERVICE only at exactly 1.0); listing perks follow regardless of score.
    """
    reasons: list[str] = []

    age = scores.get(Dimension.AGE, 0.0)
    if age > STRONG_REASON_THRESHOLD:
        reasons.append("Fully meets the age requirement")
    elif age > REASON_THRESHOLD:
        reasons.append("Meets the age requirement")

    location = scores.get(Dimension.LOCATION, 0.0)
    if location == 1.0:
        reasons.append("Located in your current area")
    elif location > REASON_THRESHOLD:
        reasons.append("Located in one of your preferred areas")

    body_type = scores.get(Dimension.BODY_TYPE, 0.0)
    if body_type > STRONG_REASON_THRESHOLD:
        reasons.append("An ideal fit for the body type requirement")
    elif body_type > REASON_THRESHOLD:
        reasons.append("Meets the body type requirement")

    cup_size = scores.get(Dimension.CUP_SIZE, 0.0)
    if cup_size > STRONG_REASON_THRESHOLD:
        reasons.append("An ideal fit for the style requirement")
    elif cup_size > REASON_THRESHOLD:
        reasons.append("Meets the style requirement")

    guarantee = scores.get(Dimension.GUARANTEE, 0.0)
    if guarantee == 1.0:
        reasons.append("Pay meets or exceeds your desired guarantee")
    elif guarantee > STRONG_REASON_THRESHOLD:
        reasons.append("Pay satisfies your desired guarantee")
    elif guarantee > REASON_THRESHOLD:
        reasons.append("Pay is close to your desired guarantee")

    if scores.get(Dimension.SERVICE, 0.0) == 1.0:
        reasons.append("Matches your preferred service type")

    # Listing perks
    if listing.transportation_support:
        reasons.append("Transportation support available")
    if listing.housing_support:
        reasons.append("Housing support available")

    key_benefits = [b for b in listing.benefits if b in KEY_BENEFITS][:MAX_BENEFIT_REASONS]
    if key_benefits:
        reasons.append(f"Benefits: {'・'.join(key_benefits)}")

    if listing.special_offers and listing.special_offers[0].title:
        reasons.append(f"Special offer: {listing.special_offers[0].title}")

    return reasons

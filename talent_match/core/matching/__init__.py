"""Talent-listing matching engine module."""

from .adjuster import BehavioralWeightAdjuster, accumulate_deltas, empty_deltas
from .aggregator import aggregate, build_reasons, to_match_score
from .engine import (
    MatchingEngine,
    filter_listings,
    close_matching_engine,
    get_matching_engine,
    rank_matches,
    score_dimensions,
    score_listing,
)
from .features import TalentFeatures, calculate_age, extract_features, parse_birth_date
from .reads import call_with_timeout
from .weights import WeightProfile

__all__ = [
    "BehavioralWeightAdjuster",
    "MatchingEngine",
    "TalentFeatures",
    "WeightProfile",
    "accumulate_deltas",
    "aggregate",
    "build_reasons",
    "calculate_age",
    "close_matching_engine",
    "call_with_timeout",
    "empty_deltas",
    "extract_features",
    "filter_listings",
    "get_matching_engine",
    "parse_birth_date",
    "rank_matches",
    "score_dimensions",
    "score_listing",
    "to_match_score",
]

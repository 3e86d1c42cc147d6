"""
Talent feature extraction.

Derives the immutable scoring inputs for one matching run from the
user record, the talent profile and any request-level overrides.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, Optional

from talent_match.data.models import MatchOptions, TalentProfile, User

_BIRTH_DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d", "%Y%m%d")


@dataclass(frozen=True)
class TalentFeatures:
    """Scoring inputs for one talent, computed once per matching run."""

    age: Optional[int]
    body_spec: Optional[int]
    location: Optional[str]
    preferred_locations: frozenset[str] = field(default_factory=frozenset)
    desired_guarantee: int = 20000
    service_type_preferences: frozenset[str] = field(default_factory=frozenset)
    cup_size: Optional[str] = None


def _plain(value: Any) -> Any:
    """Enum members hash by name, so compare on raw values only."""
    return value.value if isinstance(value, Enum) else value


def _plain_set(values: Iterable[Any]) -> frozenset[str]:
    return frozenset(_plain(v) for v in values if v is not None)


def parse_birth_date(value: Any) -> Optional[date]:
    """Parse a stored birth date; None when missing or unparsable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    for fmt in _BIRTH_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def calculate_age(birth_date: date, today: date) -> int:
    """Whole years between birth date and today, calendar aware."""
    had_birthday = (today.month, today.day) >= (birth_date.month, birth_date.day)
    return today.year - birth_date.year - (0 if had_birthday else 1)


def extract_features(
    user: User,
    profile: TalentProfile,
    options: Optional[MatchOptions] = None,
    today: Optional[date] = None,
    default_desired_guarantee: int = 20000,
) -> TalentFeatures:
    """
    Build TalentFeatures for a talent.

    Args:
        user: User record (birth date, locations)
        profile: Talent profile (measurements, preferences)
        options: Request overrides for guarantee, service types and locations
        today: Reference date for age calculation (defaults to today)
        default_desired_guarantee: Fallback when no desired guarantee is known

    Returns:
        TalentFeatures for this matching run
    """
    options = options or MatchOptions()
    today = today or date.today()

    birth_date = parse_birth_date(user.birth_date)
    age = calculate_age(birth_date, today) if birth_date else None

    preferred_locations = _plain_set(user.preferred_locations) | _plain_set(options.locations)

    if options.desired_guarantee is not None:
        desired_guarantee = options.desired_guarantee
    elif profile.desired_guarantee:
        desired_guarantee = profile.desired_guarantee
    else:
        desired_guarantee = default_desired_guarantee

    if options.service_types is not None:
        service_types = _plain_set(options.service_types)
    else:
        service_types = _plain_set(profile.preferred_service_types)

    return TalentFeatures(
        age=age,
        body_spec=profile.spec,
        location=_plain(user.location),
        preferred_locations=preferred_locations,
        desired_guarantee=desired_guarantee,
        service_type_preferences=service_types,
        cup_size=profile.cup_size,
    )

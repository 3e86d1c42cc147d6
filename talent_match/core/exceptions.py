"""
Error taxonomy for the matching engine.

ProfileNotFound is an expected outcome for talents who haven't registered
a profile yet. DataUnavailable and ConfigurationError abort the request.
"""

from typing import Any, Optional


class MatchingError(Exception):
    """Base class for all matching engine errors."""


class ProfileNotFound(MatchingError):
    """The user record or its talent profile does not exist."""

    def __init__(self, user_id: Any, missing: str = "talent profile") -> None:
        self.user_id = user_id
        self.missing = missing
        super().__init__(f"No {missing} found for user {user_id}")


class DataUnavailable(MatchingError):
    """A collaborator read failed or did not complete within its timeout."""

    def __init__(self, operation: str, reason: Optional[str] = None) -> None:
        self.operation = operation
        self.reason = reason
        message = f"Data read '{operation}' failed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ConfigurationError(MatchingError):
    """A weight profile or engine option is malformed."""

"""
Utility modules for the matching engine.

This package contains shared utilities used across the application:
- config: Configuration management
- logger: Logging infrastructure
- constants: Scoring dimensions, weights and thresholds
"""

from talent_match.utils.config import (
    AppSettings,
    get_settings,
    reload_settings,
    ROOT_DIR,
)
from talent_match.utils.constants import (
    APP_DISPLAY_NAME,
    Dimension,
    ListingStatus,
    Prefecture,
    ServiceType,
    SCORED_DIMENSIONS,
    RESERVED_DIMENSIONS,
    DEFAULT_DIMENSION_WEIGHTS,
)
from talent_match.utils.logger import (
    setup_logging,
    get_logger,
    audit_log,
)

__all__ = [
    # Config
    "AppSettings",
    "get_settings",
    "reload_settings",
    "ROOT_DIR",
    # Constants
    "APP_DISPLAY_NAME",
    "Dimension",
    "ListingStatus",
    "Prefecture",
    "ServiceType",
    "SCORED_DIMENSIONS",
    "RESERVED_DIMENSIONS",
    "DEFAULT_DIMENSION_WEIGHTS",
    # Logger
    "setup_logging",
    "get_logger",
    "audit_log",
]

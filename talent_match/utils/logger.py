"""
Logging infrastructure for the matching engine.

Uses Loguru for console and rotating file output, plus a separate
audit sink for matching decisions.
"""

import sys
from typing import Any, Optional

from loguru import logger

from talent_match.utils.config import get_settings


def setup_logging(console_level: Optional[str] = None) -> None:
    """
    Configure application-wide logging.

    Sets up console and file logging with rotation and retention,
    and an audit log that only receives records bound with ``audit_type``.

    Args:
        console_level: Overrides the configured level for the console sink
            only. The file and audit sinks keep their levels.
    """
    settings = get_settings()
    log_settings = settings.logging

    # Remove default handler
    logger.remove()

    # diagnose=False outside development so stack traces don't dump locals
    enable_diagnose = settings.debug and settings.environment == "development"

    if log_settings.console_output:
        logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>",
            level=console_level or log_settings.level,
            colorize=True,
            backtrace=True,
            diagnose=enable_diagnose,
        )

    log_file = log_settings.file_path
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_file,
        format=log_settings.format,
        level=log_settings.level,
        rotation=log_settings.rotation,
        retention=log_settings.retention,
        compression="zip",
        backtrace=True,
        diagnose=enable_diagnose,
        enqueue=True,
    )

    audit_log_path = log_file.parent / "audit.log"
    logger.add(
        audit_log_path,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[audit_type]} | {message}",
        level="INFO",
        filter=lambda record: "audit_type" in record["extra"],
        rotation="1 week",
        retention="1 year",
        compression="zip",
        enqueue=True,
    )

    logger.info(f"Logging initialized - Level: {log_settings.level}")


def get_logger(name: str) -> Any:
    """
    Get a logger instance with the specified name.

    Args:
        name: The name for the logger (typically __name__)

    Returns:
        A bound loguru logger
    """
    return logger.bind(name=name)


# Credentials, matched anywhere in a key
_SECRET_MARKERS = ("password", "passwd", "secret", "token", "api_key", "credential")

# Talent personal data, matched on the whole key ("weights" is not "weight")
_PERSONAL_FIELDS = frozenset({"birth_date", "height", "weight", "bust", "email", "phone", "real_name"})

REDACTED = "***REDACTED***"


def _is_sensitive(key: Any) -> bool:
    lowered = str(key).lower()
    return lowered in _PERSONAL_FIELDS or any(marker in lowered for marker in _SECRET_MARKERS)


def _sanitize_for_logging(data: Any) -> Any:
    """Redact credentials and talent personal data before they reach a sink."""
    if isinstance(data, dict):
        return {k: REDACTED if _is_sensitive(k) else _sanitize_for_logging(v) for k, v in data.items()}
    elif isinstance(data, (list, tuple)):
        return [_sanitize_for_logging(item) for item in data]
    return data


def audit_log(
    action: str,
    details: dict[str, Any],
    audit_type: str = "DECISION",
) -> None:
    """
    Log an audit entry.

    Args:
        action: The action being audited (e.g., "matches_computed")
        details: Dictionary of relevant details
        audit_type: Type of audit entry (DECISION, PERSONALIZATION, ACCESS)
    """
    sanitized_details = _sanitize_for_logging(details)
    logger.bind(audit_type=audit_type).info(f"{action} | {sanitized_details}")


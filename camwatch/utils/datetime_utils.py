"""
Centralized DateTime Utilities
==============================

Provides consistent datetime handling across the application.

Functions:
- utc_now(): timezone-aware UTC datetime (for anything persisted)
- epoch_millis(): integer milliseconds since the epoch (upload object names)
- ensure_utc(): normalize naive/aware datetimes to UTC
- parse_iso(): safely parse ISO 8601 string to datetime
- coerce_datetime(): accept a datetime or an ISO string from a store record
"""
import logging
from datetime import datetime, timezone as dt_timezone, tzinfo
from typing import Any, Optional
import zoneinfo

from ..core.config import get_settings

logger = logging.getLogger(__name__)


def _get_app_timezone() -> tzinfo:
    """
    Get the application timezone from config.
    Returns timezone object (defaults to UTC if invalid).
    """
    tz_str = get_settings().local_timezone

    if tz_str.upper() == "UTC":
        return dt_timezone.utc

    try:
        return zoneinfo.ZoneInfo(tz_str)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Invalid timezone '{tz_str}', falling back to UTC")
        return dt_timezone.utc


def utc_now() -> datetime:
    """
    Get current UTC time as a timezone-aware datetime.

    Use this for all timestamps that will be persisted to the store.
    """
    return datetime.now(dt_timezone.utc)


def epoch_millis(dt: Optional[datetime] = None) -> int:
    """Milliseconds since the Unix epoch for dt (default: now)."""
    dt = ensure_utc(dt) if dt is not None else utc_now()
    return int(dt.timestamp() * 1000)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime into a timezone-aware UTC datetime.

    - If dt is None -> None
    - If dt is naive -> assume it represents UTC (this matches MongoDB/PyMongo behavior)
    - If dt is aware -> convert to UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=dt_timezone.utc)
    return dt.astimezone(dt_timezone.utc)


def parse_iso(dt_str: Optional[str]) -> Optional[datetime]:
    """
    Parse ISO 8601 string to datetime object.
    Handles both timezone-aware and naive strings.
    If string is naive, assumes application timezone.

    Args:
        dt_str: ISO 8601 string (e.g., "2025-12-24T10:30:00Z" or "2025-12-24T10:30:00+05:30")

    Returns:
        timezone-aware datetime object, or None if parsing fails
    """
    if not dt_str:
        return None

    try:
        normalized = dt_str.replace("Z", "+00:00")
        dt = datetime.fromisoformat(normalized)

        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=_get_app_timezone())

        return dt
    except (TypeError, ValueError):
        return None


def coerce_datetime(value: Any) -> Optional[datetime]:
    """
    Read a timestamp column from a store record.

    MongoDB hands back (naive, UTC) datetimes; JSON payloads carry ISO strings.
    Anything else is treated as missing.
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, str):
        return parse_iso(value)
    return None

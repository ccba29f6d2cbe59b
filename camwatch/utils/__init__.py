"""Utility modules for camwatch."""

from .datetime_utils import (
    coerce_datetime,
    ensure_utc,
    epoch_millis,
    parse_iso,
    utc_now,
)

__all__ = [
    "coerce_datetime",
    "ensure_utc",
    "epoch_millis",
    "parse_iso",
    "utc_now",
]

"""Notifications infrastructure for live views pushed over WebSocket"""

from .live_view_registry import LiveViewRegistry

__all__ = [
    "LiveViewRegistry",
]

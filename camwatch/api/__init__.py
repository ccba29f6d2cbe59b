"""
API layer for camwatch.

Exposes HTTP and WebSocket endpoints under /api/v1 (cameras, notifications,
video analysis) and the public blob storage route.
"""

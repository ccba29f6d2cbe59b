"""
camwatch: camera monitoring and video analysis backend.

This package contains the FastAPI app entry point (main.py), API routes,
domain models, the change-feed/view-state synchronization layer, the video
upload pipeline and infrastructure (MongoDB store, processing service client).
"""

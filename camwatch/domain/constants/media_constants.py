"""
Shared constants for video uploads.

Defaults only; the effective allow-set and ceiling come from core.config so
deployments can change them without a code change.
"""

# -----------------------------------------------------------------------------
# Video uploads (analysis jobs)
# -----------------------------------------------------------------------------
DEFAULT_ALLOWED_VIDEO_MIME = frozenset({"video/mp4", "video/avi"})
DEFAULT_MAX_UPLOAD_BYTES = 100 * 1024 * 1024

# Cache lifetime sent with uploaded objects
UPLOAD_CACHE_CONTROL_SECONDS = 3600

# Live stream of a registered camera (the camera serves MJPEG over plain HTTP)
CAMERA_STREAM_URL_TEMPLATE = "http://{ip_address}"

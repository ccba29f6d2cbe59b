"""Constants for domain model field names"""

from .tables import Tables
from .camera_fields import CameraFields
from .notification_fields import NotificationFields
from .video_analysis_fields import VideoAnalysisFields, AnalysisResultFields
from .media_constants import (
    CAMERA_STREAM_URL_TEMPLATE,
    DEFAULT_ALLOWED_VIDEO_MIME,
    DEFAULT_MAX_UPLOAD_BYTES,
    UPLOAD_CACHE_CONTROL_SECONDS,
)

__all__ = [
    "Tables",
    "CameraFields",
    "NotificationFields",
    "VideoAnalysisFields",
    "AnalysisResultFields",
    "CAMERA_STREAM_URL_TEMPLATE",
    "DEFAULT_ALLOWED_VIDEO_MIME",
    "DEFAULT_MAX_UPLOAD_BYTES",
    "UPLOAD_CACHE_CONTROL_SECONDS",
]

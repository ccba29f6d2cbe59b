from .camera_dto import CameraCreateRequest, CameraResponse
from .notification_dto import NotificationListResponse, NotificationResponse
from .video_analysis_dto import (
    JobStatusResponse,
    LabelledValue,
    StatusIconResponse,
    UploadResponse,
    VideoAnalysisListResponse,
    VideoAnalysisResponse,
)

__all__ = [
    "CameraCreateRequest",
    "CameraResponse",
    "NotificationResponse",
    "NotificationListResponse",
    "StatusIconResponse",
    "LabelledValue",
    "JobStatusResponse",
    "VideoAnalysisResponse",
    "VideoAnalysisListResponse",
    "UploadResponse",
]

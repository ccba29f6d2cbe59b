from .camera import (
    CreateCameraUseCase,
    ListCamerasUseCase,
    GetCameraUseCase,
    DeleteCameraUseCase,
)
from .notification import (
    ListNotificationsUseCase,
    camera_notifications_view,
    user_notifications_view,
)
from .video_analysis import (
    ListAnalysesUseCase,
    GetAnalysisUseCase,
    UploadVideoUseCase,
    user_analyses_view,
)

__all__ = [
    "CreateCameraUseCase",
    "ListCamerasUseCase",
    "GetCameraUseCase",
    "DeleteCameraUseCase",
    "ListNotificationsUseCase",
    "user_notifications_view",
    "camera_notifications_view",
    "ListAnalysesUseCase",
    "GetAnalysisUseCase",
    "UploadVideoUseCase",
    "user_analyses_view",
]

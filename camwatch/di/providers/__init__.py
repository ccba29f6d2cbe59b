from .database_provider import DatabaseProvider
from .context_provider import ContextProvider
from .camera_provider import CameraProvider
from .notification_provider import NotificationProvider
from .video_analysis_provider import VideoAnalysisProvider


__all__ = [
    "DatabaseProvider",
    "ContextProvider",
    "CameraProvider",
    "NotificationProvider",
    "VideoAnalysisProvider",
]

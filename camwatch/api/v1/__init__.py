from .camera_controller import router as camera_router
from .notifications_controller import router as notifications_router
from .video_analysis_controller import router as video_analysis_router
from .storage_controller import router as storage_router


__all__ = ["camera_router", "notifications_router", "video_analysis_router", "storage_router"]

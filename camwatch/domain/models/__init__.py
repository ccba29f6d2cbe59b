from .camera import Camera
from .notification import Notification
from .video_analysis import (
    AnalysisDetails,
    AnalysisResults,
    FrameScore,
    JobStatus,
    VideoAnalysisJob,
    new_job_record,
)

__all__ = [
    "Camera",
    "Notification",
    "AnalysisDetails",
    "AnalysisResults",
    "FrameScore",
    "JobStatus",
    "VideoAnalysisJob",
    "new_job_record",
]

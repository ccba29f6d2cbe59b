# Standard library imports
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Any, Dict, List

# Local application imports
from ..constants import VideoAnalysisFields, AnalysisResultFields
from ...utils.datetime_utils import coerce_datetime


class JobStatus(str, Enum):
    """Lifecycle of a video analysis job. Only the processing service moves it past PENDING."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.ERROR)

    @classmethod
    def parse(cls, value: Any) -> Optional["JobStatus"]:
        try:
            return cls(value)
        except ValueError:
            return None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class FrameScore:
    timestamp: float
    confidence: Optional[float]


@dataclass(frozen=True)
class AnalysisDetails:
    type: Optional[str] = None
    severity: Optional[float] = None
    location: Optional[str] = None


@dataclass(frozen=True)
class AnalysisResults:
    """Structured results written by the processing service once a job completes."""
    violence_detected: bool
    confidence: Optional[float] = None
    timestamp: Optional[str] = None
    details: Optional[AnalysisDetails] = None
    frames: List[FrameScore] = field(default_factory=list)

    @classmethod
    def from_record(cls, record: Optional[Dict[str, Any]]) -> Optional["AnalysisResults"]:
        if not isinstance(record, dict):
            return None

        details = None
        raw_details = record.get(AnalysisResultFields.DETAILS)
        if isinstance(raw_details, dict):
            details = AnalysisDetails(
                type=raw_details.get(AnalysisResultFields.DETAIL_TYPE),
                severity=_as_float(raw_details.get(AnalysisResultFields.DETAIL_SEVERITY)),
                location=raw_details.get(AnalysisResultFields.DETAIL_LOCATION),
            )

        frames: List[FrameScore] = []
        for raw_frame in record.get(AnalysisResultFields.FRAMES) or []:
            if not isinstance(raw_frame, dict):
                continue
            frame_ts = _as_float(raw_frame.get(AnalysisResultFields.FRAME_TIMESTAMP))
            if frame_ts is None:
                continue
            frames.append(
                FrameScore(
                    timestamp=frame_ts,
                    confidence=_as_float(raw_frame.get(AnalysisResultFields.FRAME_CONFIDENCE)),
                )
            )

        return cls(
            # Only a real boolean true counts as a detection
            violence_detected=record.get(AnalysisResultFields.VIOLENCE_DETECTED) is True,
            confidence=_as_float(record.get(AnalysisResultFields.CONFIDENCE)),
            timestamp=record.get(AnalysisResultFields.TIMESTAMP),
            details=details,
            frames=frames,
        )


@dataclass(frozen=True)
class VideoAnalysisJob:
    """
    One submitted video tracked through its analysis lifecycle.

    `status` keeps the raw persisted value so that an unknown status coming
    from the processing service is displayed instead of rejected.
    """
    id: str
    user_id: str
    video_url: str
    status: str
    results: Optional[AnalysisResults]
    created_at: Optional[datetime]

    @property
    def job_status(self) -> Optional[JobStatus]:
        return JobStatus.parse(self.status)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "VideoAnalysisJob":
        return cls(
            id=str(record[VideoAnalysisFields.ID]),
            user_id=record.get(VideoAnalysisFields.USER_ID, ""),
            video_url=record.get(VideoAnalysisFields.VIDEO_URL, ""),
            status=record.get(VideoAnalysisFields.STATUS) or JobStatus.PENDING.value,
            results=AnalysisResults.from_record(record.get(VideoAnalysisFields.RESULTS)),
            created_at=coerce_datetime(record.get(VideoAnalysisFields.CREATED_AT)),
        )


def new_job_record(user_id: str, video_url: str, created_at: datetime) -> Dict[str, Any]:
    """Record for a freshly uploaded video: pending, no results yet."""
    if not user_id:
        raise ValueError("Owner user ID is required")
    if not video_url:
        raise ValueError("Video URL is required")
    return {
        VideoAnalysisFields.USER_ID: user_id,
        VideoAnalysisFields.VIDEO_URL: video_url,
        VideoAnalysisFields.STATUS: JobStatus.PENDING.value,
        VideoAnalysisFields.RESULTS: None,
        VideoAnalysisFields.CREATED_AT: created_at,
    }

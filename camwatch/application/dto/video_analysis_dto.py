"""DTOs for video analysis jobs and their displayed status."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class StatusIconResponse(BaseModel):
    name: str
    tone: str
    spinning: bool = False


class LabelledValue(BaseModel):
    """One `label: value` row of the result view (detail or frame line)."""
    label: str
    value: str


class JobStatusResponse(BaseModel):
    """What the analysis list and result view render for a job."""
    icon: StatusIconResponse
    label: str
    detection_label: Optional[str] = None
    detection_summary: Optional[str] = None
    confidence_label: Optional[str] = None
    details: List[LabelledValue] = Field(default_factory=list)
    frames: List[LabelledValue] = Field(default_factory=list)


class VideoAnalysisResponse(BaseModel):
    id: str
    video_url: str
    status: str
    created_at: Optional[datetime] = None
    view: JobStatusResponse


class VideoAnalysisListResponse(BaseModel):
    total: int = 0
    items: List[VideoAnalysisResponse] = Field(default_factory=list)


class UploadResponse(BaseModel):
    """Response for the upload endpoint - the created (pending) job."""
    job_id: str
    status: str = "pending"

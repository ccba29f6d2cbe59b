from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CameraCreateRequest(BaseModel):
    """DTO for camera creation request"""
    camera_name: str = Field(..., min_length=1)
    ip_address: str = Field(..., min_length=1)


class CameraResponse(BaseModel):
    """DTO for camera response"""
    id: str
    camera_name: str
    ip_address: str
    stream_url: str
    created_at: Optional[datetime] = None

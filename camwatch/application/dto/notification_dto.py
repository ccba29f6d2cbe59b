from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class NotificationResponse(BaseModel):
    id: str
    camera_id: Optional[str] = None
    camera_name: Optional[str] = None
    notification_text: str
    timestamp: Optional[datetime] = None


class NotificationListResponse(BaseModel):
    total: int = 0
    items: List[NotificationResponse] = Field(default_factory=list)

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Any, Dict

from ..constants import NotificationFields
from ...utils.datetime_utils import coerce_datetime


@dataclass(frozen=True)
class Notification:
    """
    Domain model for a Notification.

    Written by the remote store when a camera raises an event; this system
    only reads them. `camera_id` is a back-reference for display and
    filtering, never an ownership link.
    """

    id: str
    user_id: str
    notification_text: str
    timestamp: Optional[datetime]
    camera_id: Optional[str] = None
    camera_name: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Notification":
        camera_name = record.get(NotificationFields.CAMERA_NAME)
        # Joined shape: {"cameras": {"camera_name": ...}}
        joined = record.get("cameras")
        if camera_name is None and isinstance(joined, dict):
            camera_name = joined.get("camera_name")
        return cls(
            id=str(record[NotificationFields.ID]),
            user_id=record.get(NotificationFields.USER_ID, ""),
            notification_text=record.get(NotificationFields.NOTIFICATION_TEXT, ""),
            timestamp=coerce_datetime(record.get(NotificationFields.TIMESTAMP)),
            camera_id=record.get(NotificationFields.CAMERA_ID) or None,
            camera_name=camera_name,
        )

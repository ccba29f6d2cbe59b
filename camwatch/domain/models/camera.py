# Standard library imports
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any

# Local application imports
from ..constants import CameraFields, CAMERA_STREAM_URL_TEMPLATE
from ...utils.datetime_utils import coerce_datetime


@dataclass
class Camera:
    """
    Pure domain model for Camera entity - no external dependencies.

    A camera belongs to the user who registered it. It is created and deleted,
    never updated.
    """
    id: Optional[str]
    user_id: str
    camera_name: str
    ip_address: str
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        """Business validations"""
        if not self.user_id:
            raise ValueError("Owner user ID is required")
        if not self.camera_name or len(self.camera_name.strip()) < 1:
            raise ValueError("Camera name is required")
        if not self.ip_address or len(self.ip_address.strip()) < 1:
            raise ValueError("IP address is required")

    @property
    def stream_url(self) -> str:
        return CAMERA_STREAM_URL_TEMPLATE.format(ip_address=self.ip_address.strip())

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Camera":
        return cls(
            id=record.get(CameraFields.ID),
            user_id=record.get(CameraFields.USER_ID, ""),
            camera_name=record.get(CameraFields.CAMERA_NAME, ""),
            ip_address=record.get(CameraFields.IP_ADDRESS, ""),
            created_at=coerce_datetime(record.get(CameraFields.CREATED_AT)),
        )

    def to_record(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            CameraFields.USER_ID: self.user_id,
            CameraFields.CAMERA_NAME: self.camera_name.strip(),
            CameraFields.IP_ADDRESS: self.ip_address.strip(),
        }
        if self.id:
            record[CameraFields.ID] = self.id
        if self.created_at:
            record[CameraFields.CREATED_AT] = self.created_at
        return record

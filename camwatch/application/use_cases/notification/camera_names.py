# Standard library imports
import asyncio
import dataclasses
import logging
from typing import Callable, Dict, Optional, Set

# Local application imports
from ....core.exceptions import CamwatchError
from ....domain.constants import CameraFields, Tables
from ....domain.models import Notification
from ....domain.repositories import Filter, Record
from ...services.context import ClientContext

logger = logging.getLogger(__name__)


class CameraNameJoin:
    """
    Fills in `camera_name` on notifications of one user.

    The names are loaded with the user's cameras on every fetch. A live
    notification from a camera registered after that fetch triggers one lookup
    of that camera; once it resolves, `on_resolved(camera_id)` is called so the
    owner can re-apply the name. A camera that does not exist (or was deleted)
    leaves `camera_name=None`.
    """

    def __init__(
        self,
        context: ClientContext,
        user_id: str,
        on_resolved: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.context = context
        self.user_id = user_id
        self.on_resolved = on_resolved
        self._names: Dict[str, str] = {}
        self._looked_up: Set[str] = set()
        self._lookups: Set[asyncio.Task] = set()

    async def refresh(self) -> None:
        records = await self.context.store.query(
            Tables.CAMERAS,
            filters=[Filter(CameraFields.USER_ID, self.user_id)],
        )
        self._names = {
            str(record[CameraFields.ID]): record.get(CameraFields.CAMERA_NAME)
            for record in records
            if record.get(CameraFields.ID)
        }
        self._looked_up.clear()

    def apply(self, notification: Notification) -> Notification:
        if notification.camera_name or not notification.camera_id:
            return notification
        name = self._names.get(notification.camera_id)
        if name is None:
            return notification
        return dataclasses.replace(notification, camera_name=name)

    def decode(self, record: Record) -> Notification:
        return self.apply(Notification.from_record(record))

    def decode_live(self, record: Record) -> Notification:
        """Like decode, and schedules a lookup for a camera not known yet."""
        notification = self.decode(record)
        camera_id = notification.camera_id
        if (
            notification.camera_name is None
            and camera_id
            and camera_id not in self._names
            and camera_id not in self._looked_up
        ):
            self._looked_up.add(camera_id)
            task = asyncio.get_running_loop().create_task(self._resolve(camera_id))
            self._lookups.add(task)
            task.add_done_callback(self._lookups.discard)
        return notification

    async def _resolve(self, camera_id: str) -> None:
        try:
            records = await self.context.store.query(
                Tables.CAMERAS,
                filters=[
                    Filter(CameraFields.ID, camera_id),
                    Filter(CameraFields.USER_ID, self.user_id),
                ],
            )
        except CamwatchError as e:
            # Allow another attempt with the next notification of this camera
            self._looked_up.discard(camera_id)
            logger.warning(f"Could not look up camera {camera_id} for notifications: {e}")
            return

        name = records[0].get(CameraFields.CAMERA_NAME) if records else None
        if name is None:
            return
        self._names[camera_id] = name
        if self.on_resolved is not None:
            self.on_resolved(camera_id)

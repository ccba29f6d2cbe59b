# Standard library imports
from typing import List, Optional

# Local application imports
from ....domain.constants import NotificationFields, Tables
from ....domain.models import Notification
from ....domain.repositories import Filter, Identity, Order
from ...dto.notification_dto import NotificationListResponse, NotificationResponse
from ...services.context import ClientContext
from ..camera.get_camera import find_owned_camera
from .camera_names import CameraNameJoin


def to_notification_response(notification: Notification) -> NotificationResponse:
    return NotificationResponse(
        id=notification.id,
        camera_id=notification.camera_id,
        camera_name=notification.camera_name,
        notification_text=notification.notification_text,
        timestamp=notification.timestamp,
    )


async def fetch_notifications(
    context: ClientContext,
    join: CameraNameJoin,
    camera_id: Optional[str] = None,
) -> List[Notification]:
    """
    Newest-first notifications of the join's user, or of one camera when
    camera_id is given, with camera names filled in.
    """
    if camera_id is not None:
        filters = [Filter(NotificationFields.CAMERA_ID, camera_id)]
    else:
        filters = [Filter(NotificationFields.USER_ID, join.user_id)]

    records = await context.store.query(
        Tables.NOTIFICATIONS,
        filters=filters,
        order=Order(NotificationFields.TIMESTAMP, descending=True),
    )
    await join.refresh()
    return [join.decode(record) for record in records]


class ListNotificationsUseCase:
    """Use case for the one-shot notification list of a user or one of their cameras"""

    def __init__(self, context: ClientContext) -> None:
        self.context = context

    async def execute(
        self,
        identity: Identity,
        camera_id: Optional[str] = None,
    ) -> NotificationListResponse:
        """
        Raises:
            NotFoundError: If camera_id is given and the caller does not own it
        """
        if camera_id is not None:
            await find_owned_camera(self.context, camera_id, identity)

        join = CameraNameJoin(self.context, identity.user_id)
        notifications = await fetch_notifications(self.context, join, camera_id)
        items = [to_notification_response(n) for n in notifications]
        return NotificationListResponse(total=len(items), items=items)

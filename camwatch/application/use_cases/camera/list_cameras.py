# Standard library imports
from typing import List

# Local application imports
from ....domain.constants import CameraFields, Tables
from ....domain.models.camera import Camera
from ....domain.repositories import Filter, Identity, Order
from ...dto.camera_dto import CameraResponse
from ...services.context import ClientContext
from ._mapping import to_camera_response


class ListCamerasUseCase:
    """Use case for listing cameras for a user"""

    def __init__(self, context: ClientContext) -> None:
        self.context = context

    async def execute(self, identity: Identity) -> List[CameraResponse]:
        """
        List all cameras owned by a user, newest first
        """
        records = await self.context.store.query(
            Tables.CAMERAS,
            filters=[Filter(CameraFields.USER_ID, identity.user_id)],
            order=Order(CameraFields.CREATED_AT, descending=True),
        )
        return [to_camera_response(Camera.from_record(record)) for record in records]

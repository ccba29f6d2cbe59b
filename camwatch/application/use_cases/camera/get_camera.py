# Standard library imports
from typing import Optional

# Local application imports
from ....core.exceptions import NotFoundError
from ....domain.constants import CameraFields, Tables
from ....domain.models.camera import Camera
from ....domain.repositories import Filter, Identity
from ...dto.camera_dto import CameraResponse
from ...services.context import ClientContext
from ._mapping import to_camera_response


async def find_owned_camera(context: ClientContext, camera_id: str, identity: Identity) -> Camera:
    """
    Raises:
        NotFoundError: If the camera does not exist or belongs to someone else
    """
    records = await context.store.query(
        Tables.CAMERAS,
        filters=[Filter(CameraFields.ID, camera_id)],
    )
    camera: Optional[Camera] = Camera.from_record(records[0]) if records else None

    if camera is None or camera.user_id != identity.user_id:
        raise NotFoundError("Camera not found")
    return camera


class GetCameraUseCase:
    """Use case for getting a camera by ID"""

    def __init__(self, context: ClientContext) -> None:
        self.context = context

    async def execute(self, camera_id: str, identity: Identity) -> CameraResponse:
        """
        Get a camera by ID

        Args:
            camera_id: ID of the camera
            identity: The caller (for authorization check)

        Raises:
            NotFoundError: If camera not found or doesn't belong to the caller
        """
        camera = await find_owned_camera(self.context, camera_id, identity)
        return to_camera_response(camera)

# Standard library imports
import logging

# Local application imports
from ....core.exceptions import BestEffortNotifyError, ValidationError
from ....domain.constants import Tables
from ....domain.models.camera import Camera
from ....domain.repositories import Identity
from ...dto.camera_dto import CameraCreateRequest, CameraResponse
from ...services.context import ClientContext
from ._mapping import to_camera_response

logger = logging.getLogger(__name__)


class CreateCameraUseCase:
    """Use case for registering a new camera"""

    def __init__(self, context: ClientContext) -> None:
        self.context = context

    async def execute(
        self,
        request: CameraCreateRequest,
        identity: Identity,
    ) -> CameraResponse:
        """
        Store a camera for the caller, then tell the processing service about it.

        Args:
            request: Camera creation request
            identity: The authenticated owner

        Returns:
            CameraResponse with the stored camera

        Raises:
            ValidationError: If the name or address is blank
            TransportError: If the camera could not be stored
        """
        try:
            new_camera = Camera(
                id=None,
                user_id=identity.user_id,
                camera_name=request.camera_name,
                ip_address=request.ip_address,
            )
        except ValueError as e:
            raise ValidationError(str(e), reason="invalid_camera") from e

        record = await self.context.store.insert(Tables.CAMERAS, new_camera.to_record())
        saved_camera = Camera.from_record(record)
        logger.info(f"Stored camera {saved_camera.id} for user {identity.user_id}")

        notifier = self.context.notifier
        if notifier is None:
            logger.info(
                f"Processing service notifier not available. Camera {saved_camera.id} saved locally only."
            )
        else:
            try:
                await notifier.register_camera(
                    user_id=identity.user_id,
                    camera_id=saved_camera.id or "",
                    camera_url=saved_camera.stream_url,
                )
            except BestEffortNotifyError as e:
                logger.error(
                    f"Camera {saved_camera.id} saved locally but processing service registration failed: {e}"
                )
                # Continue execution - camera is saved even if registration fails
            except Exception as e:
                logger.error(
                    f"Unexpected error registering camera {saved_camera.id} with processing service: {e}",
                    exc_info=True
                )

        return to_camera_response(saved_camera)

# Standard library imports
import logging

# Local application imports
from ....domain.constants import Tables
from ....domain.repositories import Identity
from ...services.context import ClientContext
from .get_camera import find_owned_camera

logger = logging.getLogger(__name__)


class DeleteCameraUseCase:
    """Use case for deleting a camera the caller owns"""

    def __init__(self, context: ClientContext) -> None:
        self.context = context

    async def execute(self, camera_id: str, identity: Identity) -> None:
        """
        Raises:
            NotFoundError: If camera not found or doesn't belong to the caller
        """
        await find_owned_camera(self.context, camera_id, identity)
        await self.context.store.delete(Tables.CAMERAS, camera_id)
        logger.info(f"Deleted camera {camera_id} for user {identity.user_id}")

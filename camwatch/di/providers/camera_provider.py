from typing import TYPE_CHECKING

from ...application.use_cases.camera import (
    CreateCameraUseCase,
    DeleteCameraUseCase,
    GetCameraUseCase,
    ListCamerasUseCase,
)

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class CameraProvider:
    """Camera use case provider - registers all camera-related use cases"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all camera use cases.
        Use cases are created on-demand via factories taking the request's ClientContext.
        """
        container.register_factory(CreateCameraUseCase, lambda context: CreateCameraUseCase(context))
        container.register_factory(ListCamerasUseCase, lambda context: ListCamerasUseCase(context))
        container.register_factory(GetCameraUseCase, lambda context: GetCameraUseCase(context))
        container.register_factory(DeleteCameraUseCase, lambda context: DeleteCameraUseCase(context))

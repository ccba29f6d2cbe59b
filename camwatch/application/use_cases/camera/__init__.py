from .create_camera import CreateCameraUseCase
from .list_cameras import ListCamerasUseCase
from .get_camera import GetCameraUseCase
from .delete_camera import DeleteCameraUseCase

__all__ = [
    "CreateCameraUseCase",
    "ListCamerasUseCase",
    "GetCameraUseCase",
    "DeleteCameraUseCase",
]

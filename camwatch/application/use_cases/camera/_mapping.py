from ....domain.models.camera import Camera
from ...dto.camera_dto import CameraResponse


def to_camera_response(camera: Camera) -> CameraResponse:
    return CameraResponse(
        id=camera.id or "",
        camera_name=camera.camera_name,
        ip_address=camera.ip_address,
        stream_url=camera.stream_url,
        created_at=camera.created_at,
    )

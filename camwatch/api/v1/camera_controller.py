# Standard library imports
from typing import List, Optional

# External package imports
from fastapi import APIRouter, Depends, Query, Response, WebSocket, status

# Local application imports
from ...application.dto.camera_dto import CameraCreateRequest, CameraResponse
from ...application.dto.notification_dto import NotificationListResponse
from ...application.services.context import ClientContext
from ...application.use_cases.camera import (
    CreateCameraUseCase,
    DeleteCameraUseCase,
    GetCameraUseCase,
    ListCamerasUseCase,
)
from ...application.use_cases.notification import (
    ListNotificationsUseCase,
    camera_notifications_view,
)
from ...application.use_cases.notification.list_notifications import to_notification_response
from ...core.exceptions import CamwatchError, get_user_message
from ...di.container import get_container
from ...domain.repositories import Identity
from .dependencies import (
    authenticate_websocket,
    get_client_context,
    get_current_identity,
    raise_http_error,
)
from .live_view_socket import serve_live_view


router = APIRouter(tags=["cameras"])


@router.post("", response_model=CameraResponse, status_code=status.HTTP_201_CREATED)
async def create_camera(
    request: CameraCreateRequest,
    context: ClientContext = Depends(get_client_context),
    identity: Identity = Depends(get_current_identity),
) -> CameraResponse:
    """
    Register a new camera for the caller. The processing service is told about
    it on a best-effort basis; its failure does not fail the request.
    """
    create_camera_use_case = get_container().create(CreateCameraUseCase, context)
    try:
        return await create_camera_use_case.execute(request=request, identity=identity)
    except CamwatchError as exception:
        raise_http_error(exception)


@router.get("", response_model=List[CameraResponse])
async def list_cameras(
    context: ClientContext = Depends(get_client_context),
    identity: Identity = Depends(get_current_identity),
) -> List[CameraResponse]:
    """
    List all cameras for the current user, newest first
    """
    list_cameras_use_case = get_container().create(ListCamerasUseCase, context)
    try:
        return await list_cameras_use_case.execute(identity=identity)
    except CamwatchError as exception:
        raise_http_error(exception)


@router.get("/{camera_id}", response_model=CameraResponse)
async def get_camera(
    camera_id: str,
    context: ClientContext = Depends(get_client_context),
    identity: Identity = Depends(get_current_identity),
) -> CameraResponse:
    """
    Get a camera by ID

    Args:
        camera_id: ID of the camera
        identity: Current authenticated user (from dependency)
    """
    get_camera_use_case = get_container().create(GetCameraUseCase, context)
    try:
        return await get_camera_use_case.execute(camera_id=camera_id, identity=identity)
    except CamwatchError as exception:
        raise_http_error(exception)


@router.delete("/{camera_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_camera(
    camera_id: str,
    context: ClientContext = Depends(get_client_context),
    identity: Identity = Depends(get_current_identity),
) -> Response:
    delete_camera_use_case = get_container().create(DeleteCameraUseCase, context)
    try:
        await delete_camera_use_case.execute(camera_id=camera_id, identity=identity)
    except CamwatchError as exception:
        raise_http_error(exception)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{camera_id}/notifications", response_model=NotificationListResponse)
async def list_camera_notifications(
    camera_id: str,
    context: ClientContext = Depends(get_client_context),
    identity: Identity = Depends(get_current_identity),
) -> NotificationListResponse:
    """
    Notifications raised by one of the caller's cameras, newest first
    """
    list_notifications_use_case = get_container().create(ListNotificationsUseCase, context)
    try:
        return await list_notifications_use_case.execute(identity=identity, camera_id=camera_id)
    except CamwatchError as exception:
        raise_http_error(exception)


@router.websocket("/{camera_id}/ws")
async def camera_notifications_socket(
    websocket: WebSocket,
    camera_id: str,
    token: Optional[str] = Query(None, description="JWT access token for authentication"),
):
    """
    Live notification list of one camera.

    Example connection:
        ws://host/api/v1/cameras/<camera_id>/ws?token=<jwt_token>
    """
    caller = await authenticate_websocket(token)
    if caller is None:
        await websocket.close(code=1008, reason="Invalid or expired token")
        return
    context, identity = caller

    try:
        await get_container().create(GetCameraUseCase, context).execute(camera_id, identity)
    except CamwatchError as exception:
        await websocket.close(code=1008, reason=get_user_message(exception))
        return

    await websocket.accept()
    view = camera_notifications_view(context, identity.user_id, camera_id)
    await serve_live_view(
        websocket,
        view,
        identity.user_id,
        lambda notification: to_notification_response(notification).model_dump(mode="json"),
    )

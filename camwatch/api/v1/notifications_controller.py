"""Notification list endpoints, one-shot (REST) and live (WebSocket)"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, WebSocket

from ...application.dto.notification_dto import NotificationListResponse
from ...application.services.context import ClientContext
from ...application.use_cases.notification import (
    ListNotificationsUseCase,
    user_notifications_view,
)
from ...application.use_cases.notification.list_notifications import to_notification_response
from ...core.exceptions import CamwatchError
from ...di.container import get_container
from ...domain.repositories import Identity
from .dependencies import (
    authenticate_websocket,
    get_client_context,
    get_current_identity,
    raise_http_error,
)
from .live_view_socket import serve_live_view

logger = logging.getLogger(__name__)

router = APIRouter(tags=["notifications"])


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    context: ClientContext = Depends(get_client_context),
    identity: Identity = Depends(get_current_identity),
) -> NotificationListResponse:
    """
    All notifications of the caller, newest first, with camera names.
    """
    list_notifications_use_case = get_container().create(ListNotificationsUseCase, context)
    try:
        return await list_notifications_use_case.execute(identity=identity)
    except CamwatchError as exception:
        raise_http_error(exception)


@router.websocket("/ws")
async def websocket_notifications(
    websocket: WebSocket,
    token: Optional[str] = Query(None, description="JWT access token for authentication"),
):
    """
    WebSocket endpoint for the live notification list.

    The client first receives the full list as a snapshot, then each
    notification the store creates for this user as an insert.

    Authentication is required via JWT token passed as query parameter.

    Example connection:
        ws://host/api/v1/notifications/ws?token=<jwt_token>
    """
    caller = await authenticate_websocket(token)
    if caller is None:
        await websocket.close(code=1008, reason="Invalid or expired token")
        return
    context, identity = caller

    await websocket.accept()
    logger.info(f"WebSocket connection accepted for user {identity.user_id}")

    view = user_notifications_view(context, identity.user_id)
    await serve_live_view(
        websocket,
        view,
        identity.user_id,
        lambda notification: to_notification_response(notification).model_dump(mode="json"),
    )

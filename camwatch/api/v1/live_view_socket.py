"""
Serves one LiveView over a WebSocket.

Messages sent to the client:
    {"type": "snapshot", "items": [...]}    after every (re-)activation
    {"type": "insert" | "update", "item": {...}} per merged change
    {"type": "error", "message": "..."}     when the view could not be (re-)activated

The client may send "ping" (answered with "pong"). The view is closed when the
socket goes away.
"""

# Standard library imports
import asyncio
import logging
from typing import Any, Callable, Dict

# External package imports
from fastapi import WebSocket, WebSocketDisconnect

# Local application imports
from ...application.services.live_view import LiveView
from ...application.services.view_state import ChangeKind, ViewChange
from ...core.exceptions import CamwatchError, get_user_message
from ...di.container import get_container
from ...infrastructure.notifications import LiveViewRegistry

logger = logging.getLogger(__name__)

# How often an idle socket checks whether its change feed is still attached
FEED_CHECK_INTERVAL_SECONDS = 15.0

Encoder = Callable[[Any], Dict[str, Any]]


async def _receive_loop(websocket: WebSocket, user_id: str) -> None:
    while True:
        message = await websocket.receive_text()
        if message == "ping":
            await websocket.send_text("pong")
        elif message != "pong":
            logger.debug(f"Received message from user {user_id}: {message}")


async def _send_loop(
    websocket: WebSocket,
    view: LiveView,
    changes: "asyncio.Queue[ViewChange]",
    encode: Encoder,
) -> None:
    while True:
        try:
            change = await asyncio.wait_for(changes.get(), timeout=FEED_CHECK_INTERVAL_SECONDS)
        except asyncio.TimeoutError:
            # Transport dropped: re-enter (fresh snapshot, then a new subscription)
            try:
                if await view.ensure_active():
                    logger.info(f"Re-activated live view {view.name}")
            except CamwatchError as e:
                # Kept open; the next check tries again
                await websocket.send_json({"type": "error", "message": view.error or get_user_message(e)})
            continue

        if change.kind == ChangeKind.SNAPSHOT:
            await websocket.send_json({
                "type": ChangeKind.SNAPSHOT.value,
                "items": [encode(item) for item in change.item],
            })
        else:
            await websocket.send_json({"type": change.kind.value, "item": encode(change.item)})


async def serve_live_view(
    websocket: WebSocket,
    view: LiveView,
    user_id: str,
    encode: Encoder,
) -> None:
    """
    Activate the view, stream its changes until the client disconnects, then close it.
    The websocket must already be accepted.
    """
    registry = get_container().get(LiveViewRegistry)
    changes: "asyncio.Queue[ViewChange]" = asyncio.Queue()

    def _on_change(change: ViewChange) -> None:
        if change.kind == ChangeKind.SNAPSHOT:
            # Freeze the collection as of this snapshot
            change = ViewChange(ChangeKind.SNAPSHOT, view.items)
        changes.put_nowait(change)

    view.store.add_listener(_on_change)
    registry.add_view(user_id, view)
    tasks = []
    try:
        try:
            await view.activate()
        except Exception as e:
            await websocket.send_json({"type": "error", "message": view.error or get_user_message(e)})
            await websocket.close(code=1011)
            return

        tasks = [
            asyncio.create_task(_receive_loop(websocket, user_id)),
            asyncio.create_task(_send_loop(websocket, view, changes, encode)),
        ]
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in done:
            exc = task.exception()
            if exc is None or isinstance(exc, WebSocketDisconnect):
                logger.info(f"WebSocket disconnected for user {user_id} ({view.name})")
            else:
                logger.error(f"Error in live view socket {view.name} for user {user_id}: {exc}", exc_info=exc)
    finally:
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        registry.remove_view(user_id, view)
        await view.close()

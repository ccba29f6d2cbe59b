"""Live notification views: snapshot plus change feed, merged into one ViewStateStore."""

# Local application imports
from ....domain.constants import Tables
from ....domain.models import Notification
from ...services.change_feed import FeedScope
from ...services.context import ClientContext
from ...services.live_view import LiveView
from .camera_names import CameraNameJoin
from .list_notifications import fetch_notifications


def _open(context: ClientContext, join: CameraNameJoin, scope: FeedScope, fetch, name: str) -> LiveView[Notification]:
    view = LiveView(context, scope, fetch=fetch, decode=join.decode_live, name=name)

    def _name_resolved(camera_id: str) -> None:
        for item in view.items:
            if item.camera_id == camera_id and item.camera_name is None:
                view.store.update(join.apply(item))

    join.on_resolved = _name_resolved
    return view


def user_notifications_view(context: ClientContext, user_id: str) -> LiveView[Notification]:
    """All notifications of a user, newest first, with camera names joined."""
    join = CameraNameJoin(context, user_id)
    return _open(
        context,
        join,
        FeedScope.for_owner(Tables.NOTIFICATIONS, user_id),
        lambda: fetch_notifications(context, join),
        f"notifications:{user_id}",
    )


def camera_notifications_view(
    context: ClientContext,
    user_id: str,
    camera_id: str,
) -> LiveView[Notification]:
    """
    Notifications raised by one camera. The caller checks that user_id owns
    the camera before opening the view.
    """
    join = CameraNameJoin(context, user_id)
    return _open(
        context,
        join,
        FeedScope.for_camera(camera_id),
        lambda: fetch_notifications(context, join, camera_id),
        f"camera-notifications:{camera_id}",
    )

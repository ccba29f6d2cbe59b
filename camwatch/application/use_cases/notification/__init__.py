from .camera_names import CameraNameJoin
from .list_notifications import ListNotificationsUseCase, fetch_notifications
from .notification_views import camera_notifications_view, user_notifications_view

__all__ = [
    "CameraNameJoin",
    "ListNotificationsUseCase",
    "fetch_notifications",
    "user_notifications_view",
    "camera_notifications_view",
]

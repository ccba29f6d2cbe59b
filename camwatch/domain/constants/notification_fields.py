"""Constants for Notification record field names"""


class NotificationFields:
    """Field name constants for the notifications table"""
    ID = "id"
    USER_ID = "user_id"
    CAMERA_ID = "camera_id"
    NOTIFICATION_TEXT = "notification_text"
    TIMESTAMP = "timestamp"

    # Joined from cameras, never persisted on the notification
    CAMERA_NAME = "camera_name"

"""Remote store table names"""


class Tables:
    CAMERAS = "cameras"
    NOTIFICATIONS = "notifications"
    VIDEO_ANALYSIS = "video_analysis"

    ALL = frozenset({CAMERAS, NOTIFICATIONS, VIDEO_ANALYSIS})

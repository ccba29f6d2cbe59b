"""Constants for VideoAnalysis record field names"""


class VideoAnalysisFields:
    """Field name constants for the video_analysis table"""
    ID = "id"
    USER_ID = "user_id"
    VIDEO_URL = "video_url"
    STATUS = "status"
    RESULTS = "results"
    CREATED_AT = "created_at"


class AnalysisResultFields:
    """Keys inside the structured results object written by the processing service"""
    VIOLENCE_DETECTED = "violence_detected"
    CONFIDENCE = "confidence"
    TIMESTAMP = "timestamp"
    DETAILS = "details"
    FRAMES = "frames"

    DETAIL_TYPE = "type"
    DETAIL_SEVERITY = "severity"
    DETAIL_LOCATION = "location"

    FRAME_TIMESTAMP = "timestamp"
    FRAME_CONFIDENCE = "confidence"

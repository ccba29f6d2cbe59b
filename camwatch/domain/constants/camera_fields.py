"""Constants for Camera record field names"""


class CameraFields:
    """Field name constants for the cameras table"""
    ID = "id"
    USER_ID = "user_id"
    CAMERA_NAME = "camera_name"
    IP_ADDRESS = "ip_address"
    CREATED_AT = "created_at"

    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field

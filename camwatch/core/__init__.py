from .config import Settings, get_settings
from .security import decode_jwt_token, user_id_from_claims

__all__ = [
    "Settings",
    "get_settings",
    "decode_jwt_token",
    "user_id_from_claims",
]

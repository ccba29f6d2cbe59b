# Standard library imports
from typing import Any, Dict, Optional

# External package imports
import jwt
from jwt.exceptions import InvalidTokenError, DecodeError

# Local application imports
from .config import get_settings


def decode_jwt_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a JWT token issued by the identity provider

    Args:
        token: The JWT token string to decode

    Returns:
        Dictionary containing decoded token claims

    Raises:
        ValueError: If token is invalid, expired or cannot be decoded
    """
    settings = get_settings()
    try:
        decoded = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"verify_aud": False},
        )
        return decoded
    except (InvalidTokenError, DecodeError) as e:
        raise ValueError(f"Invalid token: {str(e)}")


def user_id_from_claims(claims: Dict[str, Any]) -> Optional[str]:
    """Return the subject of a decoded token, None when it carries no user."""
    user_id = claims.get("sub") or claims.get("user_id")
    return str(user_id) if user_id else None

# Standard library imports
import logging
from typing import NoReturn, Optional, Tuple

# External package imports
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

# Local application imports
from ...application.services.context import ClientContext
from ...core.exceptions import (
    AuthRequiredError,
    CamwatchError,
    NotFoundError,
    TransportError,
    ValidationError,
    get_user_message,
)
from ...di.container import get_container
from ...domain.repositories import Identity

logger = logging.getLogger(__name__)

security_scheme = HTTPBearer(auto_error=True)


def get_client_context(
    credentials: HTTPAuthorizationCredentials = Depends(security_scheme),
) -> ClientContext:
    """
    FastAPI dependency building the per-request ClientContext. Its remote
    store acts for the bearer of the token.
    """
    return get_container().create(ClientContext, credentials.credentials)


async def get_current_identity(
    context: ClientContext = Depends(get_client_context),
) -> Identity:
    """
    FastAPI dependency to get the authenticated caller from the bearer token

    Raises:
        HTTPException: 401 if the token is missing, invalid or carries no user
    """
    try:
        return await context.require_identity()
    except AuthRequiredError as exception:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=exception.user_message,
            headers={"WWW-Authenticate": "Bearer"},
        )


def http_status_for(exc: CamwatchError) -> int:
    if isinstance(exc, ValidationError):
        if exc.reason == "too_large":
            return status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, AuthRequiredError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, TransportError):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def raise_http_error(exc: CamwatchError) -> NoReturn:
    """Translate a camwatch error into the matching HTTPException."""
    status_code = http_status_for(exc)
    if status_code >= 500:
        logger.error(f"Request failed: {exc}", exc_info=exc)
    raise HTTPException(status_code=status_code, detail=get_user_message(exc)) from exc


async def authenticate_websocket(token: Optional[str]) -> Optional[Tuple[ClientContext, Identity]]:
    """
    Resolve the caller of a WebSocket connection from its `token` query parameter.

    Returns:
        (context, identity), or None when the token is missing or invalid
    """
    if not token:
        return None

    context = get_container().create(ClientContext, token)
    identity = await context.current_identity()
    if identity is None:
        logger.warning("Invalid token for WebSocket connection")
        return None
    return context, identity

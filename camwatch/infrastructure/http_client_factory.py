"""Pooled HTTP client shared by every call to the processing service."""
import httpx
import logging
from typing import Optional

from ..core.config import get_settings

logger = logging.getLogger(__name__)

_shared_client: Optional[httpx.AsyncClient] = None


def get_shared_http_client() -> httpx.AsyncClient:
    """
    Return the shared AsyncClient, creating it on first use or after it was closed.

    Timeout and pool size come from the processing service settings; keep-alive
    connections are reused across registrations.
    """
    global _shared_client

    if _shared_client is None or _shared_client.is_closed:
        settings = get_settings()
        _shared_client = httpx.AsyncClient(
            timeout=settings.processing_service_timeout,
            limits=httpx.Limits(
                max_keepalive_connections=settings.processing_service_max_connections,
                max_connections=settings.processing_service_max_connections * 2,
            ),
            http2=True,
        )
        logger.info(
            f"Created shared HTTP client for {settings.processing_service_url} "
            f"(timeout {settings.processing_service_timeout}s)"
        )

    return _shared_client


async def close_shared_http_client() -> None:
    """Close the shared client on application shutdown; a later call recreates it."""
    global _shared_client

    client, _shared_client = _shared_client, None
    if client is not None and not client.is_closed:
        await client.aclose()
        logger.info("Closed shared HTTP client")

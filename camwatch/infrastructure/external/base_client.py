# Standard library imports
import logging
from typing import Optional

# External package imports
import httpx

# Local application imports
from ...core.config import get_settings
from ..http_client_factory import get_shared_http_client

logger = logging.getLogger(__name__)


class BaseProcessingClient:
    """
    Base class for processing service clients.

    Provides common initialization for base_url, timeout and the HTTP client.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize base processing service client.

        Args:
            base_url: Base URL for the processing service. If None, reads from settings.
            timeout: Request timeout in seconds. If None, reads from settings.
            client: HTTP client to use. If None, the shared pooled client is used.
        """
        settings = get_settings()
        self.base_url = (base_url or settings.processing_service_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.processing_service_timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client if self._client is not None else get_shared_http_client()

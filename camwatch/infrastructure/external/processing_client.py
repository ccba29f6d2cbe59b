# Standard library imports
import logging
from typing import Any, Dict

# External package imports
import httpx

# Local application imports
from .base_client import BaseProcessingClient
from ...core.exceptions import BestEffortNotifyError

logger = logging.getLogger(__name__)


class RegistrationNotifier(BaseProcessingClient):
    """
    HTTP client telling the external processing service about new cameras and
    uploaded videos.

    Calls are fire-and-forget for the rest of the system: every failure comes
    out as BestEffortNotifyError, which callers log and swallow. The primary
    record is never rolled back because of it.
    """

    async def register_camera(self, user_id: str, camera_id: str, camera_url: str) -> Dict[str, Any]:
        """
        Register a camera so the processing service starts watching its stream.

        Args:
            user_id: Owner of the camera
            camera_id: ID of the stored camera record
            camera_url: URL the stream is served from

        Returns:
            Decoded response body (empty dict when the body is not JSON)

        Raises:
            BestEffortNotifyError: on timeout, transport error or non-2xx status
        """
        payload = {
            "user_id": user_id,
            "camera_id": camera_id,
            "camera_url": camera_url,
        }
        logger.info(f"Registering camera {camera_id} with processing service at {self.base_url}")
        return await self._post("/registerCamera", payload)

    async def register_video(self, video_url: str) -> Dict[str, Any]:
        """
        Register an uploaded video for violence-detection analysis.

        Raises:
            BestEffortNotifyError: on timeout, transport error or non-2xx status
        """
        logger.info(f"Registering video {video_url} with processing service at {self.base_url}")
        return await self._post("/registerVideo", {"video_url": video_url})

    async def _post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}{endpoint}"
        try:
            response = await self.client.post(url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise BestEffortNotifyError(
                f"Timeout calling processing service {endpoint}", endpoint=endpoint
            ) from e
        except httpx.HTTPStatusError as e:
            raise BestEffortNotifyError(
                f"HTTP error from processing service {endpoint}: "
                f"{e.response.status_code} - {e.response.text}",
                endpoint=endpoint,
            ) from e
        except httpx.HTTPError as e:
            raise BestEffortNotifyError(
                f"Could not reach processing service {endpoint}: {e}", endpoint=endpoint
            ) from e

        logger.info(f"Processing service accepted {endpoint}")
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {"data": body}

# Standard library imports
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

# Local application imports
from ...core.config import Settings, get_settings
from ...core.exceptions import AuthRequiredError
from ...domain.repositories import Identity, RemoteStore

if TYPE_CHECKING:
    from ...infrastructure.external.processing_client import RegistrationNotifier


@dataclass
class ClientContext:
    """
    Everything a view or use case needs from the outside world, passed in
    explicitly: the remote store (acting for one caller), the processing
    service notifier and the settings.
    """
    store: RemoteStore
    notifier: Optional["RegistrationNotifier"] = None
    settings: Optional[Settings] = None

    def __post_init__(self) -> None:
        if self.settings is None:
            self.settings = get_settings()

    async def current_identity(self) -> Optional[Identity]:
        return await self.store.get_current_identity()

    async def require_identity(self) -> Identity:
        """
        Raises:
            AuthRequiredError: if the caller holds no authenticated identity
        """
        identity = await self.store.get_current_identity()
        if identity is None or not identity.user_id:
            raise AuthRequiredError()
        return identity

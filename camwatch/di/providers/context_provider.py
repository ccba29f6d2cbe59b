from typing import Optional, TYPE_CHECKING

from ...application.services.context import ClientContext
from ...core.config import Settings
from ...infrastructure.db.mongo_remote_store import MongoRemoteStore
from ...infrastructure.external.processing_client import RegistrationNotifier
from ...infrastructure.notifications.live_view_registry import LiveViewRegistry

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class ContextProvider:
    """Registers what every request shares (notifier, live view registry) and the per-request ClientContext"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        ClientContext is created per request via container.create(ClientContext, access_token):
        its MongoRemoteStore acts for the bearer of that token.
        """
        # Check if already registered to avoid creating multiple instances
        if not container.has(RegistrationNotifier):
            container.register_singleton(RegistrationNotifier, RegistrationNotifier())

        if not container.has(LiveViewRegistry):
            container.register_singleton(LiveViewRegistry, LiveViewRegistry())

        def _client_context(access_token: Optional[str] = None) -> ClientContext:
            settings = container.get(Settings)
            store = MongoRemoteStore(
                database=container.get("database"),
                access_token=access_token,
                settings=settings,
            )
            return ClientContext(
                store=store,
                notifier=container.get(RegistrationNotifier),
                settings=settings,
            )

        container.register_factory(ClientContext, _client_context)

# Local application imports
from .base_container import BaseContainer
from .providers import (
    CameraProvider,
    ContextProvider,
    DatabaseProvider,
    NotificationProvider,
    VideoAnalysisProvider,
)


class DIContainer(BaseContainer):
    """
    Main dependency injection container.
    Composes all providers in the correct order.

    Registration order is important:
    1. Settings and database handle (DatabaseProvider)
    2. Shared clients and the per-request ClientContext (ContextProvider) - depends on database
    3. Use cases (Camera/Notification/VideoAnalysis providers) - built from a ClientContext
    """

    def __init__(self) -> None:
        super().__init__()
        self.setup()

    def setup(self) -> None:
        """
        Setup dependency registrations by composing all providers.
        Order matters: database → context → use cases
        """
        DatabaseProvider.register(self)
        ContextProvider.register(self)
        CameraProvider.register(self)
        NotificationProvider.register(self)
        VideoAnalysisProvider.register(self)


# Global container instance (singleton pattern)
_container: DIContainer | None = None


def get_container() -> DIContainer:
    """
    Get the global DI container instance (singleton pattern)

    Returns:
        DIContainer instance with all dependencies registered
    """
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def reset_container() -> None:
    """Drop the global container (tests, shutdown)."""
    global _container
    _container = None

from typing import TYPE_CHECKING

from ...application.use_cases.notification import ListNotificationsUseCase

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class NotificationProvider:
    """Notification use case provider"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        container.register_factory(
            ListNotificationsUseCase,
            lambda context: ListNotificationsUseCase(context),
        )

from typing import TYPE_CHECKING

from ...core.config import Settings, get_settings
from ...infrastructure.db.mongo_connection import get_database

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class DatabaseProvider:
    """Centralized database connection provider - single source of truth for the DB handle"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register settings and the database handle in the container.
        Every per-request MongoRemoteStore is built on this one handle.
        """
        container.register_singleton(Settings, get_settings())
        container.register_singleton("database", get_database())

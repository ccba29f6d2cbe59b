"""Registry of live views opened by connected WebSocket clients"""

import logging
from typing import Dict, Set

from ...application.services.live_view import LiveView

logger = logging.getLogger(__name__)


class LiveViewRegistry:
    """
    Tracks the live views each user currently has open so that shutdown can
    release every change-feed subscription.

    Only touched from the event loop; each view itself stays owned by the
    socket that opened it.
    """

    def __init__(self):
        """Initialize live view registry"""
        # Map user_id -> Set of open live views
        self._views: Dict[str, Set[LiveView]] = {}
        logger.info("LiveViewRegistry initialized")

    def add_view(self, user_id: str, view: LiveView) -> None:
        """
        Register an open live view for a user.

        Args:
            user_id: User ID who owns this view
            view: The live view instance
        """
        self._views.setdefault(user_id, set()).add(view)
        logger.info(f"Opened live view {view.name} for user {user_id}. Total views: {self.get_total_views()}")

    def remove_view(self, user_id: str, view: LiveView) -> None:
        """
        Forget a live view. Does not close it.

        Args:
            user_id: User ID who owns this view
            view: The live view instance
        """
        if user_id in self._views:
            self._views[user_id].discard(view)

            # Clean up empty sets
            if not self._views[user_id]:
                del self._views[user_id]

        logger.info(f"Closed live view {view.name} for user {user_id}. Total views: {self.get_total_views()}")

    async def close_all(self) -> int:
        """
        Close every registered view (application shutdown).

        Returns:
            Number of views closed
        """
        views = [view for user_views in self._views.values() for view in user_views]
        self._views.clear()

        closed = 0
        for view in views:
            try:
                await view.close()
                closed += 1
            except Exception as e:
                logger.warning(f"Failed to close live view {view.name}: {e}")

        logger.info(f"Closed {closed} live view(s)")
        return closed

    def get_connected_users(self) -> list[str]:
        """
        Get list of user IDs that have open views.
        """
        return list(self._views.keys())

    def get_total_views(self) -> int:
        """
        Get total number of open live views across all users.
        """
        return sum(len(views) for views in self._views.values())

    def has_views(self, user_id: str) -> bool:
        """
        Check if a user has any open live view.
        """
        return bool(self._views.get(user_id))

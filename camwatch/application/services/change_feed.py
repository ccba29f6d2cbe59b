"""
Change-feed subscriber.

Wraps RemoteStore.subscribe with an explicit handle per scope. Each event that
matches the scope reaches the merge callback once, in the order the store
delivered it. There is no automatic reconnect: once the transport closes the
owning view re-runs its bulk fetch and subscribes again.
"""

# Standard library imports
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

# Local application imports
from ...core.exceptions import TransportError
from ...domain.constants import CameraFields, NotificationFields, Tables, VideoAnalysisFields
from ...domain.repositories import ChangeEvent, Filter, RemoteStore, StoreSubscription

logger = logging.getLogger(__name__)

MergeCallback = Callable[[ChangeEvent], Any]

# Column holding the owning user, per table
_OWNER_COLUMNS = {
    Tables.CAMERAS: CameraFields.USER_ID,
    Tables.NOTIFICATIONS: NotificationFields.USER_ID,
    Tables.VIDEO_ANALYSIS: VideoAnalysisFields.USER_ID,
}


@dataclass(frozen=True)
class FeedScope:
    """The (table, filter) pair a single subscription observes."""
    table: str
    filter_column: Optional[str] = None
    filter_value: Optional[Any] = None

    def __post_init__(self) -> None:
        if self.table not in Tables.ALL:
            raise ValueError(f"Unknown table for subscription: {self.table!r}")
        if (self.filter_column is None) != (self.filter_value is None):
            raise ValueError("Scope filter needs both a column and a value")

    @classmethod
    def for_owner(cls, table: str, user_id: str) -> "FeedScope":
        if table not in _OWNER_COLUMNS:
            raise ValueError(f"Unknown table for subscription: {table!r}")
        return cls(table=table, filter_column=_OWNER_COLUMNS[table], filter_value=user_id)

    @classmethod
    def for_camera(cls, camera_id: str) -> "FeedScope":
        return cls(
            table=Tables.NOTIFICATIONS,
            filter_column=NotificationFields.CAMERA_ID,
            filter_value=camera_id,
        )

    @property
    def filters(self) -> Tuple[Filter, ...]:
        if self.filter_column is None:
            return ()
        return (Filter(self.filter_column, self.filter_value),)

    def matches(self, event: ChangeEvent) -> bool:
        if event.table != self.table:
            return False
        return all(f.matches(event.record) for f in self.filters)

    def __str__(self) -> str:
        if self.filter_column is None:
            return self.table
        return f"{self.table}[{self.filter_column}={self.filter_value}]"


class SubscriptionHandle:
    """
    Caller-owned handle for one live subscription.

    Events arriving after release are discarded, so a subscription that
    outlives its view never touches the view's state.
    """

    def __init__(self, scope: FeedScope, on_event: MergeCallback) -> None:
        self.scope = scope
        self._on_event = on_event
        self._subscription: Optional[StoreSubscription] = None
        self._released = False
        self.delivered = 0

    @property
    def active(self) -> bool:
        if self._released:
            return False
        return self._subscription is None or not self._subscription.closed

    def _attach(self, subscription: StoreSubscription) -> None:
        self._subscription = subscription

    def _release(self) -> Optional[StoreSubscription]:
        self._released = True
        subscription, self._subscription = self._subscription, None
        return subscription

    def deliver(self, event: ChangeEvent) -> None:
        if self._released:
            logger.debug(f"Dropping {event.operation.value} on released subscription {self.scope}")
            return
        if not self.scope.matches(event):
            logger.debug(f"Dropping {event.operation.value} outside scope {self.scope}")
            return

        self.delivered += 1
        try:
            self._on_event(event)
        except Exception as e:
            logger.error(f"Merge callback failed for scope {self.scope}: {e}", exc_info=True)


class ChangeFeedSubscriber:
    """Opens and releases change-feed subscriptions against one remote store."""

    def __init__(self, store: RemoteStore) -> None:
        self.store = store

    async def subscribe(self, scope: FeedScope, on_event: MergeCallback) -> SubscriptionHandle:
        """
        Start observing scope.

        Raises:
            TransportError: if the store could not open the subscription.
                Nothing is delivered in that case.
        """
        handle = SubscriptionHandle(scope, on_event)
        try:
            subscription = await self.store.subscribe(scope.table, scope.filters, handle.deliver)
        except TransportError:
            handle._release()
            raise
        except Exception as e:
            handle._release()
            raise TransportError(
                f"Could not subscribe to {scope}: {e}",
                operation="subscribe",
                user_message="Live updates are unavailable right now.",
            ) from e

        handle._attach(subscription)
        logger.info(f"Subscribed to change feed {scope}")
        return handle

    async def unsubscribe(self, handle: Optional[SubscriptionHandle]) -> None:
        """Release a handle. Safe to call twice or after the transport closed."""
        if handle is None:
            return
        subscription = handle._release()
        if subscription is None:
            return

        try:
            await self.store.unsubscribe(subscription)
        except Exception as e:
            logger.warning(f"Ignoring error while unsubscribing from {handle.scope}: {e}")
        else:
            logger.info(f"Unsubscribed from change feed {handle.scope}")

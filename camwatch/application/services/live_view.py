"""
Live views: one view-state store plus at most one change-feed subscription,
with a lifecycle owned by whoever displays the view.

Activation always runs the bulk fetch first and attaches the feed afterwards,
so whatever was missed while the view was inactive is covered by the fresh
snapshot.
"""

# Standard library imports
import logging
from typing import Awaitable, Callable, Generic, List, Optional, TypeVar

# Local application imports
from ...core.exceptions import get_user_message
from ...domain.repositories import Record
from .change_feed import ChangeFeedSubscriber, FeedScope, SubscriptionHandle
from .context import ClientContext
from .view_state import ViewStateStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LiveView(Generic[T]):
    """
    Args:
        context: client context whose store is fetched from and subscribed to
        scope: what the change feed observes
        fetch: coroutine factory returning the complete, ordered snapshot
        decode: turns a change-feed record into T
        name: used in log lines
    """

    def __init__(
        self,
        context: ClientContext,
        scope: FeedScope,
        fetch: Callable[[], Awaitable[List[T]]],
        decode: Callable[[Record], T],
        name: str = "view",
    ) -> None:
        self.context = context
        self.scope = scope
        self.name = name
        self._fetch = fetch
        self._feed = ChangeFeedSubscriber(context.store)
        self._handle: Optional[SubscriptionHandle] = None
        self.store: ViewStateStore[T] = ViewStateStore(decode, name=name)
        self.loading = False
        self.error: Optional[str] = None

    @property
    def active(self) -> bool:
        return self._handle is not None and self._handle.active

    @property
    def items(self):
        return self.store.items

    async def activate(self) -> None:
        """
        (Re-)enter the view: replace the collection with a fresh snapshot, then
        attach the change feed.

        Raises:
            RuntimeError: if the view was closed
            CamwatchError: if the fetch or the subscription failed; `error`
                carries the user-facing text
        """
        if self.store.closed:
            raise RuntimeError(f"Live view {self.name} is closed")

        await self.deactivate()

        self.loading = True
        self.error = None
        try:
            snapshot = await self._fetch()
            self.store.replace(snapshot)
            self._handle = await self._feed.subscribe(self.scope, self.store.apply)
        except Exception as e:
            self.error = get_user_message(e)
            logger.warning(f"Could not activate live view {self.name}: {e}")
            raise
        finally:
            self.loading = False

        logger.debug(f"Live view {self.name} active with {len(self.store)} item(s)")

    async def ensure_active(self) -> bool:
        """Re-activate if the transport dropped. Returns True when a re-activation happened."""
        if self.active:
            return False
        await self.activate()
        return True

    async def deactivate(self) -> None:
        """Release the subscription; the collection stays readable."""
        handle, self._handle = self._handle, None
        await self._feed.unsubscribe(handle)

    async def close(self) -> None:
        await self.deactivate()
        self.store.close()

    async def __aenter__(self) -> "LiveView[T]":
        await self.activate()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

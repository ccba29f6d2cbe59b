"""
Local view state store.

Two writers feed one ordered collection (newest first):

* a bulk fetch, which always replaces the whole collection, and
* change-feed events, merged one at a time:
  - insert: prepended unless an entry with the same id is already present
  - update: replaces the entry with the same id in place, ignored if absent

Every write builds the next list and swaps it in with a single assignment so
readers only ever see the state before or after an event.
"""

# Standard library imports
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Iterable, List, Optional, Tuple, TypeVar

# Local application imports
from ...domain.repositories import ChangeEvent, ChangeOperation, Record

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ChangeKind(str, Enum):
    SNAPSHOT = "snapshot"
    INSERT = "insert"
    UPDATE = "update"


@dataclass(frozen=True)
class ViewChange(Generic[T]):
    kind: ChangeKind
    item: Optional[T] = None


def _default_identity(item: Any) -> Any:
    return item.id


class ViewStateStore(Generic[T]):
    """
    Ordered, id-unique collection owned by exactly one view.

    Args:
        decode: turns a raw record from the change feed into T
        identity: returns the identity of an item (defaults to `item.id`)
    """

    def __init__(
        self,
        decode: Callable[[Record], T],
        identity: Callable[[T], Any] = _default_identity,
        name: str = "view",
    ) -> None:
        self._decode = decode
        self._identity = identity
        self._items: Tuple[T, ...] = ()
        self._listeners: List[Callable[[ViewChange[T]], None]] = []
        self._closed = False
        self.name = name

    @property
    def items(self) -> Tuple[T, ...]:
        return self._items

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def get(self, item_id: Any) -> Optional[T]:
        for item in self._items:
            if self._identity(item) == item_id:
                return item
        return None

    def add_listener(self, listener: Callable[[ViewChange[T]], None]) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[ViewChange[T]], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Writers
    # ------------------------------------------------------------------

    def replace(self, snapshot: Iterable[T]) -> None:
        """Bulk fetch result: becomes the whole collection, order kept as fetched."""
        if self._closed:
            return

        seen = set()
        fresh: List[T] = []
        for item in snapshot:
            key = self._identity(item)
            if key in seen:
                continue
            seen.add(key)
            fresh.append(item)

        self._items = tuple(fresh)
        self._notify(ViewChange(ChangeKind.SNAPSHOT))

    def apply(self, event: ChangeEvent) -> bool:
        """
        Merge one change-feed event.

        Returns:
            True if the collection changed
        """
        if self._closed:
            logger.debug(f"Ignoring {event.operation.value} on closed {self.name} store")
            return False

        try:
            item = self._decode(event.record)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping undecodable {event.table} record in {self.name} store: {e}")
            return False

        if event.operation == ChangeOperation.INSERT:
            return self._insert(item)
        if event.operation == ChangeOperation.UPDATE:
            return self._update(item)

        logger.debug(f"Ignoring unsupported operation {event.operation} in {self.name} store")
        return False

    def update(self, item: T) -> bool:
        """Replace the entry with the same identity in place; absent items are ignored."""
        if self._closed:
            return False
        return self._update(item)

    def clear(self) -> None:
        if self._closed:
            return
        self._items = ()
        self._notify(ViewChange(ChangeKind.SNAPSHOT))

    def close(self) -> None:
        """Tear down; every later write is a no-op."""
        self._closed = True
        self._listeners.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _insert(self, item: T) -> bool:
        key = self._identity(item)
        if any(self._identity(existing) == key for existing in self._items):
            return False

        self._items = (item,) + self._items
        self._notify(ViewChange(ChangeKind.INSERT, item))
        return True

    def _update(self, item: T) -> bool:
        key = self._identity(item)
        for index, existing in enumerate(self._items):
            if self._identity(existing) == key:
                self._items = self._items[:index] + (item,) + self._items[index + 1:]
                self._notify(ViewChange(ChangeKind.UPDATE, item))
                return True
        return False

    def _notify(self, change: ViewChange[T]) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception as e:
                logger.error(f"View listener failed in {self.name} store: {e}", exc_info=True)

"""
Contract for the remote store: relational-style tables, blob storage,
a change feed and the caller's identity.

Everything the core needs from the backend goes through this interface so that
views and the upload pipeline receive it explicitly instead of importing a
shared client.
"""

# Standard library imports
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, AsyncIterator, Callable, Dict, Iterable, List, Optional, Sequence, Union

Record = Dict[str, Any]
ProgressCallback = Callable[[int, int], None]
BlobSource = Union[bytes, AsyncIterator[bytes]]


class ChangeOperation(str, Enum):
    INSERT = "insert"
    UPDATE = "update"


@dataclass(frozen=True)
class ChangeEvent:
    """One server-pushed row change."""
    operation: ChangeOperation
    table: str
    record: Record


@dataclass(frozen=True)
class Filter:
    """Equality predicate on a single column."""
    column: str
    value: Any

    def matches(self, record: Record) -> bool:
        return record.get(self.column) == self.value


@dataclass(frozen=True)
class Order:
    column: str
    descending: bool = True


@dataclass(frozen=True)
class Identity:
    """Authenticated user as reported by the identity provider."""
    user_id: str
    email: Optional[str] = None


class StoreSubscription(ABC):
    """Transport-level handle returned by RemoteStore.subscribe."""

    @property
    @abstractmethod
    def closed(self) -> bool:
        """True once the transport stopped delivering events"""
        pass


ChangeCallback = Callable[[ChangeEvent], Any]


class RemoteStore(ABC):
    """Client contract for the remote store"""

    @abstractmethod
    async def query(
        self,
        table: str,
        filters: Sequence[Filter] = (),
        order: Optional[Order] = None,
    ) -> List[Record]:
        """Return all records of table matching every filter, in the given order"""
        pass

    @abstractmethod
    async def insert(self, table: str, record: Record) -> Record:
        """Insert one record and return it as stored (with its id)"""
        pass

    @abstractmethod
    async def delete(self, table: str, record_id: str) -> None:
        """Delete a record by id"""
        pass

    @abstractmethod
    async def subscribe(
        self,
        table: str,
        filters: Sequence[Filter],
        on_event: ChangeCallback,
    ) -> StoreSubscription:
        """Start delivering insert/update events for matching rows to on_event"""
        pass

    @abstractmethod
    async def unsubscribe(self, subscription: StoreSubscription) -> None:
        """Stop a subscription. Must not fail if the transport already closed"""
        pass

    @abstractmethod
    async def upload_blob(
        self,
        bucket: str,
        path: str,
        data: BlobSource,
        total: int,
        on_progress: Optional[ProgressCallback] = None,
        content_type: Optional[str] = None,
    ) -> Record:
        """Store a binary object, reporting (loaded, total) bytes; returns {"path": ...}"""
        pass

    @abstractmethod
    async def get_public_url(self, bucket: str, path: str) -> str:
        """Public URL of a stored object"""
        pass

    @abstractmethod
    async def get_current_identity(self) -> Optional[Identity]:
        """Identity of the caller this store acts for, None when not authenticated"""
        pass


def filters_match(filters: Iterable[Filter], record: Record) -> bool:
    return all(f.matches(record) for f in filters)

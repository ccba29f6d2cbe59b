"""
In-memory RemoteStore used by the unit tests.

Records live in plain lists per table, blobs in a dict. Change-feed events are
pushed explicitly by the test through `emit` / `external_insert` /
`external_update`, which stand in for writes made by the processing service
or by the store itself.
"""
import copy
import inspect
import itertools
from typing import Any, Dict, List, Optional, Sequence

from camwatch.core.exceptions import TransportError
from camwatch.domain.constants import Tables
from camwatch.domain.repositories import (
    ChangeEvent,
    ChangeOperation,
    Filter,
    Identity,
    Order,
    RemoteStore,
    StoreSubscription,
    filters_match,
)


class FakeSubscription(StoreSubscription):
    def __init__(self, table: str, filters: Sequence[Filter], on_event) -> None:
        self.table = table
        self.filters = tuple(filters)
        self.on_event = on_event
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True


class InMemoryRemoteStore(RemoteStore):
    def __init__(
        self,
        identity: Optional[Identity] = Identity(user_id="u1"),
        public_base_url: str = "https://store",
    ) -> None:
        self.identity = identity
        self.public_base_url = public_base_url
        self.tables: Dict[str, List[Dict[str, Any]]] = {table: [] for table in Tables.ALL}
        self.blobs: Dict[str, Dict[str, Any]] = {}
        self.subscriptions: List[FakeSubscription] = []
        self.calls: List[str] = []
        self.failures: Dict[str, Exception] = {}
        self._ids = itertools.count(1)

    # -- failure injection -------------------------------------------------

    def fail_on(self, operation: str, error: Optional[Exception] = None) -> None:
        self.failures[operation] = error or TransportError(f"{operation} failed", operation=operation)

    def _call(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.failures:
            raise self.failures[operation]

    @property
    def network_calls(self) -> List[str]:
        return [call for call in self.calls if call != "get_current_identity"]

    # -- RemoteStore -------------------------------------------------------

    async def query(self, table: str, filters: Sequence[Filter] = (), order: Optional[Order] = None):
        self._call("query")
        rows = [copy.deepcopy(r) for r in self.tables[table] if filters_match(filters, r)]
        if order is not None:
            present = [r for r in rows if r.get(order.column) is not None]
            missing = [r for r in rows if r.get(order.column) is None]
            present.sort(key=lambda r: r[order.column], reverse=order.descending)
            rows = present + missing
        return rows

    async def insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        self._call("insert")
        stored = copy.deepcopy(record)
        stored.setdefault("id", f"{table}-{next(self._ids)}")
        self.tables[table].append(stored)
        return copy.deepcopy(stored)

    async def delete(self, table: str, record_id: str) -> None:
        self._call("delete")
        self.tables[table] = [r for r in self.tables[table] if r.get("id") != record_id]

    async def subscribe(self, table: str, filters: Sequence[Filter], on_event) -> StoreSubscription:
        self._call("subscribe")
        subscription = FakeSubscription(table, filters, on_event)
        self.subscriptions.append(subscription)
        return subscription

    async def unsubscribe(self, subscription: StoreSubscription) -> None:
        self._call("unsubscribe")
        subscription.close()

    async def upload_blob(self, bucket, path, data, total, on_progress=None, content_type=None):
        self._call("upload_blob")
        key = f"{bucket}/{path}"
        if key in self.blobs:
            raise TransportError(f"The resource already exists: {path}", operation="upload_blob")

        loaded = 0
        if isinstance(data, (bytes, bytearray)):
            chunks = [bytes(data)]
        else:
            chunks = [chunk async for chunk in data]
        for chunk in chunks:
            loaded += len(chunk)
            if on_progress is not None:
                on_progress(loaded, total)

        self.blobs[key] = {"size": loaded, "content_type": content_type}
        return {"path": path}

    async def get_public_url(self, bucket: str, path: str) -> str:
        self._call("get_public_url")
        return f"{self.public_base_url}/{bucket}/{path}"

    async def get_current_identity(self) -> Optional[Identity]:
        self._call("get_current_identity")
        return self.identity

    # -- change feed driving -----------------------------------------------

    @property
    def open_subscriptions(self) -> List[FakeSubscription]:
        return [s for s in self.subscriptions if not s.closed]

    async def emit(self, table: str, operation: ChangeOperation, record: Dict[str, Any]) -> int:
        """Deliver an event to every open subscription whose filters match. Returns the delivery count."""
        event = ChangeEvent(operation=operation, table=table, record=copy.deepcopy(record))
        delivered = 0
        for subscription in list(self.open_subscriptions):
            if subscription.table != table or not filters_match(subscription.filters, record):
                continue
            result = subscription.on_event(event)
            if inspect.isawaitable(result):
                await result
            delivered += 1
        return delivered

    async def external_insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        stored = copy.deepcopy(record)
        stored.setdefault("id", f"{table}-{next(self._ids)}")
        self.tables[table].append(stored)
        await self.emit(table, ChangeOperation.INSERT, stored)
        return stored

    async def external_update(self, table: str, record_id: str, **changes: Any) -> Dict[str, Any]:
        for row in self.tables[table]:
            if row.get("id") == record_id:
                row.update(changes)
                await self.emit(table, ChangeOperation.UPDATE, row)
                return copy.deepcopy(row)
        raise KeyError(record_id)

    def drop_transport(self) -> None:
        for subscription in self.subscriptions:
            subscription.close()

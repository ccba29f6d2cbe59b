# Standard library imports
import asyncio
import inspect
import logging
import uuid
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence
from urllib.parse import quote

# External package imports
from gridfs.errors import NoFile
from motor.motor_asyncio import (
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
    AsyncIOMotorGridFSBucket,
)
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

# Local application imports
from ...core.config import Settings, get_settings
from ...core.exceptions import TransportError
from ...core.security import decode_jwt_token, user_id_from_claims
from ...domain.constants import CameraFields, NotificationFields, Tables, VideoAnalysisFields
from ...domain.repositories import (
    ChangeCallback,
    ChangeEvent,
    ChangeOperation,
    Filter,
    Identity,
    Order,
    Record,
    RemoteStore,
    StoreSubscription,
)
from ...domain.repositories.remote_store import BlobSource, ProgressCallback
from ...utils.datetime_utils import utc_now
from .mongo_connection import get_database

logger = logging.getLogger(__name__)

MONGO_ID = "_id"

# Creation timestamp column filled in on insert when the caller left it out
_CREATED_COLUMNS = {
    Tables.CAMERAS: CameraFields.CREATED_AT,
    Tables.NOTIFICATIONS: NotificationFields.TIMESTAMP,
    Tables.VIDEO_ANALYSIS: VideoAnalysisFields.CREATED_AT,
}

_CHANGE_OPERATIONS = {
    "insert": ChangeOperation.INSERT,
    "update": ChangeOperation.UPDATE,
    "replace": ChangeOperation.UPDATE,
}


class MongoSubscription(StoreSubscription):
    """A change stream pumped by one asyncio task."""

    def __init__(self, table: str) -> None:
        self.table = table
        self.task: Optional[asyncio.Task] = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def mark_closed(self) -> None:
        self._closed = True


class MongoRemoteStore(RemoteStore):
    """
    MongoDB implementation of RemoteStore.

    Tables are collections keyed by a string `id` field, the change feed is a
    MongoDB change stream (needs a replica set) and blobs live in GridFS
    buckets. One instance acts for one caller: the bearer token it was built
    with is the caller's identity.
    """

    def __init__(
        self,
        database: Optional[AsyncIOMotorDatabase] = None,
        access_token: Optional[str] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.database = database if database is not None else get_database()
        self.access_token = access_token
        self.settings = settings or get_settings()

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def _collection(self, table: str) -> AsyncIOMotorCollection:
        if table not in Tables.ALL:
            raise ValueError(f"Unknown table: {table!r}")
        return self.database[table]

    @staticmethod
    def _clean(document: Dict[str, Any]) -> Record:
        return {k: v for k, v in document.items() if k != MONGO_ID}

    async def query(
        self,
        table: str,
        filters: Sequence[Filter] = (),
        order: Optional[Order] = None,
    ) -> List[Record]:
        collection = self._collection(table)
        criteria = {f.column: f.value for f in filters}
        try:
            cursor = collection.find(criteria, {MONGO_ID: 0})
            if order is not None:
                cursor = cursor.sort(order.column, DESCENDING if order.descending else ASCENDING)
            return [self._clean(document) async for document in cursor]
        except PyMongoError as e:
            raise TransportError(f"Error querying {table}: {str(e)}", operation="query") from e

    async def insert(self, table: str, record: Record) -> Record:
        collection = self._collection(table)
        document = dict(record)
        document.pop(MONGO_ID, None)
        if not document.get("id"):
            document["id"] = uuid.uuid4().hex
        created_column = _CREATED_COLUMNS[table]
        if document.get(created_column) is None:
            document[created_column] = utc_now()

        try:
            await collection.insert_one(document)
        except PyMongoError as e:
            raise TransportError(f"Error inserting into {table}: {str(e)}", operation="insert") from e
        return self._clean(document)

    async def delete(self, table: str, record_id: str) -> None:
        collection = self._collection(table)
        try:
            await collection.delete_one({"id": record_id})
        except PyMongoError as e:
            raise TransportError(f"Error deleting from {table}: {str(e)}", operation="delete") from e

    # ------------------------------------------------------------------
    # Change feed
    # ------------------------------------------------------------------

    async def subscribe(
        self,
        table: str,
        filters: Sequence[Filter],
        on_event: ChangeCallback,
    ) -> StoreSubscription:
        collection = self._collection(table)
        match: Dict[str, Any] = {"operationType": {"$in": list(_CHANGE_OPERATIONS)}}
        for f in filters:
            match[f"fullDocument.{f.column}"] = f.value

        subscription = MongoSubscription(table)
        stream = collection.watch([{"$match": match}], full_document="updateLookup")
        try:
            # Opens the cursor now so a bad deployment fails the subscribe call
            first = await stream.try_next()
        except PyMongoError as e:
            await stream.close()
            raise TransportError(f"Error opening change stream on {table}: {str(e)}", operation="subscribe") from e

        if first is not None:
            await self._dispatch(table, first, on_event)

        subscription.task = asyncio.create_task(
            self._pump(stream, subscription, on_event),
            name=f"change-stream-{table}",
        )
        return subscription

    async def unsubscribe(self, subscription: StoreSubscription) -> None:
        if not isinstance(subscription, MongoSubscription):
            return
        subscription.mark_closed()
        task = subscription.task
        if task is None or task.done():
            return
        if task is asyncio.current_task():
            # Called from inside the callback; the pump loop sees `closed` and stops
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _pump(self, stream, subscription: MongoSubscription, on_event: ChangeCallback) -> None:
        try:
            async for change in stream:
                if subscription.closed:
                    break
                await self._dispatch(subscription.table, change, on_event)
        except PyMongoError as e:
            logger.warning(f"Change stream on {subscription.table} closed: {e}")
        finally:
            subscription.mark_closed()
            await stream.close()

    async def _dispatch(self, table: str, change: Dict[str, Any], on_event: ChangeCallback) -> None:
        operation = _CHANGE_OPERATIONS.get(change.get("operationType"))
        document = change.get("fullDocument")
        if operation is None or not document:
            return
        result = on_event(ChangeEvent(operation=operation, table=table, record=self._clean(document)))
        if inspect.isawaitable(result):
            await result

    # ------------------------------------------------------------------
    # Blob storage
    # ------------------------------------------------------------------

    def _bucket(self, bucket: str) -> AsyncIOMotorGridFSBucket:
        return AsyncIOMotorGridFSBucket(self.database, bucket_name=bucket)

    async def upload_blob(
        self,
        bucket: str,
        path: str,
        data: BlobSource,
        total: int,
        on_progress: Optional[ProgressCallback] = None,
        content_type: Optional[str] = None,
    ) -> Record:
        try:
            existing = await self.database[f"{bucket}.files"].find_one({"filename": path}, {MONGO_ID: 1})
        except PyMongoError as e:
            raise TransportError(f"Error checking storage for {path}: {str(e)}", operation="upload_blob") from e
        if existing is not None:
            raise TransportError(f"The resource already exists: {path}", operation="upload_blob")

        grid_in = self._bucket(bucket).open_upload_stream(
            path,
            chunk_size_bytes=self.settings.upload_chunk_size,
            metadata={"contentType": content_type},
        )
        loaded = 0
        try:
            async for chunk in self._iter_chunks(data):
                await grid_in.write(chunk)
                loaded += len(chunk)
                if on_progress is not None:
                    on_progress(loaded, total)
            await grid_in.close()
        except PyMongoError as e:
            await grid_in.abort()
            raise TransportError(f"Error uploading {path}: {str(e)}", operation="upload_blob") from e
        except Exception:
            await grid_in.abort()
            raise

        logger.info(f"Stored {loaded} bytes in {bucket}/{path}")
        return {"path": path}

    async def _iter_chunks(self, data: BlobSource) -> AsyncIterator[bytes]:
        if isinstance(data, (bytes, bytearray)):
            chunk_size = self.settings.upload_chunk_size
            for offset in range(0, len(data), chunk_size):
                yield bytes(data[offset:offset + chunk_size])
            return
        async for chunk in data:
            yield chunk

    async def open_blob(self, bucket: str, path: str):
        """Download stream for a stored object, None if it does not exist."""
        try:
            return await self._bucket(bucket).open_download_stream_by_name(path)
        except NoFile:
            return None
        except PyMongoError as e:
            raise TransportError(f"Error reading {bucket}/{path}: {str(e)}", operation="open_blob") from e

    async def get_public_url(self, bucket: str, path: str) -> str:
        return f"{self.settings.storage_public_base_url}/{quote(bucket)}/{quote(path)}"

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    async def get_current_identity(self) -> Optional[Identity]:
        if not self.access_token:
            return None
        try:
            claims = decode_jwt_token(self.access_token)
        except ValueError as e:
            logger.debug(f"Rejecting access token: {e}")
            return None

        user_id = user_id_from_claims(claims)
        if not user_id:
            return None
        return Identity(user_id=user_id, email=claims.get("email"))

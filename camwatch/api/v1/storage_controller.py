"""Serves stored blobs at the public URLs handed out by the remote store."""

import logging
from typing import AsyncIterator

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import StreamingResponse

from ...core.config import Settings
from ...core.exceptions import TransportError
from ...infrastructure.db.mongo_remote_store import MongoRemoteStore
from ...di.container import get_container
from ...domain.constants import UPLOAD_CACHE_CONTROL_SECONDS

logger = logging.getLogger(__name__)

router = APIRouter(tags=["storage"])


@router.get("/{bucket}/{path:path}")
async def get_blob(bucket: str, path: str) -> StreamingResponse:
    """
    Stream a stored video. The processing service fetches uploads from here.
    """
    container = get_container()
    store = MongoRemoteStore(database=container.get("database"), settings=container.get(Settings))
    try:
        grid_out = await store.open_blob(bucket, path)
    except (TransportError, ValueError) as e:
        logger.error(f"Error opening blob {bucket}/{path}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Stored file is unavailable right now.",
        )

    if grid_out is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"File not found: {path}",
        )

    async def _content() -> AsyncIterator[bytes]:
        while True:
            chunk = await grid_out.readchunk()
            if not chunk:
                break
            yield chunk

    metadata = grid_out.metadata or {}
    return StreamingResponse(
        _content(),
        media_type=metadata.get("contentType") or "application/octet-stream",
        headers={
            "Content-Length": str(grid_out.length),
            "Cache-Control": f"max-age={UPLOAD_CACHE_CONTROL_SECONDS}",
        },
    )

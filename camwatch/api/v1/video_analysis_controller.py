"""
Video analysis API.

Endpoints:
  POST /video-analysis/upload   upload a video, creates a pending analysis job
  GET  /video-analysis          the caller's jobs with their displayed status
  GET  /video-analysis/{id}     one job with its result view
  WS   /video-analysis/ws       live job list (status changes arrive as updates)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, WebSocket, status

from ...application.dto.video_analysis_dto import (
    UploadResponse,
    VideoAnalysisListResponse,
    VideoAnalysisResponse,
)
from ...application.services.context import ClientContext
from ...application.services.upload_pipeline import UploadCandidate
from ...application.use_cases.video_analysis import (
    GetAnalysisUseCase,
    ListAnalysesUseCase,
    UploadVideoUseCase,
    user_analyses_view,
)
from ...application.use_cases.video_analysis._mapping import to_analysis_response
from ...core.exceptions import CamwatchError
from ...di.container import get_container
from ...domain.repositories import Identity
from .dependencies import (
    authenticate_websocket,
    get_client_context,
    get_current_identity,
    raise_http_error,
)
from .live_view_socket import serve_live_view

logger = logging.getLogger(__name__)

router = APIRouter(tags=["video-analysis"])


@router.post("/upload", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_video(
    file: Optional[UploadFile] = File(None),
    context: ClientContext = Depends(get_client_context),
    identity: Identity = Depends(get_current_identity),
) -> UploadResponse:
    """
    Upload a video for violence-detection analysis.

    The file is checked (type, size) before anything is stored. On success the
    job exists in `pending` state; the processing service picks it up from there.
    """
    candidate = None
    if file is not None:
        candidate = UploadCandidate.from_upload_file(file, chunk_size=context.settings.upload_chunk_size)

    upload_video_use_case = get_container().create(UploadVideoUseCase, context)
    try:
        return await upload_video_use_case.execute(candidate, identity)
    except CamwatchError as exception:
        raise_http_error(exception)


@router.get("", response_model=VideoAnalysisListResponse)
async def list_analyses(
    context: ClientContext = Depends(get_client_context),
    identity: Identity = Depends(get_current_identity),
) -> VideoAnalysisListResponse:
    list_analyses_use_case = get_container().create(ListAnalysesUseCase, context)
    try:
        return await list_analyses_use_case.execute(identity)
    except CamwatchError as exception:
        raise_http_error(exception)


@router.get("/{job_id}", response_model=VideoAnalysisResponse)
async def get_analysis(
    job_id: str,
    context: ClientContext = Depends(get_client_context),
    identity: Identity = Depends(get_current_identity),
) -> VideoAnalysisResponse:
    """
    Result view of one job: status icon and label, and once completed the
    detection line, confidence, details and per-frame scores.
    """
    get_analysis_use_case = get_container().create(GetAnalysisUseCase, context)
    try:
        return await get_analysis_use_case.execute(job_id, identity)
    except CamwatchError as exception:
        raise_http_error(exception)


@router.websocket("/ws")
async def analyses_socket(
    websocket: WebSocket,
    token: Optional[str] = Query(None, description="JWT access token for authentication"),
):
    """
    Live list of the caller's analysis jobs.

    Example connection:
        ws://host/api/v1/video-analysis/ws?token=<jwt_token>
    """
    caller = await authenticate_websocket(token)
    if caller is None:
        await websocket.close(code=1008, reason="Invalid or expired token")
        return
    context, identity = caller

    await websocket.accept()
    logger.info(f"Analysis WebSocket accepted for user {identity.user_id}")

    view = user_analyses_view(context, identity.user_id)
    await serve_live_view(
        websocket,
        view,
        identity.user_id,
        lambda job: to_analysis_response(job).model_dump(mode="json"),
    )

"""
Video upload pipeline.

validate -> resolve identity -> stream blob -> public URL -> create job -> notify

Validation and identity are checked before any network call. A failure while
creating the job record after the blob was written leaves the blob in storage;
it is logged with its path and the upload is reported as failed. Notifying the
processing service is best effort and never fails the upload.
"""

# Standard library imports
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import PurePath
from typing import Any, AsyncIterator, Callable, FrozenSet, List, Optional

# Local application imports
from ...core.exceptions import (
    AuthRequiredError,
    BestEffortNotifyError,
    CamwatchError,
    TransportError,
    ValidationError,
)
from ...domain.constants import Tables, VideoAnalysisFields
from ...domain.models import new_job_record
from ...domain.repositories import Identity
from ...utils.datetime_utils import epoch_millis, utc_now
from .context import ClientContext

logger = logging.getLogger(__name__)

ProgressListener = Callable[[int], None]


@dataclass
class UploadCandidate:
    """
    A file picked for upload.

    `chunks` is a factory so the content is only read once the upload
    actually starts.
    """
    filename: str
    content_type: Optional[str]
    size: int
    chunks: Callable[[], AsyncIterator[bytes]]

    @classmethod
    def from_bytes(
        cls,
        filename: str,
        data: bytes,
        content_type: Optional[str],
        chunk_size: int = 1024 * 1024,
    ) -> "UploadCandidate":
        async def _chunks() -> AsyncIterator[bytes]:
            for offset in range(0, len(data), chunk_size):
                yield data[offset:offset + chunk_size]

        return cls(filename=filename, content_type=content_type, size=len(data), chunks=_chunks)

    @classmethod
    def from_upload_file(cls, upload: Any, chunk_size: int = 1024 * 1024) -> "UploadCandidate":
        """
        Wrap a multipart upload (FastAPI/Starlette UploadFile). The spooled file
        is read chunk by chunk, never loaded whole.
        """
        size = getattr(upload, "size", None)
        if size is None:
            spooled = upload.file
            spooled.seek(0, os.SEEK_END)
            size = spooled.tell()
            spooled.seek(0)

        async def _chunks() -> AsyncIterator[bytes]:
            await upload.seek(0)
            while True:
                chunk = await upload.read(chunk_size)
                if not chunk:
                    break
                yield chunk

        return cls(
            filename=upload.filename or "",
            content_type=upload.content_type,
            size=size,
            chunks=_chunks,
        )


@dataclass
class UploadState:
    """What the upload form displays."""
    uploading: bool = False
    progress: int = 0
    error: Optional[str] = None
    last_job_id: Optional[str] = None


@dataclass
class _ProgressTracker:
    """Turns (loaded, total) byte counts into a non-decreasing 0-99 percentage."""
    state: UploadState
    listeners: List[ProgressListener] = field(default_factory=list)

    def report(self, loaded: int, total: int) -> None:
        if total <= 0:
            return
        percent = int(loaded * 100 / total)
        # 100 is reserved for "job created"
        percent = max(0, min(percent, 99))
        if percent <= self.state.progress:
            return
        self._emit(percent)

    def complete(self) -> None:
        self._emit(100)

    def _emit(self, percent: int) -> None:
        self.state.progress = percent
        for listener in self.listeners:
            try:
                listener(percent)
            except Exception as e:
                logger.error(f"Upload progress listener failed: {e}", exc_info=True)


class UploadPipeline:
    """
    Uploads a video and creates its analysis job.

    One pipeline backs one upload form: a second upload while one is running is
    rejected.
    """

    def __init__(
        self,
        context: ClientContext,
        bucket: Optional[str] = None,
        max_bytes: Optional[int] = None,
        allowed_mime: Optional[FrozenSet[str]] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        settings = context.settings
        self.context = context
        self.bucket = bucket or settings.storage_bucket
        self.max_bytes = max_bytes if max_bytes is not None else settings.upload_max_bytes
        self.allowed_mime = frozenset(allowed_mime or settings.upload_allowed_mime)
        self.clock = clock
        self.state = UploadState()
        self._progress_listeners: List[ProgressListener] = []

    def add_progress_listener(self, listener: ProgressListener) -> None:
        self._progress_listeners.append(listener)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def validate(self, file: Optional[UploadCandidate]) -> UploadCandidate:
        """
        First failing check wins: missing file, MIME type, size.

        Raises:
            ValidationError: with reason missing_file, empty_file,
                unsupported_type or too_large
        """
        if file is None or not file.filename:
            raise ValidationError("No file selected. Please choose a video to upload.", reason="missing_file")

        content_type = (file.content_type or "").split(";")[0].strip().lower()
        if content_type not in self.allowed_mime:
            allowed = ", ".join(sorted(self.allowed_mime))
            raise ValidationError(
                f"Unsupported file type '{file.content_type or 'unknown'}'. Allowed types: {allowed}",
                reason="unsupported_type",
                details={"content_type": file.content_type},
            )

        if file.size > self.max_bytes:
            max_mb = self.max_bytes // (1024 * 1024)
            raise ValidationError(
                f"File too large. Max {max_mb} MB.",
                reason="too_large",
                details={"size": file.size, "max_bytes": self.max_bytes},
            )

        if file.size <= 0:
            raise ValidationError("The selected file is empty.", reason="empty_file")

        return file

    @staticmethod
    def object_name(user_id: str, uploaded_at_ms: int, filename: str) -> str:
        """`{user}-{millis}-{name}`: unique per user and instant, no server arbitration."""
        base_name = PurePath(filename.replace("\\", "/")).name or "video"
        return f"{user_id}-{uploaded_at_ms}-{base_name}"

    async def upload(
        self,
        file: Optional[UploadCandidate],
        owner_identity: Optional[Identity] = None,
    ) -> str:
        """
        Run the whole pipeline.

        Args:
            file: the picked file (None when nothing was picked)
            owner_identity: the authenticated caller; when omitted the
                context's current identity is used

        Returns:
            ID of the created (pending) analysis job

        Raises:
            ValidationError: file rejected, nothing was sent anywhere
            AuthRequiredError: no authenticated identity
            TransportError: storage or database failure
        """
        if self.state.uploading:
            raise ValidationError(
                "An upload is already in progress.",
                reason="upload_in_progress",
            )

        # Claimed before the first await so an overlapping call sees it
        self.state.uploading = True
        self.state.progress = 0
        self.state.error = None
        tracker = _ProgressTracker(self.state, list(self._progress_listeners))
        try:
            candidate = self.validate(file)
            identity = owner_identity or await self.context.current_identity()
            if identity is None or not identity.user_id:
                raise AuthRequiredError()

            video_url = await self._store_blob(candidate, identity, tracker)
            job_id = await self._create_job(identity, video_url)

            tracker.complete()
            self.state.last_job_id = job_id
            logger.info(f"Created analysis job {job_id} for user {identity.user_id}")

            await self._notify_processing_service(video_url)
            return job_id

        except CamwatchError as e:
            self.state.error = e.user_message
            raise
        finally:
            self.state.uploading = False
            self.state.progress = 0

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _store_blob(
        self,
        candidate: UploadCandidate,
        identity: Identity,
        tracker: _ProgressTracker,
    ) -> str:
        store = self.context.store
        path = self.object_name(identity.user_id, epoch_millis(self.clock()), candidate.filename)

        logger.info(f"Uploading {candidate.size} bytes to {self.bucket}/{path}")
        try:
            uploaded = await store.upload_blob(
                self.bucket,
                path,
                candidate.chunks(),
                candidate.size,
                on_progress=tracker.report,
                content_type=candidate.content_type,
            )
        except CamwatchError:
            raise
        except Exception as e:
            raise TransportError(f"Upload failed: {e}", operation="upload_blob") from e

        stored_path = (uploaded or {}).get("path") or path
        try:
            return await store.get_public_url(self.bucket, stored_path)
        except CamwatchError:
            raise
        except Exception as e:
            raise TransportError(
                f"Could not resolve URL for uploaded video: {e}",
                operation="get_public_url",
            ) from e

    async def _create_job(self, identity: Identity, video_url: str) -> str:
        record = new_job_record(identity.user_id, video_url, self.clock())
        try:
            created = await self.context.store.insert(Tables.VIDEO_ANALYSIS, record)
        except Exception as e:
            # TODO: delete the orphaned blob once storage exposes a delete call
            logger.error(
                f"Video stored at {video_url} but its analysis job could not be created; "
                f"the blob is orphaned: {e}"
            )
            if isinstance(e, CamwatchError):
                raise
            raise TransportError(
                f"Could not create analysis job: {e}",
                operation="insert",
            ) from e

        return str(created[VideoAnalysisFields.ID])

    async def _notify_processing_service(self, video_url: str) -> None:
        notifier = self.context.notifier
        if notifier is None:
            logger.info(f"No processing service notifier configured; skipping registration of {video_url}")
            return

        try:
            await notifier.register_video(video_url)
        except BestEffortNotifyError as e:
            logger.warning(f"Processing service was not told about {video_url}: {e}")
        except Exception as e:
            logger.error(
                f"Unexpected error registering {video_url} with processing service: {e}",
                exc_info=True
            )

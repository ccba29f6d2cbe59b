# Standard library imports
from typing import Optional

# Local application imports
from ....domain.repositories import Identity
from ...dto.video_analysis_dto import UploadResponse
from ...services.context import ClientContext
from ...services.upload_pipeline import UploadCandidate, UploadPipeline


class UploadVideoUseCase:
    """Use case for submitting a recorded video for analysis"""

    def __init__(self, context: ClientContext, pipeline: Optional[UploadPipeline] = None) -> None:
        self.context = context
        self.pipeline = pipeline or UploadPipeline(context)

    async def execute(self, file: Optional[UploadCandidate], identity: Identity) -> UploadResponse:
        """
        Raises:
            ValidationError: If the file was rejected (nothing was uploaded)
            TransportError: If storing the video or creating its job failed
        """
        job_id = await self.pipeline.upload(file, owner_identity=identity)
        return UploadResponse(job_id=job_id)

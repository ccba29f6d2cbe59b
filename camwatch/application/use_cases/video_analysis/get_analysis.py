# Local application imports
from ....core.exceptions import NotFoundError
from ....domain.constants import Tables, VideoAnalysisFields
from ....domain.models import VideoAnalysisJob
from ....domain.repositories import Filter, Identity
from ...dto.video_analysis_dto import VideoAnalysisResponse
from ...services.context import ClientContext
from ._mapping import to_analysis_response


class GetAnalysisUseCase:
    """Use case for the result view of one analysis job"""

    def __init__(self, context: ClientContext) -> None:
        self.context = context

    async def execute(self, job_id: str, identity: Identity) -> VideoAnalysisResponse:
        """
        Get a job together with its projected status/result view

        Raises:
            NotFoundError: If the job does not exist or belongs to someone else
        """
        records = await self.context.store.query(
            Tables.VIDEO_ANALYSIS,
            filters=[Filter(VideoAnalysisFields.ID, job_id)],
        )
        if not records:
            raise NotFoundError("Analysis not found")

        job = VideoAnalysisJob.from_record(records[0])
        if job.user_id != identity.user_id:
            raise NotFoundError("Analysis not found")

        return to_analysis_response(job)

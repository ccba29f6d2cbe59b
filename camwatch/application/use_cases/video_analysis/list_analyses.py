# Standard library imports
from typing import List

# Local application imports
from ....domain.constants import Tables, VideoAnalysisFields
from ....domain.models import VideoAnalysisJob
from ....domain.repositories import Filter, Identity, Order
from ...dto.video_analysis_dto import VideoAnalysisListResponse
from ...services.context import ClientContext
from ._mapping import to_analysis_response


async def fetch_analyses(context: ClientContext, user_id: str) -> List[VideoAnalysisJob]:
    """The user's analysis jobs, newest first."""
    records = await context.store.query(
        Tables.VIDEO_ANALYSIS,
        filters=[Filter(VideoAnalysisFields.USER_ID, user_id)],
        order=Order(VideoAnalysisFields.CREATED_AT, descending=True),
    )
    return [VideoAnalysisJob.from_record(record) for record in records]


class ListAnalysesUseCase:
    """Use case for listing the caller's video analysis jobs"""

    def __init__(self, context: ClientContext) -> None:
        self.context = context

    async def execute(self, identity: Identity) -> VideoAnalysisListResponse:
        jobs = await fetch_analyses(self.context, identity.user_id)
        return VideoAnalysisListResponse(
            total=len(jobs),
            items=[to_analysis_response(job) for job in jobs],
        )

# Local application imports
from ....domain.constants import Tables
from ....domain.models import VideoAnalysisJob
from ...services.change_feed import FeedScope
from ...services.context import ClientContext
from ...services.live_view import LiveView
from .list_analyses import fetch_analyses


def user_analyses_view(context: ClientContext, user_id: str) -> LiveView[VideoAnalysisJob]:
    """
    The user's analysis jobs, newest first. Status changes written by the
    processing service arrive as feed updates and replace the job in place.
    """
    return LiveView(
        context,
        FeedScope.for_owner(Tables.VIDEO_ANALYSIS, user_id),
        fetch=lambda: fetch_analyses(context, user_id),
        decode=VideoAnalysisJob.from_record,
        name=f"analyses:{user_id}",
    )

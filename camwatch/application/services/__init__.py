from .context import ClientContext
from .change_feed import ChangeFeedSubscriber, FeedScope, SubscriptionHandle
from .view_state import ChangeKind, ViewChange, ViewStateStore
from .live_view import LiveView
from .upload_pipeline import UploadCandidate, UploadPipeline, UploadState
from .job_status import JobStatusView, StatusIcon, format_percentage, project

__all__ = [
    "ClientContext",
    "ChangeFeedSubscriber",
    "FeedScope",
    "SubscriptionHandle",
    "ChangeKind",
    "ViewChange",
    "ViewStateStore",
    "LiveView",
    "UploadCandidate",
    "UploadPipeline",
    "UploadState",
    "JobStatusView",
    "StatusIcon",
    "format_percentage",
    "project",
]

from ....domain.models import VideoAnalysisJob
from ...dto.video_analysis_dto import (
    JobStatusResponse,
    LabelledValue,
    StatusIconResponse,
    VideoAnalysisResponse,
)
from ...services.job_status import JobStatusView, project


def to_status_response(view: JobStatusView) -> JobStatusResponse:
    return JobStatusResponse(
        icon=StatusIconResponse(
            name=view.icon.name,
            tone=view.icon.tone,
            spinning=view.icon.spinning,
        ),
        label=view.label,
        detection_label=view.detection_label,
        detection_summary=view.detection_summary,
        confidence_label=view.confidence_label,
        details=[LabelledValue(label=label, value=value) for label, value in view.details],
        frames=[LabelledValue(label=label, value=value) for label, value in view.frames],
    )


def to_analysis_response(job: VideoAnalysisJob) -> VideoAnalysisResponse:
    return VideoAnalysisResponse(
        id=job.id,
        video_url=job.video_url,
        status=job.status,
        created_at=job.created_at,
        view=to_status_response(project(job)),
    )

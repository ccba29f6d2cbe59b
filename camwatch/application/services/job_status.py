"""Presentation of a video analysis job: status icon/label and, once completed, its results."""

# Standard library imports
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

# Local application imports
from ...domain.models import AnalysisResults, JobStatus, VideoAnalysisJob


@dataclass(frozen=True)
class StatusIcon:
    name: str
    tone: str
    spinning: bool = False


SUCCESS_ICON = StatusIcon(name="check-circle", tone="success")
IN_PROGRESS_ICON = StatusIcon(name="clock", tone="info", spinning=True)
WARNING_ICON = StatusIcon(name="alert-triangle", tone="warning")
WAITING_ICON = StatusIcon(name="clock", tone="neutral")

_STATUS_ICONS = {
    JobStatus.COMPLETED: SUCCESS_ICON,
    JobStatus.PROCESSING: IN_PROGRESS_ICON,
    JobStatus.ERROR: WARNING_ICON,
    JobStatus.PENDING: WAITING_ICON,
}


@dataclass(frozen=True)
class JobStatusView:
    icon: StatusIcon
    label: str
    detection_label: Optional[str] = None
    detection_summary: Optional[str] = None
    confidence_label: Optional[str] = None
    details: List[Tuple[str, str]] = field(default_factory=list)
    frames: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def has_results(self) -> bool:
        return self.detection_label is not None


def format_percentage(value: Optional[float]) -> Optional[str]:
    """0.873 -> "87.3%"; None/NaN/inf -> None."""
    if value is None or not math.isfinite(value):
        return None
    return f"{value * 100:.1f}%"


def _format_seconds(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value)}s"
    return f"{value:g}s"


def _detail_rows(results: AnalysisResults) -> List[Tuple[str, str]]:
    details = results.details
    if details is None:
        return []
    rows = []
    if details.type:
        rows.append(("Type", details.type.capitalize()))
    if details.severity:
        severity = int(details.severity) if float(details.severity).is_integer() else details.severity
        rows.append(("Severity", f"{severity}/10"))
    if details.location:
        rows.append(("Location", details.location))
    return rows


def _frame_rows(results: AnalysisResults) -> List[Tuple[str, str]]:
    rows = []
    for frame in results.frames:
        confidence = format_percentage(frame.confidence)
        rows.append((_format_seconds(frame.timestamp), confidence or "-"))
    return rows


def project(job: VideoAnalysisJob) -> JobStatusView:
    """
    Map a persisted job onto what the analysis list and result view display.

    Unknown statuses are shown like pending. Result lines only appear for a
    completed job that actually carries results; a missing confidence simply
    omits the percentage.
    """
    status = job.job_status or JobStatus.PENDING
    icon = _STATUS_ICONS[status]
    label = status.value.capitalize()

    if status != JobStatus.COMPLETED or job.results is None:
        return JobStatusView(icon=icon, label=label)

    results = job.results
    return JobStatusView(
        icon=icon,
        label=label,
        detection_label="Yes" if results.violence_detected else "No",
        detection_summary="Violence Detected" if results.violence_detected else "No Violence",
        confidence_label=format_percentage(results.confidence),
        details=_detail_rows(results),
        frames=_frame_rows(results),
    )

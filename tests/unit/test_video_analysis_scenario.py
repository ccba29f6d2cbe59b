"""
Upload a video, then watch its job move through the lifecycle in the live
analysis list until the result is displayed.
"""
from datetime import datetime, timezone

import pytest

from camwatch.application.services.job_status import SUCCESS_ICON, project
from camwatch.application.services.upload_pipeline import UploadCandidate, UploadPipeline
from camwatch.application.use_cases.video_analysis import user_analyses_view
from camwatch.domain.repositories import ChangeOperation

MIB = 1024 * 1024
UPLOADED_AT = datetime(2025, 6, 1, 10, 0, 0, tzinfo=timezone.utc)


def _fifty_mib_clip():
    block = b"\1" * MIB

    async def _chunks():
        for _ in range(50):
            yield block

    return UploadCandidate(filename="clip.mp4", content_type="video/mp4", size=50 * MIB, chunks=_chunks)


@pytest.mark.asyncio
async def test_upload_to_completed_result(context, store, notifier):
    store.tables["video_analysis"] = [
        {
            "id": "older",
            "user_id": "u1",
            "video_url": "https://store/videos/u1-1-old.mp4",
            "status": "completed",
            "results": {"violence_detected": True, "confidence": 0.5},
            "created_at": datetime(2025, 5, 1, tzinfo=timezone.utc),
        }
    ]
    view = user_analyses_view(context, "u1")
    await view.activate()

    pipeline = UploadPipeline(context, clock=lambda: UPLOADED_AT)
    progress = []
    pipeline.add_progress_listener(progress.append)

    job_id = await pipeline.upload(_fifty_mib_clip())

    assert progress[-1] == 100
    assert progress == sorted(progress)
    [record] = [r for r in store.tables["video_analysis"] if r["id"] == job_id]
    assert record["video_url"] == f"https://store/videos/u1-{int(UPLOADED_AT.timestamp() * 1000)}-clip.mp4"
    assert record["status"] == "pending"
    notifier.register_video.assert_awaited_once_with(record["video_url"])

    # The store reports our own insert through the feed
    await store.emit("video_analysis", ChangeOperation.INSERT, record)
    assert [job.id for job in view.items] == [job_id, "older"]
    assert view.items[0].status == "pending"

    # Processing service picks it up
    await store.external_update("video_analysis", job_id, status="processing")
    assert [job.id for job in view.items] == [job_id, "older"]
    assert project(view.items[0]).label == "Processing"

    # ...and finishes
    await store.external_update(
        "video_analysis",
        job_id,
        status="completed",
        results={"violence_detected": False, "confidence": 0.92},
    )
    result = project(view.store.get(job_id))
    assert result.icon == SUCCESS_ICON
    assert result.detection_label == "No"
    assert result.confidence_label == "92.0%"
    assert [job.id for job in view.items] == [job_id, "older"]

    await view.close()

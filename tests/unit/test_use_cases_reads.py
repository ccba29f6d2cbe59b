"""
Unit tests for the one-shot notification and analysis reads.
"""
from datetime import datetime, timezone

import pytest

from camwatch.application.use_cases.notification import ListNotificationsUseCase
from camwatch.application.use_cases.video_analysis import (
    GetAnalysisUseCase,
    ListAnalysesUseCase,
    UploadVideoUseCase,
)
from camwatch.application.services.upload_pipeline import UploadCandidate
from camwatch.core.exceptions import NotFoundError


def _ts(day):
    return datetime(2025, 4, day, tzinfo=timezone.utc)


@pytest.fixture
def seeded(store):
    store.tables["cameras"] = [
        {"id": "cam-1", "user_id": "u1", "camera_name": "Lobby", "ip_address": "10.0.0.2"},
    ]
    store.tables["notifications"] = [
        {"id": "n1", "user_id": "u1", "camera_id": "cam-1", "notification_text": "Fight", "timestamp": _ts(2)},
        {"id": "n2", "user_id": "u1", "camera_id": None, "notification_text": "System", "timestamp": _ts(3)},
        {"id": "n3", "user_id": "u2", "camera_id": "cam-x", "notification_text": "Other", "timestamp": _ts(4)},
    ]
    store.tables["video_analysis"] = [
        {"id": "j1", "user_id": "u1", "video_url": "https://store/videos/a.mp4", "status": "pending",
         "results": None, "created_at": _ts(1)},
        {"id": "j2", "user_id": "u1", "video_url": "https://store/videos/b.mp4", "status": "completed",
         "results": {"violence_detected": True, "confidence": 0.873}, "created_at": _ts(5)},
        {"id": "j3", "user_id": "u2", "video_url": "https://store/videos/c.mp4", "status": "pending",
         "results": None, "created_at": _ts(6)},
    ]
    return store


class TestListNotificationsUseCase:
    @pytest.mark.asyncio
    async def test_user_list_newest_first_with_camera_names(self, context, seeded, identity):
        result = await ListNotificationsUseCase(context).execute(identity)
        assert result.total == 2
        assert [n.id for n in result.items] == ["n2", "n1"]
        assert result.items[1].camera_name == "Lobby"
        assert result.items[0].camera_name is None

    @pytest.mark.asyncio
    async def test_camera_list(self, context, seeded, identity):
        result = await ListNotificationsUseCase(context).execute(identity, camera_id="cam-1")
        assert [n.id for n in result.items] == ["n1"]

    @pytest.mark.asyncio
    async def test_foreign_camera_is_not_found(self, context, seeded, identity):
        with pytest.raises(NotFoundError):
            await ListNotificationsUseCase(context).execute(identity, camera_id="cam-x")


class TestAnalyses:
    @pytest.mark.asyncio
    async def test_list_with_projected_status(self, context, seeded, identity):
        result = await ListAnalysesUseCase(context).execute(identity)
        assert [job.id for job in result.items] == ["j2", "j1"]
        assert result.items[0].view.label == "Completed"
        assert result.items[0].view.confidence_label == "87.3%"
        assert result.items[1].view.icon.name == "clock"

    @pytest.mark.asyncio
    async def test_get_result_view(self, context, seeded, identity):
        result = await GetAnalysisUseCase(context).execute("j2", identity)
        assert result.view.detection_label == "Yes"
        assert result.view.detection_summary == "Violence Detected"

    @pytest.mark.asyncio
    async def test_get_foreign_or_missing(self, context, seeded, identity):
        with pytest.raises(NotFoundError):
            await GetAnalysisUseCase(context).execute("j3", identity)
        with pytest.raises(NotFoundError):
            await GetAnalysisUseCase(context).execute("nope", identity)

    @pytest.mark.asyncio
    async def test_upload_use_case_returns_pending_job(self, context, store, identity):
        candidate = UploadCandidate.from_bytes("clip.avi", b"data", "video/avi")
        response = await UploadVideoUseCase(context).execute(candidate, identity)
        assert response.status == "pending"
        assert response.job_id == store.tables["video_analysis"][-1]["id"]

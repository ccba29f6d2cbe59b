"""
Unit tests for the domain models and their record conversion.
"""
from datetime import datetime, timezone

import pytest

from camwatch.domain.models import (
    AnalysisResults,
    Camera,
    JobStatus,
    Notification,
    VideoAnalysisJob,
    new_job_record,
)


class TestCamera:
    def test_blank_name_rejected(self):
        with pytest.raises(ValueError, match="Camera name is required"):
            Camera(id=None, user_id="u1", camera_name="  ", ip_address="10.0.0.1")

    def test_missing_owner_rejected(self):
        with pytest.raises(ValueError, match="Owner user ID is required"):
            Camera(id=None, user_id="", camera_name="Door", ip_address="10.0.0.1")

    def test_stream_url(self):
        camera = Camera(id="c1", user_id="u1", camera_name="Door", ip_address=" 10.0.0.1 ")
        assert camera.stream_url == "http://10.0.0.1"

    def test_to_record_strips_and_omits_unset(self):
        record = Camera(id=None, user_id="u1", camera_name=" Door ", ip_address="10.0.0.1").to_record()
        assert record == {"user_id": "u1", "camera_name": "Door", "ip_address": "10.0.0.1"}

    def test_from_record(self):
        camera = Camera.from_record({
            "id": "c1",
            "user_id": "u1",
            "camera_name": "Door",
            "ip_address": "10.0.0.1",
            "created_at": "2025-01-01T00:00:00Z",
        })
        assert camera.id == "c1"
        assert camera.created_at == datetime(2025, 1, 1, tzinfo=timezone.utc)


class TestNotification:
    def test_from_record_with_joined_camera(self):
        notification = Notification.from_record({
            "id": 7,
            "user_id": "u1",
            "camera_id": "c1",
            "notification_text": "Person detected",
            "timestamp": datetime(2025, 1, 1, 8, 0),
            "cameras": {"camera_name": "Door"},
        })
        assert notification.id == "7"
        assert notification.camera_name == "Door"
        assert notification.timestamp.tzinfo == timezone.utc

    def test_camera_reference_is_optional(self):
        notification = Notification.from_record({"id": "n1", "user_id": "u1", "camera_id": ""})
        assert notification.camera_id is None
        assert notification.camera_name is None

    def test_missing_id_is_rejected(self):
        with pytest.raises(KeyError):
            Notification.from_record({"user_id": "u1"})


class TestJobStatus:
    def test_terminal(self):
        assert JobStatus.COMPLETED.is_terminal
        assert JobStatus.ERROR.is_terminal
        assert not JobStatus.PENDING.is_terminal
        assert not JobStatus.PROCESSING.is_terminal

    def test_parse_unknown(self):
        assert JobStatus.parse("processing") is JobStatus.PROCESSING
        assert JobStatus.parse("queued") is None


class TestVideoAnalysisJob:
    def test_unknown_status_kept_raw(self):
        job = VideoAnalysisJob.from_record({"id": "j1", "status": "queued"})
        assert job.status == "queued"
        assert job.job_status is None

    def test_missing_status_defaults_to_pending(self):
        job = VideoAnalysisJob.from_record({"id": "j1"})
        assert job.job_status is JobStatus.PENDING

    def test_new_job_record(self):
        created = datetime(2025, 6, 1, tzinfo=timezone.utc)
        record = new_job_record("u1", "https://store/videos/x.mp4", created)
        assert record == {
            "user_id": "u1",
            "video_url": "https://store/videos/x.mp4",
            "status": "pending",
            "results": None,
            "created_at": created,
        }

    def test_new_job_record_requires_url(self):
        with pytest.raises(ValueError):
            new_job_record("u1", "", datetime.now(timezone.utc))


class TestAnalysisResults:
    def test_tolerates_malformed_parts(self):
        results = AnalysisResults.from_record({
            "violence_detected": True,
            "confidence": "0.4",
            "details": "not a dict",
            "frames": [{"timestamp": "x"}, "junk", {"timestamp": 2, "confidence": True}],
        })
        assert results.violence_detected is True
        assert results.confidence == 0.4
        assert results.details is None
        assert len(results.frames) == 1
        assert results.frames[0].confidence is None

    @pytest.mark.parametrize("flag", ["false", "true", 1, 0, None, [True]])
    def test_detection_needs_a_real_boolean(self, flag):
        assert AnalysisResults.from_record({"violence_detected": flag}).violence_detected is False
        assert AnalysisResults.from_record({}).violence_detected is False

    def test_non_dict_is_none(self):
        assert AnalysisResults.from_record(None) is None
        assert AnalysisResults.from_record("done") is None

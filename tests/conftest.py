"""
Shared pytest fixtures for camwatch tests.
"""
import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from camwatch.application.services.context import ClientContext
from camwatch.core.config import Settings
from camwatch.domain.repositories import Identity
from fakes import InMemoryRemoteStore


TEST_ENV = {
    "MONGO_URI": "mongodb://localhost:27017",
    "MONGO_DB_NAME": "test_camwatch_db",
    "JWT_SECRET_KEY": "test_secret_key_for_testing_only",
    "JWT_ALGORITHM": "HS256",
    "STORAGE_BUCKET": "videos",
    "STORAGE_PUBLIC_BASE_URL": "https://store",
    "UPLOAD_MAX_MB": "100",
    "UPLOAD_ALLOWED_MIME": "video/mp4,video/avi",
    "PROCESSING_SERVICE_URL": "http://processing.test",
    "LOCAL_TIMEZONE": "UTC",
}


@pytest.fixture
def mock_env():
    """Fixture to set common test environment variables."""
    with patch.dict(os.environ, TEST_ENV, clear=False):
        yield TEST_ENV


@pytest.fixture
def settings(mock_env):
    """Real Settings built from the test environment."""
    return Settings()


@pytest.fixture
def mock_settings():
    """Fixture to mock get_settings for tests. Patches all modules that use it."""
    mock = MagicMock()
    mock.mongo_uri = "mongodb://localhost:27017"
    mock.mongo_database_name = "test_db"
    mock.jwt_secret_key = "test_jwt_secret"
    mock.jwt_algorithm = "HS256"
    mock.local_timezone = "UTC"

    # Patch at source and at use sites (modules import get_settings at load time)
    with patch("camwatch.core.config.get_settings", return_value=mock), patch(
        "camwatch.core.security.get_settings", return_value=mock
    ), patch("camwatch.utils.datetime_utils.get_settings", return_value=mock):
        yield mock


@pytest.fixture
def store():
    """In-memory remote store acting for user u1."""
    return InMemoryRemoteStore(identity=Identity(user_id="u1", email="u1@example.com"))


@pytest.fixture
def notifier():
    """Registration notifier double; both calls succeed."""
    mock = AsyncMock()
    mock.register_camera.return_value = {}
    mock.register_video.return_value = {}
    return mock


@pytest.fixture
def context(store, notifier, settings):
    return ClientContext(store=store, notifier=notifier, settings=settings)


@pytest.fixture
def identity():
    return Identity(user_id="u1", email="u1@example.com")

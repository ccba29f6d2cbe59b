# Standard library imports
import os
from typing import Final, FrozenSet, List, Optional


def _split_csv(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings:
    """
    Application settings loaded from environment variables.

    This class centralizes all configuration settings for the application.
    All settings are loaded from environment variables with sensible defaults.
    """

    def __init__(self) -> None:
        # Database Configuration
        self.mongo_uri: Final[str] = os.getenv("MONGO_URI", "mongodb://localhost:27017")
        self.mongo_database_name: Final[str] = os.getenv("MONGO_DB_NAME", "camwatch")

        # Identity provider tokens (verification only, issuing is external)
        self.jwt_secret_key: Final[str] = os.getenv("JWT_SECRET_KEY", "change_this_secret_in_production")
        self.jwt_algorithm: Final[str] = os.getenv("JWT_ALGORITHM", "HS256")

        # Blob storage Configuration
        self.storage_bucket: Final[str] = os.getenv("STORAGE_BUCKET", "video-analysis")
        self.storage_public_base_url: Final[str] = os.getenv(
            "STORAGE_PUBLIC_BASE_URL",
            "http://localhost:8000/storage"
        ).rstrip("/")

        # Upload Configuration
        self.upload_max_mb: Final[int] = int(os.getenv("UPLOAD_MAX_MB", "100"))
        self.upload_allowed_mime: Final[FrozenSet[str]] = frozenset(
            _split_csv(os.getenv("UPLOAD_ALLOWED_MIME", "video/mp4,video/avi"))
        )
        self.upload_chunk_size: Final[int] = int(os.getenv("UPLOAD_CHUNK_SIZE", str(1024 * 1024)))

        # Processing service (violence detection worker) Configuration
        self.processing_service_url: Final[str] = os.getenv(
            "PROCESSING_SERVICE_URL",
            "http://127.0.0.1:5000"
        ).rstrip("/")
        self.processing_service_timeout: Final[float] = float(
            os.getenv("PROCESSING_SERVICE_TIMEOUT", "10.0")
        )
        self.processing_service_max_connections: Final[int] = int(
            os.getenv("PROCESSING_SERVICE_MAX_CONNECTIONS", "20")
        )

        # HTTP surface
        self.cors_origins: Final[List[str]] = _split_csv(
            os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000")
        )
        self.local_timezone: Final[str] = os.getenv("LOCAL_TIMEZONE", "UTC")

    @property
    def upload_max_bytes(self) -> int:
        return self.upload_max_mb * 1024 * 1024


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None

# Standard library imports
from pathlib import Path
from contextlib import asynccontextmanager
import logging

# External package imports
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Local application imports
from .api.v1 import camera_router, notifications_router, storage_router, video_analysis_router
from .core.config import get_settings
from .di.container import get_container, reset_container
from .infrastructure.db.mongo_connection import close_mongo_client
from .infrastructure.http_client_factory import close_shared_http_client
from .infrastructure.notifications import LiveViewRegistry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.

    Builds the DI container on startup. On shutdown every open live view is
    closed (releasing its change-feed subscription) before the shared HTTP
    client and the MongoDB client go away.
    """
    container = get_container()
    logger.info("Dependency container initialized")

    yield

    try:
        closed = await container.get(LiveViewRegistry).close_all()
        logger.info(f"Closed {closed} live view(s) during application shutdown")
    except Exception as e:
        logger.error(f"Error closing live views: {e}", exc_info=True)

    try:
        await close_shared_http_client()
    except Exception as e:
        logger.error(f"Error closing shared HTTP client: {e}", exc_info=True)

    close_mongo_client()
    reset_container()
    logger.info("Application shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.

    This function sets up the FastAPI application with:
    - Environment variable loading
    - CORS middleware configuration
    - API route registration

    Returns:
        Configured FastAPI application instance
    """
    # Load environment variables from .env file
    env_path = Path(__file__).resolve().parent.parent / ".env"
    load_dotenv(env_path)
    settings = get_settings()

    # Create FastAPI app
    application = FastAPI(
        title="camwatch API",
        version="1.0.0",
        description="Cameras, live notifications and video violence analysis",
        lifespan=lifespan
    )

    # Add CORS middleware
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register API routers
    application.include_router(camera_router, prefix="/api/v1/cameras")
    application.include_router(notifications_router, prefix="/api/v1/notifications")
    application.include_router(video_analysis_router, prefix="/api/v1/video-analysis")
    application.include_router(storage_router, prefix="/storage")

    return application


# Create application instance
app = create_application()

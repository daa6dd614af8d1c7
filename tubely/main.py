"""
FastAPI Main Application
"""
import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from tubely.config import get_settings
from tubely.database import Base, engine
from tubely.services.assets import ASSETS_URL_PATH
from tubely.utils.logger import setup_logger

settings = get_settings()
setup_logger("tubely", logging.DEBUG if settings.debug else logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Upload thumbnails and videos, classify aspect ratio, store in S3",
)


@app.on_event("startup")
async def startup_event():
    """Create storage directories and tables, verify ffprobe on startup"""
    from tubely.utils.ffprobe_check import FFprobeNotFoundError, check_ffprobe_installation

    for path in [settings.assets_root, settings.temp_root]:
        Path(path).mkdir(parents=True, exist_ok=True)

    try:
        ffprobe_info = check_ffprobe_installation(settings.ffprobe_path)
        logger.info(f"ffprobe: {ffprobe_info['version']}")
    except FFprobeNotFoundError as e:
        logger.warning(f"ffprobe check failed (video uploads will fail): {e}")

    # Import models to register them with Base
    from tubely.models import Video  # noqa
    Base.metadata.create_all(bind=engine)


# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Health check endpoint"""
    return {
        "message": "Tubely API",
        "version": settings.app_version,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint with dependency status"""
    from tubely.utils.ffprobe_check import FFprobeNotFoundError, check_ffprobe_installation

    health = {"status": "healthy", "dependencies": {}}

    try:
        ffprobe_info = check_ffprobe_installation(settings.ffprobe_path)
        health["dependencies"]["ffprobe"] = {
            "status": "ok",
            "version": ffprobe_info.get("version", "unknown")
        }
    except FFprobeNotFoundError as e:
        health["dependencies"]["ffprobe"] = {
            "status": "error",
            "message": str(e)
        }
        health["status"] = "degraded"

    return health


# Include routers
from tubely.api.thumbnails import router as thumbnails_router  # noqa: E402
from tubely.api.videos import router as videos_router  # noqa: E402

app.include_router(thumbnails_router)
app.include_router(videos_router)

app.mount(
    ASSETS_URL_PATH,
    StaticFiles(directory=settings.assets_root, check_dir=False),
    name="assets"
)

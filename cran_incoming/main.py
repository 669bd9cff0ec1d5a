"""FastAPI application entry point."""

import logging
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from cran_incoming.config import Settings, get_settings
from cran_incoming.routers import health, snapshots
from cran_incoming.services.cache_service import SnapshotCache
from cran_incoming.services.capture_service import CaptureService

# Configure logging
settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format=settings.log_format
)
logger = logging.getLogger(__name__)


def build_snapshot_cache(settings: Settings) -> SnapshotCache:
    """Create the snapshot cache backed by FTP captures."""
    capture_service = CaptureService(settings)
    executor = ThreadPoolExecutor(
        max_workers=settings.capture_workers,
        thread_name_prefix="snapshot-capture",
    )
    return SnapshotCache(
        ttl=settings.cache_ttl,
        capture=capture_service.capture,
        executor=executor,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting CRAN Incoming Tracker")
    logger.info(f"FTP source: {settings.ftp_host}:{settings.ftp_port}{settings.ftp_root}")
    logger.info(f"Snapshot update interval: {settings.cache_ttl_seconds}s")

    app.state.snapshot_cache = build_snapshot_cache(settings)

    yield

    logger.info("Shutting down CRAN Incoming Tracker")
    if hasattr(app.state, "snapshot_cache"):
        app.state.snapshot_cache.close()


# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description=settings.api_description,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)
app.add_middleware(GZipMiddleware, minimum_size=settings.gzip_minimum_size)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(snapshots.router, tags=["Snapshots"])


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc) if settings.debug else "An unexpected error occurred"
        }
    )


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.api_title,
        "version": settings.api_version,
        "description": settings.api_description,
        "docs": "/docs",
        "health": "/health",
        "snapshot": "/snap"
    }

"""Health check router."""

from fastapi import APIRouter, Depends

from cran_incoming.config import get_settings
from cran_incoming.routers.snapshots import get_snapshot_cache
from cran_incoming.services.cache_service import SnapshotCache

router = APIRouter()


@router.get("/health")
async def health_check(cache: SnapshotCache = Depends(get_snapshot_cache)):
    """
    Health check endpoint.

    Returns:
        Service status and snapshot cache state
    """
    settings = get_settings()

    return {
        "status": "healthy" if cache.last_error is None else "degraded",
        "service": settings.api_title,
        "version": settings.api_version,
        "ftp": f"{settings.ftp_host}:{settings.ftp_port}{settings.ftp_root}",
        "cache": cache.status(),
    }

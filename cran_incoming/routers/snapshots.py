"""Snapshot router."""

import logging
from fastapi import APIRouter, Depends, Request

from cran_incoming.models.snapshot import SnapshotContainer
from cran_incoming.services.cache_service import SnapshotCache

logger = logging.getLogger(__name__)
router = APIRouter()


def get_snapshot_cache(request: Request) -> SnapshotCache:
    """Dependency to get the process-wide snapshot cache."""
    return request.app.state.snapshot_cache


@router.get("/snap", response_model=SnapshotContainer)
async def get_snapshot(cache: SnapshotCache = Depends(get_snapshot_cache)):
    """
    Get the latest snapshot of the incoming tree.

    Captures a new snapshot when the cached one is older than the update
    interval. Always answers, serving the previous (or an empty) snapshot
    if the capture fails.

    Returns:
        Update interval and snapshot
    """
    return await cache.get_snapshot()

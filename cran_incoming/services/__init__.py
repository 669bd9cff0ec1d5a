"""Service layer for the CRAN Incoming Tracker."""

from cran_incoming.services.cache_service import SnapshotCache
from cran_incoming.services.capture_service import CaptureService
from cran_incoming.services.tree_walker import TreeWalker

__all__ = ["SnapshotCache", "CaptureService", "TreeWalker"]

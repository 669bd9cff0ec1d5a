"""API routers for the CRAN Incoming Tracker."""

from cran_incoming.routers import health, snapshots

__all__ = ["health", "snapshots"]

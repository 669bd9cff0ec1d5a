"""Pydantic models for snapshots and remote listing entries."""

from cran_incoming.models.remote_entry import EntryKind, RemoteEntry
from cran_incoming.models.snapshot import Snapshot, SnapshotContainer, Submission

__all__ = [
    "EntryKind",
    "RemoteEntry",
    "Snapshot",
    "SnapshotContainer",
    "Submission",
]

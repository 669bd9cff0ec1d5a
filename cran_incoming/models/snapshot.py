"""Snapshot models."""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from cran_incoming.utils.timeutils import round_to_second, utc_now


class Submission(BaseModel):
    """A package archive found in the incoming tree."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "request_time": "2024-01-15T10:30:12Z",
                "folder": "pretest",
                "file_time": "2024-01-15T09:12:00Z",
                "file_bytes": 1048576,
                "pkg_name": "ggplot2",
                "pkg_version": "3.4.4",
            }
        },
    )

    request_time: datetime = Field(..., description="When the containing folder was listed (UTC)")
    folder: str = Field(..., description="Folder relative to the incoming root")
    file_time: datetime = Field(..., description="Last modification of the file (UTC)")
    file_bytes: int = Field(..., description="File size in bytes", ge=0)
    pkg_name: str = Field(..., description="Package name from the archive filename")
    pkg_version: str = Field(..., description="Package version from the archive filename")


class Snapshot(BaseModel):
    """One complete inventory of the incoming tree."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "capture_time": "2024-01-15T10:30:12Z",
                "capture_duration": 4820,
                "submissions": [],
            }
        },
    )

    capture_time: datetime = Field(..., description="When the traversal began (UTC)")
    capture_duration: int = Field(0, description="Traversal duration in milliseconds", ge=0)
    submissions: list[Submission] = Field(default_factory=list, description="Submissions in traversal order")

    @classmethod
    def placeholder(cls) -> "Snapshot":
        """Empty snapshot served until the first capture succeeds."""
        return cls(capture_time=round_to_second(utc_now()), capture_duration=0, submissions=[])


class SnapshotContainer(BaseModel):
    """Document served to clients."""

    model_config = ConfigDict(frozen=True)

    update_interval: int = Field(..., description="Cache refresh interval in seconds", ge=0)
    snapshot: Snapshot

"""Remote directory listing entry."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class EntryKind(str, Enum):
    """Kind of a listed entry."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


class RemoteEntry(BaseModel):
    """One decoded record of an FTP LIST reply."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Entry name without directory")
    kind: EntryKind = Field(..., description="File, directory, symlink or other")
    size: int = Field(0, description="Size in bytes", ge=0)
    raw_modified: str = Field("", description="Modification date as printed by the server")
    link_target: Optional[str] = Field(None, description="Target of a symbolic link")

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

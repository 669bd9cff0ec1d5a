"""Turns listing entries into submissions."""

import re
from datetime import datetime
from typing import Optional, Pattern

from cran_incoming.models.remote_entry import RemoteEntry
from cran_incoming.models.snapshot import Submission

PACKAGE_FILE_PATTERN = re.compile(r"^(.+)_(.+)\.tar\.gz$")
UNKNOWN = "[unknown]"


def relative_folder(path: str, root: str) -> str:
    """Strip ``root`` and the following separator from ``path``."""
    return path[len(root) + 1:]


def create_submission(
    entry: RemoteEntry,
    folder: str,
    request_time: datetime,
    modified_time: datetime,
    root: str,
    pattern: Pattern[str] = PACKAGE_FILE_PATTERN,
) -> Optional[Submission]:
    """
    Build a submission from one listing entry.

    Args:
        entry: Decoded listing entry
        folder: Absolute path of the folder containing the entry
        request_time: When the folder was listed (UTC)
        modified_time: Corrected modification time of the entry (UTC)
        root: Absolute path of the traversal root
        pattern: Archive filename pattern with name and version groups

    Returns:
        Submission, or None for non-files and non-archives
    """
    if not entry.is_file:
        return None

    match = pattern.match(entry.name)
    if match is None:
        return None

    return Submission(
        request_time=request_time,
        folder=relative_folder(folder, root),
        file_time=modified_time,
        file_bytes=entry.size,
        pkg_name=UNKNOWN if match.group(1) is None else match.group(1),
        pkg_version=UNKNOWN if match.group(2) is None else match.group(2),
    )

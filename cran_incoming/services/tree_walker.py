"""Depth-bounded traversal of the remote incoming tree."""

import logging
from datetime import datetime
from typing import Callable, Pattern
from zoneinfo import ZoneInfo

from cran_incoming.exceptions import ModifyTimeUnavailable
from cran_incoming.models.remote_entry import EntryKind
from cran_incoming.models.snapshot import Submission
from cran_incoming.services.entry_normalizer import PACKAGE_FILE_PATTERN, create_submission
from cran_incoming.services.ftp_client import RemoteDirectory
from cran_incoming.services.listing_parser import parse_listing
from cran_incoming.utils.timeutils import round_to_second, to_utc, utc_now

logger = logging.getLogger(__name__)

VIENNA = ZoneInfo("Europe/Vienna")


class TreeWalker:
    """Lists folders up to ``max_depth`` below the root and collects submissions."""

    def __init__(
        self,
        connection: RemoteDirectory,
        root: str,
        max_depth: int = 2,
        pattern: Pattern[str] = PACKAGE_FILE_PATTERN,
        source_zone: ZoneInfo = VIENNA,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.connection = connection
        self.root = root
        self.max_depth = max_depth
        self.pattern = pattern
        self.source_zone = source_zone
        self.clock = clock
        self.folders_listed = 0

    def walk(self) -> list[Submission]:
        """
        Traverse the tree depth-first.

        Returns:
            Submissions in traversal order

        Raises:
            RemoteError: If a listing fails
            ListingParseError: If a listing cannot be decoded
        """
        submissions: list[Submission] = []
        pending: list[tuple[int, str]] = [(0, self.root)]

        while pending:
            depth, path = pending.pop()
            request_time = round_to_second(self.clock())
            entries = parse_listing(self.connection.list(path))
            self.folders_listed += 1

            for entry in entries:
                entry_path = "/".join([path, entry.name])

                if entry.kind is EntryKind.DIRECTORY:
                    if depth < self.max_depth:
                        pending.append((depth + 1, entry_path))
                elif entry.kind is EntryKind.FILE:
                    modified_time = self._modified_time(entry_path)
                    submission = create_submission(
                        entry, path, request_time, modified_time, self.root, self.pattern
                    )
                    if submission is not None:
                        submissions.append(submission)
                # symlinks and special files are ignored

        logger.debug(f"Listed {self.folders_listed} folders below {self.root}")
        return submissions

    def _modified_time(self, path: str) -> datetime:
        """MDTM in the source zone, corrected to UTC."""
        try:
            local_time = self.connection.modify_time(path)
        except ModifyTimeUnavailable as e:
            logger.warning(f"Using current time for {path}: {e}")
            local_time = self.clock().replace(tzinfo=None)

        return to_utc(local_time, self.source_zone, fallback=self.clock())

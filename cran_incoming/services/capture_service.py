"""Snapshot capture service."""

import logging
import re
import time
from datetime import datetime
from typing import Callable, ContextManager, Optional
from zoneinfo import ZoneInfo

from cran_incoming.config import Settings, get_settings
from cran_incoming.models.snapshot import Snapshot
from cran_incoming.services.ftp_client import RemoteDirectory, open_connection
from cran_incoming.services.tree_walker import TreeWalker
from cran_incoming.utils.formatters import format_bytes, format_duration_ms
from cran_incoming.utils.timeutils import round_to_second, utc_now

logger = logging.getLogger(__name__)

Connector = Callable[..., ContextManager[RemoteDirectory]]


class CaptureService:
    """Runs one full traversal of the incoming tree."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        connect: Connector = open_connection,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize capture service.

        Args:
            settings: Settings instance (defaults to the cached settings)
            connect: Context manager factory yielding an authenticated connection
            clock: Source of the current UTC time
        """
        self.settings = settings or get_settings()
        self.connect = connect
        self.clock = clock
        self.pattern = re.compile(self.settings.package_file_pattern)
        self.source_zone = ZoneInfo(self.settings.source_timezone)

    def capture(self) -> Snapshot:
        """
        Capture a fresh snapshot.

        Returns:
            Completed Snapshot

        Raises:
            CaptureError: If connecting, logging in or any listing fails
        """
        settings = self.settings

        with self.connect(
            host=settings.ftp_host,
            port=settings.ftp_port,
            user=settings.ftp_user,
            password=settings.ftp_password,
            timeout=settings.ftp_timeout_seconds,
        ) as connection:
            capture_time = round_to_second(self.clock())
            started = time.monotonic()

            walker = TreeWalker(
                connection,
                root=settings.ftp_root,
                max_depth=settings.max_depth,
                pattern=self.pattern,
                source_zone=self.source_zone,
                clock=self.clock,
            )
            submissions = walker.walk()

            duration_ms = max(0, int((time.monotonic() - started) * 1000))

        total_bytes = sum(s.file_bytes for s in submissions)
        logger.info(
            f"Captured {len(submissions)} submissions ({format_bytes(total_bytes)}) "
            f"from {walker.folders_listed} folders in {format_duration_ms(duration_ms)}"
        )

        return Snapshot(
            capture_time=capture_time,
            capture_duration=duration_ms,
            submissions=submissions,
        )

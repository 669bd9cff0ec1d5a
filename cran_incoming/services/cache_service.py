"""TTL-gated snapshot cache."""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from cran_incoming.exceptions import CaptureError
from cran_incoming.models.snapshot import Snapshot, SnapshotContainer
from cran_incoming.utils.locks import ReadWriteLock
from cran_incoming.utils.timeutils import utc_now

logger = logging.getLogger(__name__)

NEVER = datetime.min.replace(tzinfo=timezone.utc)


class SnapshotCache:
    """
    Serves the latest snapshot, recapturing once the TTL has elapsed.

    Refreshes are single-flight: the refresh lock is held across the staleness
    check and the whole capture, so callers arriving during a capture wait for
    its result. A failed capture keeps the previous snapshot and still counts
    as an update, so retries happen at most once per TTL.
    """

    def __init__(
        self,
        ttl: timedelta,
        capture: Callable[[], Snapshot],
        clock: Callable[[], datetime] = utc_now,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        """
        Initialize snapshot cache.

        Args:
            ttl: Refresh interval
            capture: Blocking function producing a new snapshot
            clock: Source of the current UTC time
            executor: Pool the capture runs on (default: one dedicated thread)
        """
        self.ttl = ttl
        self._capture = capture
        self._clock = clock
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="snapshot-capture"
        )

        self._refresh_lock = asyncio.Lock()
        self._snapshot_lock = ReadWriteLock()
        self._snapshot = Snapshot.placeholder()
        self._last_update = NEVER

        self.last_success: Optional[datetime] = None
        self.last_error: Optional[str] = None
        self.capture_count = 0
        self.failure_count = 0

    @property
    def last_update(self) -> datetime:
        return self._last_update

    @property
    def update_interval(self) -> int:
        return int(self.ttl.total_seconds())

    def is_stale(self, now: datetime) -> bool:
        return now - self._last_update > self.ttl

    async def get_snapshot(self) -> SnapshotContainer:
        """
        Get the current snapshot, capturing a new one if the TTL has elapsed.

        Never raises for a failed capture.

        Returns:
            SnapshotContainer with the refresh interval and snapshot
        """
        async with self._refresh_lock:
            now = self._clock()
            if self.is_stale(now):
                logger.info("Snapshot cache stale, capturing")
                self._last_update = now
                await self._refresh()
            else:
                logger.debug("Using cached snapshot")

        async with self._snapshot_lock.read():
            snapshot = self._snapshot

        return SnapshotContainer(update_interval=self.update_interval, snapshot=snapshot)

    async def _refresh(self) -> None:
        """Run a capture on the executor and store its result."""
        loop = asyncio.get_running_loop()
        self.capture_count += 1

        try:
            snapshot = await loop.run_in_executor(self._executor, self._capture)
        except CaptureError as e:
            self.failure_count += 1
            self.last_error = str(e)
            logger.error(f"Could not create snapshot: {e}")
            return
        except Exception as e:
            self.failure_count += 1
            self.last_error = str(e)
            logger.exception(f"Unexpected error creating snapshot: {e}")
            return

        async with self._snapshot_lock.write():
            self._snapshot = snapshot

        self.last_success = self._last_update
        self.last_error = None

    def status(self) -> dict[str, Any]:
        """
        Cache state for health checks.

        Returns:
            Dictionary with update times, counters and the last error
        """
        return {
            "update_interval": self.update_interval,
            "last_update": None if self._last_update == NEVER else self._last_update.isoformat(),
            "last_success": self.last_success.isoformat() if self.last_success else None,
            "last_error": self.last_error,
            "capture_count": self.capture_count,
            "failure_count": self.failure_count,
        }

    def close(self) -> None:
        """Shut down the capture executor."""
        self._executor.shutdown(wait=False)

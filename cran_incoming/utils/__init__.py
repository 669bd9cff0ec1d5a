"""Utility functions for the CRAN Incoming Tracker."""

from cran_incoming.utils.formatters import format_bytes, format_duration_ms
from cran_incoming.utils.locks import ReadWriteLock
from cran_incoming.utils.timeutils import (
    LocalTimeKind,
    LocalTimeResolution,
    resolve_local_time,
    round_to_second,
    to_utc,
    utc_now,
)

__all__ = [
    "format_bytes",
    "format_duration_ms",
    "ReadWriteLock",
    "LocalTimeKind",
    "LocalTimeResolution",
    "resolve_local_time",
    "round_to_second",
    "to_utc",
    "utc_now",
]

"""Time zone correction for timestamps reported by the FTP server."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional
from zoneinfo import ZoneInfo


class LocalTimeKind(str, Enum):
    """How a wall-clock time maps onto a time zone."""

    UNAMBIGUOUS = "unambiguous"
    GAP = "gap"  # skipped by a spring-forward transition
    FOLD = "fold"  # repeated by a fall-back transition


@dataclass(frozen=True)
class LocalTimeResolution:
    """Result of interpreting a naive wall-clock time in a zone."""

    kind: LocalTimeKind
    candidates: tuple[datetime, ...]  # UTC instants, earliest first


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def round_to_second(value: datetime) -> datetime:
    """Round to the nearest whole second, halves up."""
    return (value + timedelta(microseconds=500_000)).replace(microsecond=0)


def resolve_local_time(naive: datetime, zone: ZoneInfo) -> LocalTimeResolution:
    """
    Interpret a naive datetime as wall-clock time in ``zone``.

    Args:
        naive: Wall-clock time without tzinfo
        zone: Zone the wall-clock time was observed in

    Returns:
        LocalTimeResolution with zero (gap), one (unambiguous) or two (fold)
        candidate UTC instants
    """
    first = naive.replace(tzinfo=zone, fold=0)
    second = naive.replace(tzinfo=zone, fold=1)

    if first.utcoffset() == second.utcoffset():
        return LocalTimeResolution(
            LocalTimeKind.UNAMBIGUOUS,
            (first.astimezone(timezone.utc),),
        )

    instants = tuple(sorted({first.astimezone(timezone.utc), second.astimezone(timezone.utc)}))

    # Times inside a gap do not survive the round trip through UTC
    for instant in instants:
        if instant.astimezone(zone).replace(tzinfo=None) != naive:
            return LocalTimeResolution(LocalTimeKind.GAP, ())

    return LocalTimeResolution(LocalTimeKind.FOLD, instants)


def to_utc(naive: datetime, zone: ZoneInfo, fallback: Optional[datetime] = None) -> datetime:
    """
    Convert a wall-clock time in ``zone`` to UTC.

    A repeated wall-clock time resolves to its first occurrence (the earlier
    instant). A skipped wall-clock time resolves to ``fallback``, or the
    current time when no fallback is given.

    Args:
        naive: Wall-clock time without tzinfo
        zone: Zone the wall-clock time was observed in
        fallback: Value returned for times that do not exist in ``zone``

    Returns:
        Aware UTC datetime
    """
    resolution = resolve_local_time(naive, zone)

    if resolution.kind is LocalTimeKind.GAP:
        return fallback if fallback is not None else utc_now()

    return resolution.candidates[0]

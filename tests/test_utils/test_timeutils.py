"""Tests for time zone correction."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from cran_incoming.utils.timeutils import (
    LocalTimeKind,
    resolve_local_time,
    round_to_second,
    to_utc,
)

VIENNA = ZoneInfo("Europe/Vienna")


def test_resolve_unambiguous_winter_time():
    """Test winter wall time converts with the CET offset."""
    resolution = resolve_local_time(datetime(2024, 1, 15, 10, 30), VIENNA)
    assert resolution.kind is LocalTimeKind.UNAMBIGUOUS
    assert resolution.candidates == (datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc),)


def test_resolve_unambiguous_summer_time():
    """Test summer wall time converts with the CEST offset."""
    resolution = resolve_local_time(datetime(2024, 7, 1, 12, 0), VIENNA)
    assert resolution.kind is LocalTimeKind.UNAMBIGUOUS
    assert resolution.candidates[0] == datetime(2024, 7, 1, 10, 0, tzinfo=timezone.utc)


def test_resolve_gap():
    """Test a wall time skipped by spring-forward is a gap."""
    resolution = resolve_local_time(datetime(2024, 3, 31, 2, 30), VIENNA)
    assert resolution.kind is LocalTimeKind.GAP
    assert resolution.candidates == ()


def test_resolve_fold():
    """Test a wall time repeated by fall-back yields both instants, earliest first."""
    resolution = resolve_local_time(datetime(2024, 10, 27, 2, 30), VIENNA)
    assert resolution.kind is LocalTimeKind.FOLD
    assert resolution.candidates == (
        datetime(2024, 10, 27, 0, 30, tzinfo=timezone.utc),
        datetime(2024, 10, 27, 1, 30, tzinfo=timezone.utc),
    )


def test_to_utc_fold_picks_earlier_instant():
    """Test ambiguous wall times resolve to the first occurrence."""
    result = to_utc(datetime(2024, 10, 27, 2, 30), VIENNA)
    assert result == datetime(2024, 10, 27, 0, 30, tzinfo=timezone.utc)


def test_to_utc_gap_uses_fallback():
    """Test nonexistent wall times resolve to the fallback."""
    fallback = datetime(2024, 3, 31, 8, 0, tzinfo=timezone.utc)
    assert to_utc(datetime(2024, 3, 31, 2, 30), VIENNA, fallback=fallback) == fallback


def test_to_utc_gap_without_fallback_is_aware():
    """Test the default gap fallback is an aware UTC time."""
    result = to_utc(datetime(2024, 3, 31, 2, 0), VIENNA)
    assert result.utcoffset().total_seconds() == 0


def test_to_utc_unambiguous_is_utc():
    """Test converted values carry UTC tzinfo."""
    result = to_utc(datetime(2024, 1, 15, 10, 30), VIENNA)
    assert result.tzinfo is timezone.utc
    assert result.hour == 9


def test_round_to_second():
    """Test rounding to whole seconds."""
    base = datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc)
    assert round_to_second(base.replace(microsecond=499_999)) == base
    assert round_to_second(base.replace(microsecond=500_000)) == base.replace(second=1)
    assert round_to_second(datetime(2024, 1, 15, 23, 59, 59, 900_000)) == datetime(2024, 1, 16)

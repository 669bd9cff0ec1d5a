"""Tests for the snapshot capture service."""

import pytest
from contextlib import contextmanager
from datetime import datetime, timezone

from cran_incoming.exceptions import RemoteError
from cran_incoming.services.capture_service import CaptureService


def test_capture_builds_snapshot(test_settings, fake_connect, fake_connection, clock):
    """Test a capture assembles every submission of the walk."""
    service = CaptureService(test_settings, connect=fake_connect, clock=clock)

    snapshot = service.capture()

    assert snapshot.capture_time == datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
    assert snapshot.capture_duration >= 0
    assert {s.pkg_name for s in snapshot.submissions} == {"rootpkg", "foo", "deep", "bar"}
    assert fake_connection.closed


def test_capture_uses_configured_endpoint(test_settings, fake_connect, clock):
    """Test the connection is opened with the configured endpoint and credentials."""
    CaptureService(test_settings, connect=fake_connect, clock=clock).capture()

    assert fake_connect.calls == [{
        "host": "ftp.example.org",
        "port": 2121,
        "user": "anonymous",
        "password": "anonymous",
        "timeout": 5.0,
    }]


def test_capture_honours_configured_depth(test_settings, fake_connect, fake_connection, clock):
    """Test max_depth comes from settings."""
    settings = test_settings.model_copy(update={"max_depth": 1})

    snapshot = CaptureService(settings, connect=fake_connect, clock=clock).capture()

    assert "/incoming/pretest/KH" not in fake_connection.listed
    assert "deep" not in {s.pkg_name for s in snapshot.submissions}


def test_capture_propagates_connect_failure(test_settings, clock):
    """Test login failures fail the capture."""
    @contextmanager
    def refuse(**kwargs):
        raise RemoteError("530 Login incorrect")
        yield

    service = CaptureService(test_settings, connect=refuse, clock=clock)

    with pytest.raises(RemoteError):
        service.capture()


def test_capture_closes_connection_on_walk_failure(test_settings, fake_connect, fake_connection, clock):
    """Test the connection is closed when the walk fails midway."""
    fake_connection.tree.pop("/incoming/inspect")
    service = CaptureService(test_settings, connect=fake_connect, clock=clock)

    with pytest.raises(RemoteError):
        service.capture()

    assert fake_connection.closed

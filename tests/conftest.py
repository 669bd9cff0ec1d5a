"""Pytest configuration and fixtures."""

import pytest
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone

from cran_incoming.config import Settings
from cran_incoming.exceptions import ModifyTimeUnavailable, RemoteError


def file_line(name: str, size: int = 1024) -> str:
    """POSIX LIST line for a regular file."""
    return f"-rw-r--r--    1 ftp      ftp      {size:>10} Jan 15 10:30 {name}"


def dir_line(name: str) -> str:
    """POSIX LIST line for a directory."""
    return f"drwxr-xr-x    2 ftp      ftp            4096 Jan 15 10:30 {name}"


def link_line(name: str, target: str) -> str:
    """POSIX LIST line for a symbolic link."""
    return f"lrwxrwxrwx    1 ftp      ftp              12 Jan 15 10:30 {name} -> {target}"


class FakeClock:
    """Controllable UTC clock."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


class FakeFtpConnection:
    """In-memory stand-in for an FTP session."""

    def __init__(self, tree: dict[str, list[str]], mtimes: dict[str, object] = None):
        self.tree = tree
        self.mtimes = mtimes or {}
        self.listed: list[str] = []
        self.mdtm_queries: list[str] = []
        self.closed = False

    def list(self, path: str) -> list[str]:
        self.listed.append(path)
        if path not in self.tree:
            raise RemoteError(f"550 {path}: No such file or directory")
        return self.tree[path]

    def modify_time(self, path: str) -> datetime:
        self.mdtm_queries.append(path)
        value = self.mtimes.get(path, datetime(2024, 1, 15, 10, 30, 0))
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def clock():
    """Clock fixed at 2024-01-15 12:00:00 UTC."""
    return FakeClock(datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def incoming_tree():
    """Incoming tree three levels deep with files, links and junk."""
    return {
        "/incoming": [
            "total 12",
            dir_line("."),
            dir_line(".."),
            dir_line("pretest"),
            dir_line("inspect"),
            file_line("rootpkg_0.1.tar.gz", 2048),
            file_line("README.txt", 100),
            link_line("latest", "pretest"),
        ],
        "/incoming/pretest": [
            file_line("foo_1.2.3.tar.gz", 4096),
            file_line("notes.md", 10),
            dir_line("KH"),
            link_line("bar_9.9.tar.gz", "../inspect/bar_1.0.tar.gz"),
        ],
        "/incoming/pretest/KH": [
            file_line("deep_2.0.tar.gz", 512),
            dir_line("too_deep"),
        ],
        "/incoming/pretest/KH/too_deep": [
            file_line("hidden_1.0.tar.gz", 1),
        ],
        "/incoming/inspect": [
            file_line("bar_1.0.tar.gz", 8192),
        ],
    }


@pytest.fixture
def fake_connection(incoming_tree):
    """Fake connection over the incoming tree."""
    return FakeFtpConnection(
        incoming_tree,
        mtimes={"/incoming/inspect/bar_1.0.tar.gz": ModifyTimeUnavailable("550 not a plain file")},
    )


@pytest.fixture
def fake_connect(fake_connection):
    """Connector yielding the fake connection; records the connect arguments."""
    calls = []

    @contextmanager
    def connect(**kwargs):
        calls.append(kwargs)
        try:
            yield fake_connection
        finally:
            fake_connection.closed = True

    connect.calls = calls
    return connect


@pytest.fixture
def test_settings():
    """Settings independent of the environment."""
    return Settings(
        _env_file=None,
        ftp_host="ftp.example.org",
        ftp_port=2121,
        ftp_root="/incoming",
        ftp_timeout_seconds=5.0,
        cache_ttl_seconds=600,
    )


@pytest.fixture
def sample_submission():
    """Sample Submission payload."""
    return {
        "request_time": datetime(2024, 1, 15, 10, 30, 12, tzinfo=timezone.utc),
        "folder": "pretest",
        "file_time": datetime(2024, 1, 15, 9, 12, 0, tzinfo=timezone.utc),
        "file_bytes": 1048576,
        "pkg_name": "ggplot2",
        "pkg_version": "3.4.4",
    }

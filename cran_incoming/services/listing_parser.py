"""Decoder for FTP LIST replies."""

import re
from typing import Iterable

from cran_incoming.exceptions import ListingParseError
from cran_incoming.models.remote_entry import EntryKind, RemoteEntry

# -rw-r--r--   1 ftp      ftp        402671 Jan 15 10:30 pkg_1.0.tar.gz
_POSIX_LINE = re.compile(
    r"^(?P<type>[\-dlbcps])"
    r"[rwxsStTl\-]{9}[+@.]?\s+"
    r"\d+\s+"
    r"\S+\s+"
    r"(?:\S+\s+)?"
    r"(?:(?P<major>\d+),\s*)?"  # device numbers: major, minor
    r"(?P<size>\d+)\s+"
    r"(?P<date>[A-Za-z]{3}\s+\d{1,2}\s+(?:\d{1,2}:\d{2}|\d{4}))\s+"
    r"(?P<name>.+)$"
)

# 01-15-24  10:30AM       <DIR>          pretest
_DOS_LINE = re.compile(
    r"^(?P<date>\d{2}-\d{2}-\d{2,4}\s+\d{1,2}:\d{2}\s*[AaPp][Mm])\s+"
    r"(?:(?P<dir><DIR>)|(?P<size>\d+))\s+"
    r"(?P<name>.+)$"
)

_TOTAL_LINE = re.compile(r"^total\s+\d+$")

_KIND_BY_TYPE = {
    "-": EntryKind.FILE,
    "d": EntryKind.DIRECTORY,
    "l": EntryKind.SYMLINK,
}


def parse_list_line(line: str) -> RemoteEntry:
    """
    Decode one LIST line.

    Args:
        line: Raw line from the server

    Returns:
        RemoteEntry

    Raises:
        ListingParseError: If the line is in neither POSIX nor DOS format
    """
    match = _POSIX_LINE.match(line)
    if match:
        kind = _KIND_BY_TYPE.get(match.group("type"), EntryKind.OTHER)
        name = match.group("name")
        link_target = None
        if kind is EntryKind.SYMLINK and " -> " in name:
            name, link_target = name.split(" -> ", 1)
        return RemoteEntry(
            name=name,
            kind=kind,
            size=0 if match.group("major") is not None else int(match.group("size")),
            raw_modified=" ".join(match.group("date").split()),
            link_target=link_target,
        )

    match = _DOS_LINE.match(line)
    if match:
        is_dir = match.group("dir") is not None
        return RemoteEntry(
            name=match.group("name"),
            kind=EntryKind.DIRECTORY if is_dir else EntryKind.FILE,
            size=0 if is_dir else int(match.group("size")),
            raw_modified=" ".join(match.group("date").split()),
        )

    raise ListingParseError(line)


def parse_listing(lines: Iterable[str]) -> list[RemoteEntry]:
    """
    Decode a LIST reply, skipping summary lines and the . and .. entries.

    Args:
        lines: Raw lines from the server

    Returns:
        Entries in listing order
    """
    entries = []
    for line in lines:
        line = line.rstrip("\r\n")
        if not line.strip() or _TOTAL_LINE.match(line):
            continue

        entry = parse_list_line(line)
        if entry.name in (".", ".."):
            continue
        entries.append(entry)

    return entries

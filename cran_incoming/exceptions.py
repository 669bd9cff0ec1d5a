"""Errors raised while capturing a snapshot."""


class CaptureError(Exception):
    """A snapshot capture attempt failed."""


class RemoteError(CaptureError):
    """The FTP server could not be reached or refused an operation."""


class ModifyTimeUnavailable(RemoteError):
    """MDTM was answered, but not with a usable timestamp."""


class ListingParseError(CaptureError):
    """A LIST line could not be decoded."""

    def __init__(self, line: str):
        super().__init__(f"Unrecognized listing line: {line!r}")
        self.line = line

"""FTP access to the remote incoming tree."""

import ftplib
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, Protocol

from cran_incoming.exceptions import ModifyTimeUnavailable, RemoteError

logger = logging.getLogger(__name__)


class RemoteDirectory(Protocol):
    """Operations the tree walker needs from a connection."""

    def list(self, path: str) -> list[str]:
        ...

    def modify_time(self, path: str) -> datetime:
        ...


def parse_mdtm_reply(reply: str) -> datetime:
    """
    Parse an MDTM reply such as ``213 20240115103000`` or ``213 20240115103000.123``.

    Args:
        reply: Full reply line

    Returns:
        Naive datetime as reported by the server

    Raises:
        ModifyTimeUnavailable: If the reply carries no valid timestamp
    """
    parts = reply.split()
    if len(parts) != 2 or parts[0] != "213":
        raise ModifyTimeUnavailable(f"Unexpected MDTM reply: {reply!r}")

    stamp, _, fraction = parts[1].partition(".")
    try:
        value = datetime.strptime(stamp, "%Y%m%d%H%M%S")
    except ValueError:
        raise ModifyTimeUnavailable(f"Unexpected MDTM reply: {reply!r}")

    if fraction.isdigit():
        value = value.replace(microsecond=int(fraction[:6].ljust(6, "0")))

    return value


class FtpConnection:
    """Authenticated FTP session."""

    def __init__(self, ftp: ftplib.FTP):
        self._ftp = ftp

    def list(self, path: str) -> list[str]:
        """
        List a directory.

        Args:
            path: Absolute directory path

        Returns:
            Raw LIST lines
        """
        lines: list[str] = []
        try:
            self._ftp.retrlines(f"LIST {path}", lines.append)
        except ftplib.all_errors as e:
            raise RemoteError(f"Could not list {path}: {e}") from e
        return lines

    def modify_time(self, path: str) -> datetime:
        """
        Query the modification time of a file.

        Args:
            path: Absolute file path

        Returns:
            Naive wall-clock datetime in the server's zone

        Raises:
            ModifyTimeUnavailable: If the server answered without a timestamp
            RemoteError: If the connection failed
        """
        try:
            reply = self._ftp.sendcmd(f"MDTM {path}")
        except (ftplib.error_reply, ftplib.error_perm, ftplib.error_temp) as e:
            raise ModifyTimeUnavailable(f"MDTM refused for {path}: {e}") from e
        except ftplib.all_errors as e:
            raise RemoteError(f"MDTM failed for {path}: {e}") from e
        return parse_mdtm_reply(reply)

    def close(self) -> None:
        """Say goodbye, or drop the socket if the server does not answer."""
        try:
            self._ftp.quit()
        except ftplib.all_errors as e:
            logger.debug(f"QUIT failed, closing socket: {e}")
            self._ftp.close()


@contextmanager
def open_connection(
    host: str,
    port: int,
    user: str,
    password: str,
    timeout: float,
) -> Iterator[FtpConnection]:
    """
    Connect and log in, closing the session on exit.

    Args:
        host: FTP server host
        port: FTP server port
        user: Login name
        password: Login password
        timeout: Socket timeout in seconds for every operation

    Yields:
        FtpConnection

    Raises:
        RemoteError: If connecting or logging in fails
    """
    ftp = ftplib.FTP(timeout=timeout)
    try:
        ftp.connect(host, port)
        ftp.login(user, password)
    except ftplib.all_errors as e:
        ftp.close()
        raise RemoteError(f"Could not log in to {host}:{port}: {e}") from e

    logger.debug(f"Connected to {host}:{port} as {user}")
    connection = FtpConnection(ftp)
    try:
        yield connection
    finally:
        connection.close()

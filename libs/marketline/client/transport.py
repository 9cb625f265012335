"""Transports: the byte stream a Connection talks through.

A transport moves whole text lines. It raises `OSError` (including
`TimeoutError`) for every I/O problem and returns None from `read_line()`
at end of stream; turning those into outcomes is the Connection's job.
"""

import logging
import socket
from abc import ABC, abstractmethod
from typing import TextIO

logger = logging.getLogger(__name__)


class Transport(ABC):
    """A reopenable, line-oriented stream to one peer."""

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """True between a successful open() and the next close()."""

    @abstractmethod
    def open(self, host: str, port: int, timeout: float) -> None:
        """Connect to the peer. `timeout` also bounds reads until set_timeout()."""

    @abstractmethod
    def set_timeout(self, timeout: float | None) -> None:
        """Bound later reads and writes; None blocks indefinitely."""

    @abstractmethod
    def write_line(self, line: str) -> None:
        """Write one line, add the terminator and flush."""

    @abstractmethod
    def read_line(self) -> str | None:
        """Read one line without its terminator. None means end of stream."""

    @abstractmethod
    def close(self) -> None:
        """Release the stream. Safe to call when already closed."""


class SocketTransport(Transport):
    """TCP transport with separate text read and write files over one socket."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding
        self._sock: socket.socket | None = None
        self._reader: TextIO | None = None
        self._writer: TextIO | None = None

    @property
    def is_open(self) -> bool:
        return self._sock is not None and self._sock.fileno() != -1

    def open(self, host: str, port: int, timeout: float) -> None:
        sock = socket.create_connection((host, port), timeout=timeout)
        try:
            self._reader = sock.makefile("r", encoding=self._encoding, errors="replace")
            self._writer = sock.makefile("w", encoding=self._encoding, newline="\n")
        except OSError:
            sock.close()
            raise
        self._sock = sock

    def set_timeout(self, timeout: float | None) -> None:
        if self._sock is None:
            raise ConnectionError("Transport is not open")
        self._sock.settimeout(timeout)

    def write_line(self, line: str) -> None:
        if self._writer is None:
            raise ConnectionError("Transport is not open")
        try:
            self._writer.write(line + "\n")
            self._writer.flush()
        except ValueError as exc:  # file closed under us by another thread
            raise ConnectionError("Transport was closed") from exc

    def read_line(self) -> str | None:
        if self._reader is None:
            raise ConnectionError("Transport is not open")
        try:
            line = self._reader.readline()
        except ValueError as exc:
            raise ConnectionError("Transport was closed") from exc
        if not line:
            return None
        return line.removesuffix("\n")

    def close(self) -> None:
        """Close writer, reader and socket, each independently."""
        sock = self._sock
        if sock is not None:
            try:
                # Wakes a read blocked in another thread
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass

        for name in ("_writer", "_reader", "_sock"):
            resource = getattr(self, name)
            setattr(self, name, None)
            if resource is None:
                continue
            try:
                resource.close()
            except OSError as exc:
                logger.warning("Error while closing %s: %s", name.lstrip("_"), exc)

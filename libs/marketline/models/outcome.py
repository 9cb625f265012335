"""Outcome values for expected failures.

The client reports wrong credentials, refused commands, timeouts and
broken streams as an `Outcome` instead of raising.
"""

from dataclasses import dataclass, field
from enum import StrEnum


class ErrorKind(StrEnum):
    """Why an operation failed."""

    CONNECTION_TIMEOUT = "connection_timeout"
    HANDSHAKE_REJECTED = "handshake_rejected"
    TRANSPORT_FAILURE = "transport_failure"
    PROTOCOL_MISMATCH = "protocol_mismatch"
    MALFORMED_LISTING = "malformed_listing"
    AUTHORIZATION_MISMATCH = "authorization_mismatch"
    NOT_CONNECTED = "not_connected"
    INVALID_ARGUMENT = "invalid_argument"


@dataclass(frozen=True)
class Outcome:
    """Result of one client operation.

    `lines` holds every response line read, in order. A failed outcome may
    still carry lines (a partial search result, or the rejection line).
    """

    error: ErrorKind | None = None
    detail: str = ""
    lines: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def line(self) -> str | None:
        """The first response line, or None if nothing was read."""
        return self.lines[0] if self.lines else None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, lines: list[str] | None = None) -> "Outcome":
        return cls(lines=list(lines or []))

    @classmethod
    def failure(
        cls, error: ErrorKind, detail: str = "", lines: list[str] | None = None
    ) -> "Outcome":
        return cls(error=error, detail=detail, lines=list(lines or []))

"""Session state: who is logged in on a live connection."""

from dataclasses import dataclass
from enum import StrEnum


class ClientState(StrEnum):
    """Lifecycle of a client connection."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    AUTHENTICATED = "authenticated"


@dataclass
class Session:
    """The authenticated identity bound to one connection, if any.

    Owned by the connection and cleared whenever it disconnects.
    """

    username: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.username is not None

    def authenticate(self, username: str) -> None:
        self.username = username

    def clear(self) -> None:
        self.username = None

    def authorizes(self, identity: str) -> bool:
        """Check that `identity` is the logged-in user.

        Client-side only; the server still decides.
        """
        return self.username is not None and identity == self.username

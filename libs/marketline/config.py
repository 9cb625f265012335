"""Client configuration: where the server lives and how long to wait for it."""

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 12345
CONNECT_TIMEOUT = 5.0  # seconds


class ClientConfig(BaseModel):
    """Connection settings for a marketplace client.

    `read_timeout` of None means a sent request waits for its response
    indefinitely. Set it to bound every read after the handshake; a read
    that times out breaks the connection.
    """

    host: str = Field(default=DEFAULT_HOST, min_length=1)
    port: int = Field(default=DEFAULT_PORT, gt=0, le=65535)
    connect_timeout: float = Field(default=CONNECT_TIMEOUT, gt=0)
    read_timeout: float | None = Field(default=None, gt=0)
    encoding: str = "utf-8"

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ClientConfig":
        """Build a config from `MARKETLINE_*` environment variables.

        Unset variables keep their defaults. Invalid values raise
        `ValidationError`.
        """
        env = os.environ if environ is None else environ
        values: dict[str, str] = {}
        for name in ("host", "port", "connect_timeout", "read_timeout", "encoding"):
            raw = env.get(f"MARKETLINE_{name.upper()}")
            if raw:
                values[name] = raw
        return cls.model_validate(values)

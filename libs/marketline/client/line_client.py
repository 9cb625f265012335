"""LineMarketClient: the marketplace client over a real line-protocol connection."""

from marketline.client.base import MarketClient
from marketline.client.connection import Connection
from marketline.client.session import ClientState, Session
from marketline.client.transport import Transport
from marketline.config import ClientConfig
from marketline.models.outcome import Outcome


class LineMarketClient(MarketClient):
    """Network client for the marketplace server.

    Usage:
        client = LineMarketClient("localhost", 12345)
        if client.connect() and client.login("alice", "secret"):
            client.post_item("Bike", "Good bike", 50.0, "alice")
            listings = client.search_items("bike")
        client.disconnect()

    `host` and `port` override the matching fields of `config`.
    """

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        *,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
    ) -> None:
        super().__init__()
        config = config or ClientConfig()
        overrides = {
            name: value for name, value in (("host", host), ("port", port)) if value is not None
        }
        if overrides:
            config = ClientConfig.model_validate({**config.model_dump(), **overrides})
        self._connection = Connection(config, transport)

    @property
    def connection(self) -> Connection:
        return self._connection

    @property
    def session(self) -> Session:
        return self._connection.session

    @property
    def is_connected(self) -> bool:
        return self._connection.is_connected

    @property
    def state(self) -> ClientState:
        return self._connection.state

    def _open(self) -> Outcome:
        return self._connection.connect()

    def _close(self) -> None:
        self._connection.disconnect()

    def _exchange(self, line: str) -> Outcome:
        return self._connection.send_and_receive_line(line)

    def _exchange_lines(self, line: str) -> Outcome:
        return self._connection.send_and_receive_lines(line)

    def _read(self) -> Outcome:
        return self._connection.read_line()

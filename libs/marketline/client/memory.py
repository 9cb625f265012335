"""In-memory doubles: transports without sockets and a client without a wire."""

from collections import deque
from collections.abc import Iterable

from marketline.client.base import MarketClient
from marketline.client.session import Session
from marketline.client.transport import Transport
from marketline.market.handler import HANDSHAKE, handle_line
from marketline.market.state import MemoryMarket
from marketline.models.messages import SENTINEL
from marketline.models.outcome import ErrorKind, Outcome


class ScriptedTransport(Transport):
    """Transport that replays scripted responses and records what was written.

    `responses` entries are lines, or exceptions raised by the read that
    reaches them. An exhausted script reads as end of stream. `open_errors`
    and `close_errors` are raised by successive open() and close() calls.
    """

    def __init__(
        self,
        responses: Iterable[str | BaseException] = (),
        *,
        open_errors: Iterable[BaseException] = (),
        close_errors: Iterable[BaseException] = (),
    ) -> None:
        self.responses: deque[str | BaseException] = deque(responses)
        self.open_errors: deque[BaseException] = deque(open_errors)
        self.close_errors: deque[BaseException] = deque(close_errors)
        self.sent: list[str] = []
        self.address: tuple[str, int] | None = None
        self.timeout: float | None = None
        self.open_count = 0
        self.close_count = 0
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def feed(self, *lines: str | BaseException) -> None:
        """Append more scripted responses."""
        self.responses.extend(lines)

    def open(self, host: str, port: int, timeout: float) -> None:
        self.address = (host, port)
        self.timeout = timeout
        if self.open_errors:
            raise self.open_errors.popleft()
        self._open = True
        self.open_count += 1

    def set_timeout(self, timeout: float | None) -> None:
        self.timeout = timeout

    def write_line(self, line: str) -> None:
        if not self._open:
            raise ConnectionError("Transport is not open")
        self.sent.append(line)

    def read_line(self) -> str | None:
        if not self._open:
            raise ConnectionError("Transport is not open")
        if not self.responses:
            return None
        item = self.responses.popleft()
        if isinstance(item, BaseException):
            raise item
        return item

    def close(self) -> None:
        self._open = False
        self.close_count += 1
        if self.close_errors:
            raise self.close_errors.popleft()


class MarketTransport(ScriptedTransport):
    """Transport whose peer is a MemoryMarket answering each written line."""

    def __init__(self, market: MemoryMarket | None = None, handshake: str = HANDSHAKE) -> None:
        super().__init__()
        self.market = market or MemoryMarket()
        self.handshake = handshake

    def open(self, host: str, port: int, timeout: float) -> None:
        super().open(host, port, timeout)
        self.responses.clear()
        self.responses.append(self.handshake)

    def write_line(self, line: str) -> None:
        super().write_line(line)
        self.responses.extend(handle_line(self.market, line))


class InMemoryMarketClient(MarketClient):
    """MarketClient backed directly by a MemoryMarket, no transport at all.

    Requests still go through the wire codec, so encoding and gate
    behaviour match the network client. `sent` records every request line.
    """

    def __init__(self, market: MemoryMarket | None = None) -> None:
        super().__init__()
        self.market = market or MemoryMarket()
        self.sent: list[str] = []
        self._session = Session()
        self._connected = False

    @property
    def session(self) -> Session:
        return self._session

    @property
    def is_connected(self) -> bool:
        return self._connected

    def _open(self) -> Outcome:
        self._connected = True
        return Outcome.success([HANDSHAKE])

    def _close(self) -> None:
        self._connected = False
        self._session.clear()

    def _exchange(self, line: str) -> Outcome:
        self.sent.append(line)
        return Outcome.success(handle_line(self.market, line)[:1])

    def _exchange_lines(self, line: str) -> Outcome:
        self.sent.append(line)
        lines = handle_line(self.market, line)
        if SENTINEL in lines:
            lines = lines[: lines.index(SENTINEL)]
        return Outcome.success(lines)

    def _read(self) -> Outcome:
        if not self._connected:
            return Outcome.failure(ErrorKind.NOT_CONNECTED, "not connected")
        return Outcome.failure(ErrorKind.TRANSPORT_FAILURE, "no pending response")

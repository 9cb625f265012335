"""Shared test fixtures."""

import socket
import socketserver
import threading

import pytest

from marketline import HANDSHAKE, MemoryMarket, ScriptedTransport, handle_line


@pytest.fixture
def market() -> MemoryMarket:
    """A market with two registered users."""
    m = MemoryMarket()
    m.create_user("alice", "secret")
    m.create_user("bob", "hunter2")
    return m


@pytest.fixture
def transport() -> ScriptedTransport:
    """A transport that accepts the handshake and nothing else yet."""
    return ScriptedTransport(["SUCCESS Connected"])


class _MarketRequestHandler(socketserver.StreamRequestHandler):
    """Speaks the marketplace protocol for one client connection."""

    server: "MarketServer"

    def handle(self) -> None:
        self.wfile.write((self.server.handshake + "\n").encode())
        for raw in self.rfile:
            line = raw.decode("utf-8").rstrip("\r\n")
            self.server.received.append(line)
            if self.server.mute:
                continue
            with self.server.lock:
                replies = handle_line(self.server.market, line)
            self.wfile.write("".join(reply + "\n" for reply in replies).encode())


class MarketServer(socketserver.ThreadingTCPServer):
    """Threaded loopback server backed by a MemoryMarket.

    With `mute` set it still sends the handshake but never answers requests.
    """

    daemon_threads = True
    allow_reuse_address = True

    def __init__(self, market: MemoryMarket, handshake: str = HANDSHAKE) -> None:
        super().__init__(("127.0.0.1", 0), _MarketRequestHandler)
        self.market = market
        self.handshake = handshake
        self.mute = False
        self.received: list[str] = []
        self.lock = threading.Lock()

    @property
    def port(self) -> int:
        return self.server_address[1]


@pytest.fixture
def market_server(market: MemoryMarket, start_server) -> MarketServer:
    """A loopback MarketServer over the `market` fixture."""
    return start_server(market)


@pytest.fixture
def silent_listener() -> socket.socket:
    """A listening socket that accepts connections but never writes."""
    sock = socket.create_server(("127.0.0.1", 0))
    yield sock  # type: ignore[misc]
    sock.close()


@pytest.fixture
def closed_port() -> int:
    """A loopback port with nothing listening on it."""
    sock = socket.create_server(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture
def start_server():
    """Factory that starts MarketServers with custom handshakes, stopped after the test."""
    started: list[tuple[MarketServer, threading.Thread]] = []

    def _start(market: MemoryMarket | None = None, handshake: str = HANDSHAKE) -> MarketServer:
        server = MarketServer(market or MemoryMarket(), handshake)
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        started.append((server, thread))
        return server

    yield _start
    for server, thread in started:
        server.shutdown()
        server.server_close()
        thread.join(timeout=2)

"""Connection: owns one transport stream and the session bound to it."""

import logging

from marketline.client.session import ClientState, Session
from marketline.client.transport import SocketTransport, Transport
from marketline.config import ClientConfig
from marketline.helpers.wire import is_success
from marketline.models.messages import SENTINEL
from marketline.models.outcome import ErrorKind, Outcome

logger = logging.getLogger(__name__)


class Connection:
    """Blocking request/response exchange over a single transport.

    Usage:
        conn = Connection(ClientConfig(host="localhost", port=12345))
        if conn.connect():
            outcome = conn.send_and_receive_line("SEARCH bike")
        conn.disconnect()

    Not thread-safe: the protocol has no request ids, so callers must not
    overlap requests on one connection. Another thread may call
    `disconnect()` to abort a blocked read.
    """

    def __init__(self, config: ClientConfig | None = None, transport: Transport | None = None) -> None:
        self._config = config or ClientConfig()
        self._transport = transport or SocketTransport(encoding=self._config.encoding)
        self._state = ClientState.DISCONNECTED
        self.session = Session()

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def state(self) -> ClientState:
        if self._state is ClientState.CONNECTED and self.session.is_authenticated:
            return ClientState.AUTHENTICATED
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is ClientState.CONNECTED and self._transport.is_open

    def connect(self) -> Outcome:
        """Open the transport and wait for the server's `SUCCESS` handshake.

        The connect timeout bounds both the transport connect and the
        handshake read. Any failure leaves the connection fully released.
        Returns success at once if already connected.
        """
        if self.is_connected:
            return Outcome.success()

        self.disconnect()
        host, port = self._config.host, self._config.port
        timeout = self._config.connect_timeout
        self._state = ClientState.CONNECTING
        established = False
        try:
            self._transport.open(host, port, timeout)
            handshake = self._transport.read_line()
            if not is_success(handshake):
                logger.error("Server at %s:%d rejected handshake: %r", host, port, handshake)
                return Outcome.failure(
                    ErrorKind.HANDSHAKE_REJECTED,
                    f"unexpected handshake {handshake!r}",
                    [handshake] if handshake is not None else None,
                )
            self._transport.set_timeout(self._config.read_timeout)
            established = True
        except TimeoutError as exc:
            logger.error(
                "Connection to %s:%d timed out after %dms", host, port, int(timeout * 1000)
            )
            return Outcome.failure(ErrorKind.CONNECTION_TIMEOUT, str(exc) or "timed out")
        except OSError as exc:
            logger.error("Connection to %s:%d failed: %s", host, port, exc)
            return Outcome.failure(ErrorKind.TRANSPORT_FAILURE, str(exc))
        finally:
            if not established:
                self.disconnect()

        self._state = ClientState.CONNECTED
        logger.info("Connected to %s:%d", host, port)
        return Outcome.success([handshake])

    def disconnect(self) -> None:
        """Release the stream and clear the session. Never raises for I/O errors."""
        if self._state is ClientState.DISCONNECTED and not self._transport.is_open:
            return

        was_connected = self._state is ClientState.CONNECTED
        try:
            self._transport.close()
        except OSError as exc:
            logger.warning("Error while closing connection: %s", exc)
        finally:
            self._state = ClientState.DISCONNECTED
            self.session.clear()

        if was_connected:
            logger.info("Disconnected from %s:%d", self._config.host, self._config.port)

    def send_and_receive_line(self, line: str) -> Outcome:
        """Send one request line and read exactly one response line.

        An I/O error, a read timeout or end of stream disconnects, since the
        stream can no longer be trusted to line up requests with responses.
        """
        if not self.is_connected:
            return Outcome.failure(ErrorKind.NOT_CONNECTED, "not connected")

        try:
            self._transport.write_line(line)
            response = self._transport.read_line()
        except OSError as exc:
            return self._transport_failure(exc)

        if response is None:
            return self._transport_failure(ConnectionError("connection closed by peer"))
        logger.debug("Received: %r", response)
        return Outcome.success([response])

    def send_and_receive_lines(self, line: str) -> Outcome:
        """Send one request line and read lines up to the `END` sentinel.

        The sentinel is not included. If the stream fails or ends first, the
        outcome is a failure that still carries every line read so far.
        """
        if not self.is_connected:
            return Outcome.failure(ErrorKind.NOT_CONNECTED, "not connected")

        lines: list[str] = []
        try:
            self._transport.write_line(line)
            while True:
                response = self._transport.read_line()
                if response is None:
                    return self._transport_failure(
                        ConnectionError(f"connection closed before {SENTINEL}"), lines
                    )
                if response == SENTINEL:
                    break
                lines.append(response)
        except OSError as exc:
            return self._transport_failure(exc, lines)

        logger.debug("Received %d lines", len(lines))
        return Outcome.success(lines)

    def read_line(self) -> Outcome:
        """Read one more line without sending anything. Does not disconnect."""
        if not self.is_connected:
            return Outcome.failure(ErrorKind.NOT_CONNECTED, "not connected")

        try:
            response = self._transport.read_line()
        except OSError as exc:
            logger.error("Error reading response: %s", exc)
            return Outcome.failure(ErrorKind.TRANSPORT_FAILURE, str(exc))

        if response is None:
            return Outcome.failure(ErrorKind.TRANSPORT_FAILURE, "end of stream")
        return Outcome.success([response])

    def _transport_failure(self, exc: BaseException, lines: list[str] | None = None) -> Outcome:
        logger.error("Transport failure, disconnecting: %s", exc)
        self.disconnect()
        return Outcome.failure(ErrorKind.TRANSPORT_FAILURE, str(exc) or type(exc).__name__, lines)

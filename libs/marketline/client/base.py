"""MarketClient: the capability interface shared by every marketplace client."""

import logging
from abc import ABC, abstractmethod
from decimal import Decimal

from marketline.client.session import ClientState, Session
from marketline.helpers.listing_codec import decode_listing
from marketline.helpers.validation import validate_command
from marketline.helpers.wire import encode_command, is_success
from marketline.models.command import Command
from marketline.models.listing import ItemListing
from marketline.models.messages import SECRET_VERBS, Verb
from marketline.models.outcome import ErrorKind, Outcome

logger = logging.getLogger(__name__)


class MarketClient(ABC):
    """Base class for marketplace clients.

    Every operation runs the same pipeline: gate check, encode, send,
    receive, decode. Subclasses only provide the stream primitives
    (`_open`, `_close`, `_exchange`, `_exchange_lines`, `_read`) and the
    session they are bound to.

    Expected failures never raise: operations return False (or a possibly
    empty list for search) and leave the reason in `last_outcome`.
    """

    def __init__(self) -> None:
        self.last_outcome: Outcome | None = None

    # --- Primitives ---

    @property
    @abstractmethod
    def session(self) -> Session:
        """The session of the current connection."""

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """True once the handshake succeeded and until disconnect."""

    @abstractmethod
    def _open(self) -> Outcome:
        """Connect and complete the handshake."""

    @abstractmethod
    def _close(self) -> None:
        """Release the connection and clear the session."""

    @abstractmethod
    def _exchange(self, line: str) -> Outcome:
        """Send a line, read one response line."""

    @abstractmethod
    def _exchange_lines(self, line: str) -> Outcome:
        """Send a line, read response lines up to the sentinel."""

    @abstractmethod
    def _read(self) -> Outcome:
        """Read one more line without sending."""

    # --- Lifecycle ---

    @property
    def state(self) -> ClientState:
        if not self.is_connected:
            return ClientState.DISCONNECTED
        if self.session.is_authenticated:
            return ClientState.AUTHENTICATED
        return ClientState.CONNECTED

    @property
    def current_user(self) -> str | None:
        return self.session.username

    def connect(self) -> bool:
        """Connect to the server. Returns True at once if already connected."""
        if self.is_connected:
            return True
        return self._record(self._open()).ok

    def disconnect(self) -> None:
        """Close the connection and forget the logged-in user. Safe to repeat."""
        self._close()

    # --- Operations ---

    def login(self, username: str, password: str) -> bool:
        """Log in; on success the session identity becomes `username`."""
        outcome = self._request(Verb.LOGIN, username=username, password=password)
        if outcome:
            self.session.authenticate(username)
            logger.info("Logged in as %s", username)
        return outcome.ok

    def create_user(self, username: str, password: str) -> bool:
        """Register a new account. Does not log in."""
        return self._request(Verb.CREATE_USER, username=username, password=password).ok

    def post_item(
        self,
        title: str,
        description: str,
        price: float | Decimal | str,
        seller_username: str,
    ) -> bool:
        """List an item for sale as the logged-in user."""
        return self._request(
            Verb.POST_ITEM,
            identity=seller_username,
            title=title,
            description=description,
            price=price,
            seller=seller_username,
        ).ok

    def buy_item(self, buyer_username: str, item_id: str) -> bool:
        """Buy a listed item as the logged-in user."""
        return self._request(
            Verb.BUY_ITEM, identity=buyer_username, item_id=item_id, buyer=buyer_username
        ).ok

    def send_message(
        self, sender_username: str, receiver_username: str, item_id: str, body: str
    ) -> bool:
        """Send a message about an item as the logged-in user."""
        return self._request(
            Verb.SEND_MSG,
            identity=sender_username,
            sender=sender_username,
            receiver=receiver_username,
            item_id=item_id,
            body=body,
        ).ok

    def search_items(self, keyword: str) -> list[ItemListing]:
        """Search listings by keyword.

        Malformed result lines are skipped. If the stream breaks mid-result,
        the listings read before the break are returned.
        """
        outcome = self._request(Verb.SEARCH, multiline=True, keyword=keyword)
        listings = (decode_listing(line) for line in outcome.lines)
        return [listing for listing in listings if listing is not None]

    def get_response(self) -> str | None:
        """Read one more line from the server, or None if there is none."""
        outcome = self._record(self._read())
        return outcome.line if outcome else None

    # --- Internals ---

    def _request(
        self,
        verb: Verb,
        *,
        identity: str | None = None,
        multiline: bool = False,
        **fields: object,
    ) -> Outcome:
        """Gate, encode and send one command; check the reply's success marker."""
        if not self.is_connected:
            return self._refuse(verb, ErrorKind.NOT_CONNECTED, "not connected")

        if identity is not None and not self.session.authorizes(identity):
            return self._refuse(
                verb,
                ErrorKind.AUTHORIZATION_MISMATCH,
                f"{identity!r} is not the logged-in user ({self.session.username!r})",
            )

        command = Command(verb=verb, payload=fields)
        errors = validate_command(command)
        if errors:
            return self._refuse(verb, ErrorKind.INVALID_ARGUMENT, "; ".join(errors))

        line = encode_command(command)
        if verb in SECRET_VERBS:
            logger.debug("Sending %s <redacted>", verb)
        else:
            logger.debug("Sending %r", line)

        if multiline:
            return self._record(self._exchange_lines(line))

        outcome = self._exchange(line)
        if outcome and not is_success(outcome.line):
            logger.warning("%s rejected by server: %r", verb, outcome.line)
            outcome = Outcome.failure(
                ErrorKind.PROTOCOL_MISMATCH, f"server replied {outcome.line!r}", outcome.lines
            )
        return self._record(outcome)

    def _refuse(self, verb: Verb, error: ErrorKind, detail: str) -> Outcome:
        logger.warning("%s not sent (%s): %s", verb, error, detail)
        return self._record(Outcome.failure(error, detail))

    def _record(self, outcome: Outcome) -> Outcome:
        self.last_outcome = outcome
        return outcome

"""marketline: client engine for the marketplace line protocol."""

from marketline.client.base import MarketClient
from marketline.client.connection import Connection
from marketline.client.line_client import LineMarketClient
from marketline.client.memory import InMemoryMarketClient, MarketTransport, ScriptedTransport
from marketline.client.session import ClientState, Session
from marketline.client.transport import SocketTransport, Transport
from marketline.config import ClientConfig
from marketline.helpers.factory import create_command, parse_payload
from marketline.helpers.listing_codec import decode_listing, encode_listing
from marketline.helpers.validation import validate_command
from marketline.helpers.wire import (
    ProtocolError,
    encode_command,
    format_price,
    is_success,
    parse_command,
)
from marketline.market.handler import HANDSHAKE, handle_line
from marketline.market.state import MemoryMarket, StoredMessage
from marketline.models.command import Command
from marketline.models.listing import ItemListing
from marketline.models.messages import (
    DELIMITER,
    PAYLOAD_REGISTRY,
    SENTINEL,
    SUCCESS,
    BuyItem,
    CreateUser,
    Login,
    PostItem,
    Search,
    SendMessage,
    Verb,
)
from marketline.models.outcome import ErrorKind, Outcome

__all__ = [
    # Clients
    "InMemoryMarketClient",
    "LineMarketClient",
    "MarketClient",
    # Connection
    "ClientConfig",
    "ClientState",
    "Connection",
    "MarketTransport",
    "ScriptedTransport",
    "Session",
    "SocketTransport",
    "Transport",
    # Models
    "BuyItem",
    "Command",
    "CreateUser",
    "DELIMITER",
    "ErrorKind",
    "ItemListing",
    "Login",
    "Outcome",
    "PAYLOAD_REGISTRY",
    "PostItem",
    "SENTINEL",
    "SUCCESS",
    "Search",
    "SendMessage",
    "Verb",
    # Helpers
    "ProtocolError",
    "create_command",
    "decode_listing",
    "encode_command",
    "encode_listing",
    "format_price",
    "is_success",
    "parse_command",
    "parse_payload",
    "validate_command",
    # In-memory market
    "HANDSHAKE",
    "MemoryMarket",
    "StoredMessage",
    "handle_line",
]

"""Request handling for the in-memory market: pure functions.

Each function takes a typed payload and a MemoryMarket, applies the
change when the request is valid, and returns the response lines the
server would write.
"""

import logging
from collections.abc import Callable
from typing import Any

from marketline.helpers.factory import parse_payload
from marketline.helpers.listing_codec import encode_listing
from marketline.helpers.wire import ProtocolError, parse_command
from marketline.market.state import MemoryMarket, StoredMessage
from marketline.models.messages import (
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

logger = logging.getLogger(__name__)

HANDSHAKE = f"{SUCCESS} Connected to marketplace"
FAILURE = "ERROR"


def _error(reason: str) -> list[str]:
    return [f"{FAILURE} {reason}"]


def process_login(payload: Login, market: MemoryMarket) -> list[str]:
    if not market.check_password(payload.username, payload.password):
        return _error("Invalid username or password")
    return [f"{SUCCESS} Logged in"]


def process_create_user(payload: CreateUser, market: MemoryMarket) -> list[str]:
    if not market.create_user(payload.username, payload.password):
        return _error(f"User '{payload.username}' already exists")
    logger.info("Created account for '%s'", payload.username)
    return [f"{SUCCESS} User created"]


def process_post_item(payload: PostItem, market: MemoryMarket) -> list[str]:
    if not market.has_user(payload.seller):
        return _error(f"No account for seller '{payload.seller}'")
    listing = market.add_listing(payload.title, payload.description, payload.price, payload.seller)
    return [f"{SUCCESS} {listing.item_id}"]


def process_buy_item(payload: BuyItem, market: MemoryMarket) -> list[str]:
    listing = market.get_listing(payload.item_id)
    if listing is None:
        return _error(f"No item '{payload.item_id}'")
    if not market.has_user(payload.buyer):
        return _error(f"No account for buyer '{payload.buyer}'")
    if listing.sold:
        return _error(f"Item '{payload.item_id}' already sold")
    if listing.seller == payload.buyer:
        return _error("Cannot buy your own item")
    market.mark_sold(payload.item_id)
    return [f"{SUCCESS} Purchased"]


def process_send_message(payload: SendMessage, market: MemoryMarket) -> list[str]:
    if not market.has_user(payload.receiver):
        return _error(f"No account for receiver '{payload.receiver}'")
    if market.get_listing(payload.item_id) is None:
        return _error(f"No item '{payload.item_id}'")
    market.add_message(
        StoredMessage(
            sender=payload.sender,
            receiver=payload.receiver,
            item_id=payload.item_id,
            body=payload.body,
        )
    )
    return [f"{SUCCESS} Message sent"]


def process_search(payload: Search, market: MemoryMarket) -> list[str]:
    return [encode_listing(listing) for listing in market.search(payload.keyword)] + [SENTINEL]


_HANDLERS: dict[Verb, Callable[[Any, MemoryMarket], list[str]]] = {
    Verb.LOGIN: process_login,
    Verb.CREATE_USER: process_create_user,
    Verb.POST_ITEM: process_post_item,
    Verb.BUY_ITEM: process_buy_item,
    Verb.SEND_MSG: process_send_message,
    Verb.SEARCH: process_search,
}


def handle_line(market: MemoryMarket, line: str) -> list[str]:
    """Answer one request line with the lines a server would send back."""
    try:
        command = parse_command(line)
    except ProtocolError as exc:
        logger.warning("Bad request %r: %s", line, exc)
        if line.startswith(Verb.SEARCH):
            return _error(str(exc)) + [SENTINEL]
        return _error(str(exc))
    return _HANDLERS[command.verb](parse_payload(command), market)

"""Listing codec: `id|title|desc|price|seller|sold` lines to ItemListing and back."""

import logging

from pydantic import ValidationError

from marketline.helpers.wire import format_price
from marketline.models.listing import ItemListing
from marketline.models.messages import DELIMITER
from marketline.models.outcome import ErrorKind

logger = logging.getLogger(__name__)

LISTING_FIELD_COUNT = 6
MALFORMED = ErrorKind.MALFORMED_LISTING


def encode_listing(listing: ItemListing) -> str:
    """Encode a listing the way the server writes it in a search result."""
    return DELIMITER.join([
        listing.item_id,
        listing.title,
        listing.description,
        format_price(listing.price),
        listing.seller,
        "true" if listing.sold else "false",
    ])


def decode_listing(line: str) -> ItemListing | None:
    """Decode one search-result line.

    Returns None for a malformed line (wrong field count, unparseable or
    non-finite price, empty sold flag) so callers can skip it. The sold flag
    is True only for `true` in any letter case.
    """
    fields = line.split(DELIMITER)
    if len(fields) != LISTING_FIELD_COUNT:
        logger.debug("Dropping listing (%s), %d fields: %r", MALFORMED, len(fields), line)
        return None

    item_id, title, description, raw_price, seller, raw_sold = fields
    if not raw_sold:
        logger.debug("Dropping listing (%s), no sold flag: %r", MALFORMED, line)
        return None

    try:
        return ItemListing(
            item_id=item_id,
            title=title,
            description=description,
            price=raw_price,
            seller=seller,
            sold=raw_sold.lower() == "true",
        )
    except ValidationError:
        logger.debug("Dropping listing (%s), bad price %r: %r", MALFORMED, raw_price, line)
        return None

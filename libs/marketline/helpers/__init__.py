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

__all__ = [
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
]

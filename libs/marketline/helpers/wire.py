"""Wire codec: commands to protocol lines and back, no I/O.

A request is one line: the verb, a space, then the arguments. Plain
arguments are space separated; `POST_ITEM` and `SEND_MSG` join theirs
with `|`. Responses are judged only by their `SUCCESS` prefix.
"""

from decimal import Decimal
from typing import Any

from pydantic import ValidationError

from marketline.helpers.factory import create_command, parse_payload
from marketline.models.command import Command
from marketline.models.messages import (
    DELIMITED_VERBS,
    DELIMITER,
    FREE_TEXT_VERBS,
    PAYLOAD_REGISTRY,
    SUCCESS,
    Verb,
    to_price,
)


class ProtocolError(ValueError):
    """A request line that cannot be decoded into a Command."""


def format_price(price: Any) -> str:
    """Render a price with exactly two fractional digits (`50.0` → `50.00`)."""
    return format(to_price(price), "f")


def _render(value: Any) -> str:
    if isinstance(value, Decimal):
        return format_price(value)
    return str(value)


def _separator(verb: Verb) -> str:
    return DELIMITER if verb in DELIMITED_VERBS else " "


def encode_command(command: Command) -> str:
    """Encode a Command as a single protocol line, without the line terminator.

    `POST_ITEM Bike|Good bike|50.00|alice`
    """
    payload = parse_payload(command)
    values = [_render(getattr(payload, name)) for name in type(payload).model_fields]
    return f"{command.verb} {_separator(command.verb).join(values)}"


def parse_command(line: str) -> Command:
    """Decode a request line back into a Command.

    Raises:
        ProtocolError: If the verb is unknown, the argument count is wrong,
            or the arguments don't validate.
    """
    token, _, rest = line.rstrip("\r\n").partition(" ")
    try:
        verb = Verb(token)
    except ValueError as exc:
        raise ProtocolError(f"Unknown verb: {token!r}") from exc

    names = list(PAYLOAD_REGISTRY[verb].model_fields)
    values = [rest] if verb in FREE_TEXT_VERBS else rest.split(_separator(verb))
    if len(values) != len(names):
        raise ProtocolError(
            f"{verb} expects {len(names)} arguments, got {len(values)}"
        )

    try:
        return create_command(verb, **dict(zip(names, values)))
    except ValidationError as exc:
        raise ProtocolError(f"Invalid {verb} arguments: {exc.error_count()} error(s)") from exc


def is_success(line: str | None) -> bool:
    """Return True if a response line carries the success marker."""
    return line is not None and line.startswith(SUCCESS)

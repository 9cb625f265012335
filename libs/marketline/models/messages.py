"""Command verbs and payload models for the marketplace line protocol.

Payload fields are declared in the order the server parses them, so the
field order of each model is also its wire order.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

SUCCESS = "SUCCESS"
SENTINEL = "END"
DELIMITER = "|"

CENT = Decimal("0.01")


class Verb(StrEnum):
    """All request verbs in the protocol."""

    LOGIN = "LOGIN"
    CREATE_USER = "CREATE_USER"
    POST_ITEM = "POST_ITEM"
    BUY_ITEM = "BUY_ITEM"
    SEND_MSG = "SEND_MSG"
    SEARCH = "SEARCH"


def to_price(value: object) -> Decimal:
    """Coerce a number to a two-digit fixed-point Decimal, rounding half up.

    Floats go through their shortest repr so `0.125` rounds to `0.13`
    rather than to whatever the binary value would give.
    """
    if isinstance(value, float):
        value = repr(value)
    try:
        price = Decimal(value)  # type: ignore[arg-type]
        if not price.is_finite():
            raise ValueError(f"price must be a finite number, got {value!r}")
        with localcontext() as ctx:
            # Room for every integer digit plus the two cents digits
            ctx.prec = max(ctx.prec, price.adjusted() + 3)
            return price.quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"invalid price: {value!r}") from exc


class Login(BaseModel):
    """Authenticate the connection as `username`."""

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class CreateUser(BaseModel):
    """Register a new account."""

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class PostItem(BaseModel):
    """List an item for sale."""

    title: str
    description: str
    price: Decimal
    seller: str = Field(min_length=1)

    @field_validator("price", mode="before")
    @classmethod
    def _fixed_point(cls, value: object) -> Decimal:
        return to_price(value)


class BuyItem(BaseModel):
    """Buy a listed item."""

    item_id: str = Field(min_length=1)
    buyer: str = Field(min_length=1)


class SendMessage(BaseModel):
    """Message another user about an item."""

    sender: str = Field(min_length=1)
    receiver: str = Field(min_length=1)
    item_id: str = Field(min_length=1)
    body: str


class Search(BaseModel):
    """Search listings by keyword."""

    keyword: str = Field(min_length=1)


# Registry mapping verbs to their payload models
PAYLOAD_REGISTRY: dict[Verb, type[BaseModel]] = {
    Verb.LOGIN: Login,
    Verb.CREATE_USER: CreateUser,
    Verb.POST_ITEM: PostItem,
    Verb.BUY_ITEM: BuyItem,
    Verb.SEND_MSG: SendMessage,
    Verb.SEARCH: Search,
}

# Verbs whose arguments are joined by DELIMITER instead of spaces
DELIMITED_VERBS: frozenset[Verb] = frozenset({Verb.POST_ITEM, Verb.SEND_MSG})

# Verbs whose single argument is free text and may contain spaces
FREE_TEXT_VERBS: frozenset[Verb] = frozenset({Verb.SEARCH})

# Verbs that carry a secret; their encoded line is never logged
SECRET_VERBS: frozenset[Verb] = frozenset({Verb.LOGIN, Verb.CREATE_USER})

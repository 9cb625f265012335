"""ItemListing model: a server-authored record of an item for sale."""

from decimal import Decimal

from pydantic import BaseModel, field_validator

from marketline.models.messages import to_price


class ItemListing(BaseModel):
    """One row of a search result.

    Clients never mutate listings; they only read them back from `SEARCH`.
    """

    item_id: str
    title: str
    description: str
    price: Decimal
    seller: str
    sold: bool = False

    model_config = {"frozen": True}

    @field_validator("price", mode="before")
    @classmethod
    def _fixed_point(cls, value: object) -> Decimal:
        return to_price(value)

from marketline.models.command import Command
from marketline.models.listing import ItemListing
from marketline.models.messages import (
    DELIMITED_VERBS,
    DELIMITER,
    FREE_TEXT_VERBS,
    PAYLOAD_REGISTRY,
    SECRET_VERBS,
    SENTINEL,
    SUCCESS,
    BuyItem,
    CreateUser,
    Login,
    PostItem,
    Search,
    SendMessage,
    Verb,
    to_price,
)
from marketline.models.outcome import ErrorKind, Outcome

__all__ = [
    "BuyItem",
    "Command",
    "CreateUser",
    "DELIMITED_VERBS",
    "DELIMITER",
    "ErrorKind",
    "FREE_TEXT_VERBS",
    "ItemListing",
    "Login",
    "Outcome",
    "PAYLOAD_REGISTRY",
    "PostItem",
    "SECRET_VERBS",
    "SENTINEL",
    "SUCCESS",
    "Search",
    "SendMessage",
    "Verb",
    "to_price",
]

"""Factory functions for creating commands and reading their payloads."""

from typing import Any

from pydantic import BaseModel

from marketline.models.command import Command
from marketline.models.messages import PAYLOAD_REGISTRY, Verb


def create_command(verb: Verb | str, payload: BaseModel | None = None, **fields: Any) -> Command:
    """Create a Command with a validated payload.

    Args:
        verb: The request verb.
        payload: A payload model instance. When omitted, `fields` are
            validated against the verb's payload model instead.
        **fields: Payload fields by name (e.g. `username="alice"`).

    Returns:
        A fully constructed Command.

    Raises:
        ValueError: If the verb is unknown.
        ValidationError: If the fields don't match the verb's payload schema.
    """
    verb = Verb(verb)
    if payload is None:
        payload = PAYLOAD_REGISTRY[verb].model_validate(fields)
    return Command(verb=verb, payload=payload.model_dump())


def parse_payload(command: Command) -> BaseModel:
    """Parse a command's payload dict into its typed Pydantic model.

    Raises:
        ValidationError: If the payload doesn't match the verb's schema.
    """
    model_class = PAYLOAD_REGISTRY[command.verb]
    return model_class.model_validate(command.payload)

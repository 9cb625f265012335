"""Command model: a verb plus its payload, built per call and never stored."""

from typing import Any

from pydantic import BaseModel, Field

from marketline.models.messages import Verb


class Command(BaseModel):
    """A single protocol request.

    `payload` holds the verb's fields as a plain dict; use
    `parse_payload()` to get the typed model back.
    """

    verb: Verb
    payload: dict[str, Any] = Field(default_factory=dict)

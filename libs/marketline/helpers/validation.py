"""Command validation utilities.

The wire format has no escaping, so a field that contains a separator or a
line break would change how the server frames the request. Such commands
are reported here and never sent.
"""

from pydantic import ValidationError

from marketline.models.command import Command
from marketline.models.messages import (
    DELIMITED_VERBS,
    DELIMITER,
    FREE_TEXT_VERBS,
    PAYLOAD_REGISTRY,
)


def validate_command(command: Command) -> list[str]:
    """Validate a command for correctness and framing safety.

    Returns a list of error strings. Empty list means the command can be sent.
    """
    errors: list[str] = []

    model_class = PAYLOAD_REGISTRY.get(command.verb)
    if model_class is None:
        errors.append(f"No payload schema registered for verb: {command.verb}")
        return errors

    try:
        payload = model_class.model_validate(command.payload)
    except ValidationError as e:
        for err in e.errors():
            loc = ".".join(str(x) for x in err["loc"])
            errors.append(f"payload.{loc}: {err['msg']}")
        return errors

    delimited = command.verb in DELIMITED_VERBS
    free_text = command.verb in FREE_TEXT_VERBS

    for name in model_class.model_fields:
        value = getattr(payload, name)
        if not isinstance(value, str):
            continue
        if "\n" in value or "\r" in value:
            errors.append(f"payload.{name}: must not contain line breaks")
        elif delimited and DELIMITER in value:
            errors.append(f"payload.{name}: must not contain {DELIMITER!r}")
        elif not delimited and not free_text and value.split() != [value]:
            errors.append(f"payload.{name}: must be a single token without whitespace")

    return errors

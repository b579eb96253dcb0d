"""
Conversion of loosely-typed client payloads into validated schema objects.
"""
from typing import Any, Mapping, Optional, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from agroconnect.error_handlers import ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def field_errors(exc: PydanticValidationError) -> list[dict]:
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"]) or "body"
        errors.append({"field": field, "message": error["msg"]})
    return errors


def parse_payload(
    schema: type[SchemaT],
    payload: Any,
    message: str,
    context: Optional[Mapping[str, Any]] = None
) -> SchemaT:
    """
    Validate ``payload`` against ``schema``.

    Raises:
        ValidationError: listing every offending field
    """
    if not isinstance(payload, Mapping):
        raise ValidationError(message, [{"field": "body", "message": "must be a JSON object"}])
    try:
        return schema.model_validate(dict(payload), context=dict(context) if context else None)
    except PydanticValidationError as exc:
        raise ValidationError(message, field_errors(exc))

"""Helpers that turn pydantic validation failures into domain errors."""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from lead_intake.domain.exceptions import FieldError, ValidationFailedError

ModelT = TypeVar("ModelT", bound=BaseModel)


def field_errors(exc: ValidationError) -> list[FieldError]:
    """Flatten a pydantic ValidationError into ``FieldError`` entries.

    Locations use the camelCase aliases, so messages name fields the way API
    callers spell them.
    """
    errors: list[FieldError] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        errors.append(FieldError(loc or "body", err.get("msg", "Invalid value")))
    return errors


def parse_model(model_cls: type[ModelT], data: Any) -> ModelT:
    """Validate ``data`` against ``model_cls`` or raise ``ValidationFailedError``."""
    if not isinstance(data, dict):
        raise ValidationFailedError.single("body", "Request body must be a JSON object")
    try:
        return model_cls.model_validate(data)
    except ValidationError as exc:
        raise ValidationFailedError(field_errors(exc)) from exc

"""Domain-specific exceptions: framework-independent."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation message."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class UnauthenticatedError(Exception):
    """Raised when a request carries no usable principal claim."""

    def __init__(self, message: str = "Authentication required. Please login first."):
        self.message = message
        super().__init__(message)


class ForbiddenError(Exception):
    """Raised when the access policy denies an operation."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Access denied: {reason}")


class ValidationFailedError(Exception):
    """Raised when input violates the record schema or its invariants.

    Carries one ``FieldError`` per offending field so callers can report
    precise, field-level messages.
    """

    def __init__(self, errors: list[FieldError], message: str = "Validation failed"):
        self.errors = errors
        self.message = message
        super().__init__(message)

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationFailedError":
        return cls([FieldError(field, message)], message=message)

    def summary(self) -> str:
        """Render errors as ``field: message, field: message``."""
        if not self.errors:
            return self.message
        return ", ".join(str(e) for e in self.errors)


class StoreUnavailableError(Exception):
    """Raised when the persistence layer fails.

    The original exception is kept for operator logs only; it must never be
    echoed back to API callers.
    """

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Persistence failure during {operation}")

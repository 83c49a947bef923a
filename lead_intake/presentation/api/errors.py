"""Mapping of domain exceptions onto HTTP responses.

Validation and policy failures are reported precisely; store failures and
anything unexpected are logged in full and answered with a generic message.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lead_intake.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    FieldError,
    ForbiddenError,
    StoreUnavailableError,
    UnauthenticatedError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Internal server error"


def validation_detail(exc: ValidationFailedError) -> dict:
    return {
        "error": exc.message,
        "details": [{"field": e.field, "message": e.message} for e in exc.errors],
    }


def _error(status_code: int, detail) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail})


def register_exception_handlers(app: FastAPI) -> None:
    """Install one handler per domain error, plus 400 for request validation."""

    @app.exception_handler(ValidationFailedError)
    async def _validation_failed(request: Request, exc: ValidationFailedError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, validation_detail(exc))

    @app.exception_handler(UnauthenticatedError)
    async def _unauthenticated(request: Request, exc: UnauthenticatedError) -> JSONResponse:
        return _error(status.HTTP_401_UNAUTHORIZED, exc.message)

    @app.exception_handler(ForbiddenError)
    async def _forbidden(request: Request, exc: ForbiddenError) -> JSONResponse:
        return _error(status.HTTP_403_FORBIDDEN, str(exc))

    @app.exception_handler(EntityNotFoundError)
    async def _not_found(request: Request, exc: EntityNotFoundError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, f"{exc.entity_type} not found")

    @app.exception_handler(DuplicateEntityError)
    async def _duplicate(request: Request, exc: DuplicateEntityError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(StoreUnavailableError)
    async def _store_unavailable(request: Request, exc: StoreUnavailableError) -> JSONResponse:
        # The repository already logged the traceback
        logger.error("Store unavailable (%s) on %s %s", exc.operation, request.method, request.url.path)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)

    @app.exception_handler(RequestValidationError)
    async def _request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = []
        for err in exc.errors():
            loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "header")]
            errors.append(FieldError(".".join(loc) or "body", err.get("msg", "Invalid value")))
        return _error(status.HTTP_400_BAD_REQUEST, validation_detail(ValidationFailedError(errors)))

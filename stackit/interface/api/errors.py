"""Exception handlers mapping domain errors to HTTP responses.

Every error body has the same shape:

    {"detail": "<message>", "error": "<code>", "retryable": <bool>}

`retryable` tells the client whether repeating the identical request may
succeed (409 and 503 responses).
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from stackit.domain.error import (
    ConflictError,
    DomainError,
    InvalidArgumentError,
    NotAuthorizedError,
    NotFoundError,
    StoreUnavailableError,
    UnauthenticatedError,
)
from stackit.persistence.error import translate_error

STATUS_CODES: dict[type[DomainError], int] = {
    UnauthenticatedError: status.HTTP_401_UNAUTHORIZED,
    InvalidArgumentError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    NotAuthorizedError: status.HTTP_403_FORBIDDEN,
    ConflictError: status.HTTP_409_CONFLICT,
    StoreUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_code_for(error: DomainError) -> int:
    """Resolve the HTTP status for a domain error (most specific class wins)."""
    for cls in type(error).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(error: DomainError, **extra) -> JSONResponse:
    """Build the JSON error response for a domain error."""
    body = {"detail": error.message, "error": error.code, "retryable": error.retryable}
    if isinstance(error, InvalidArgumentError) and error.field:
        body["field"] = error.field
    body.update(extra)

    headers = None
    if isinstance(error, UnauthenticatedError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=status_code_for(error), content=body, headers=headers
    )


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    if exc.retryable:
        logfire.warn(
            "Retryable request failure",
            path=request.url.path,
            error=exc.code,
            detail=exc.message,
        )
    return error_response(exc)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    field = None
    if errors:
        # ("body", "title") -> "title"
        location = [str(part) for part in errors[0].get("loc", ()) if part != "body"]
        field = ".".join(location) or None
    error = InvalidArgumentError("Invalid request", field=field)
    return error_response(error, errors=jsonable_encoder(errors))


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logfire.warn("Validation error", path=request.url.path, error=str(exc))
    error = InvalidArgumentError("Invalid request")
    return error_response(
        error, errors=jsonable_encoder(exc.errors(include_url=False, include_context=False))
    )


async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    translated = translate_error(exc)
    if translated is None:
        logfire.error(
            "Unexpected database error",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "Internal server error",
                "error": "internal",
                "retryable": False,
            },
        )
    logfire.warn(
        "Database failure outside a transaction block",
        path=request.url.path,
        error=translated.code,
        cause=str(exc),
    )
    return error_response(translated)


def register_error_handlers(app: FastAPI) -> None:
    """Install the exception handlers on the application.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)

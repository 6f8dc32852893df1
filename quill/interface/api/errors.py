"""Exception handlers mapping errors to `{success: false, message}` bodies."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from quill.config import Settings
from quill.domain.error import (
    AuthenticationError,
    ConflictError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from quill.interface.api.schemas import ErrorResponse

# Most specific first
STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
]


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


def status_for(error: DomainError) -> int:
    """HTTP status for a domain error."""
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Map domain errors onto their HTTP status."""
    status_code = status_for(exc)
    logfire.info(
        "Request rejected",
        path=request.url.path,
        status=status_code,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    fields = exc.fields if isinstance(exc, ValidationError) and exc.fields else None
    return _error_response(
        status_code, ErrorResponse(message=str(exc), errors=fields)
    )


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed query, path or body parameters as 400."""
    fields = [
        ".".join(str(part) for part in err["loc"][1:]) or str(err["loc"][0])
        for err in exc.errors()
    ]
    logfire.info("Request validation failed", path=request.url.path, fields=fields)
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        ErrorResponse(message=f"Invalid request: {', '.join(fields)}", errors=fields),
    )


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Wrap framework HTTP errors (unknown route, bad method) in the envelope."""
    return _error_response(exc.status_code, ErrorResponse(message=str(exc.detail)))


def register_error_handlers(app: FastAPI, settings: Settings) -> None:
    """Install all exception handlers on the app.

    Args:
        app: FastAPI application
        settings: Application settings; `debug` exposes internal error details
    """

    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logfire.error(
            "Unhandled error",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=str(exc),
            _exc_info=exc,
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(
                message="Internal server error",
                error=str(exc) if settings.debug else None,
            ),
        )

    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)

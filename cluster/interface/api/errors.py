"""Exception handlers translating errors into HTTP responses.

Every error body has the shape ``{"detail": <message>, "code": <CODE>}``.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from cluster.adapter.error import AdapterError
from cluster.domain.error import DomainError, ErrorCategory

STATUS_BY_CATEGORY: dict[ErrorCategory, int] = {
    ErrorCategory.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCategory.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCategory.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorCategory.CONFLICT: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.STATE_INVALID: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.SERVER: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(status_code: int, detail: str, code: str) -> JSONResponse:
    """Render the common error body."""
    return JSONResponse(
        status_code=status_code, content={"detail": detail, "code": code}
    )


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    status_code = STATUS_BY_CATEGORY[exc.category]
    if status_code >= 500:
        logfire.error(
            "Domain error", code=exc.code, path=request.url.path, error=exc.message
        )
    else:
        logfire.info(
            "Request rejected",
            code=exc.code,
            category=exc.category.value,
            path=request.url.path,
        )
    return error_response(status_code, exc.message, exc.code)


async def handle_adapter_error(request: Request, exc: AdapterError) -> JSONResponse:
    logfire.warn(
        "Adapter error", code=exc.code, path=request.url.path, error=str(exc)
    )
    return error_response(
        status.HTTP_400_BAD_REQUEST, str(exc), exc.code or "ADAPTER_ERROR"
    )


async def handle_validation_error(
    request: Request, exc: RequestValidationError | PydanticValidationError
) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    detail = f"{location}: {message}" if location else message
    return error_response(status.HTTP_400_BAD_REQUEST, detail, "VALIDATION_ERROR")


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    # Raised for malformed path identifiers (UUID parsing)
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc), "VALIDATION_ERROR")


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logfire.error(
        "Unhandled error",
        path=request.url.path,
        error=str(exc),
        _exc_info=exc,
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        "INTERNAL_ERROR",
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the application."""
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(AdapterError, handle_adapter_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(PydanticValidationError, handle_validation_error)
    app.add_exception_handler(ValueError, handle_value_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

"""
Exception Handlers.

FastAPI exception handlers that convert application exceptions
to standardized API responses. All exceptions are logged and
returned in the standard ErrorResponse format.

Usage:
    from kashmir_tours.backend.core.exception_handlers import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from kashmir_tours.backend.core.config import get_app_config
from kashmir_tours.backend.core.exceptions import (
    ApplicationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)
from kashmir_tours.backend.core.logging import get_logger
from kashmir_tours.backend.schemas.base import ErrorDetail, ErrorResponse, ResponseMetadata

logger = get_logger(__name__)

# Map exception types to HTTP status codes
EXCEPTION_STATUS_MAP: dict[type[ApplicationError], int] = {
    NotFoundError: 404,
    ValidationError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
    ConflictError: 409,
    RateLimitError: 429,
    DatabaseError: 503,
}


def get_status_code(exc: ApplicationError) -> int:
    """Resolve the HTTP status for an exception, walking its class hierarchy."""
    for cls in type(exc).__mro__:
        if cls in EXCEPTION_STATUS_MAP:
            return EXCEPTION_STATUS_MAP[cls]
    return 500


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state or headers."""
    # Try request state first (set by middleware)
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return request.headers.get("x-request-id")


async def application_error_handler(
    request: Request,
    exc: ApplicationError,
) -> JSONResponse:
    """
    Handle all ApplicationError subclasses.

    Converts application exceptions to standardized JSON responses
    with appropriate HTTP status codes.
    """
    status_code = get_status_code(exc)
    request_id = _get_request_id(request)

    log_extra = {
        "code": exc.code,
        "message": exc.message,
        "status": status_code,
        "path": request.url.path,
        "method": request.method,
    }
    if request_id:
        log_extra["request_id"] = request_id

    if status_code >= 500:
        logger.error("Server error", extra=log_extra)
    else:
        logger.warning("Client error", extra=log_extra)

    error_detail = ErrorDetail(code=exc.code, message=exc.message)
    if exc.details:
        error_detail.details = exc.details

    metadata = ResponseMetadata(request_id=request_id)
    response = ErrorResponse(error=error_detail, metadata=metadata)

    headers = None
    if isinstance(exc, RateLimitError) and exc.retry_after_seconds:
        headers = {"Retry-After": str(exc.retry_after_seconds)}

    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json"),
        headers=headers,
    )


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Handle FastAPI/Pydantic request validation errors.

    Converts validation errors to standardized format matching
    our ErrorResponse schema.
    """
    request_id = _get_request_id(request)

    errors = exc.errors()
    details = {
        "validation_errors": [
            {
                "field": ".".join(str(loc) for loc in err.get("loc", [])),
                "message": err.get("msg", "Validation error"),
                "type": err.get("type", "unknown"),
            }
            for err in errors
        ]
    }

    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(errors),
            "request_id": request_id,
        },
    )

    error_detail = ErrorDetail(
        code="VAL_REQUEST_INVALID",
        message="Request validation failed",
        details=details,
    )

    metadata = ResponseMetadata(request_id=request_id)
    response = ErrorResponse(error=error_detail, metadata=metadata)

    return JSONResponse(
        status_code=422,
        content=response.model_dump(mode="json"),
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Catches all unhandled exceptions and returns a generic error
    response. Only the exception type is exposed, and only when
    api_detailed_errors is enabled.
    """
    request_id = _get_request_id(request)

    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
            "request_id": request_id,
        },
    )

    error_detail = ErrorDetail(
        code="SYS_INTERNAL_ERROR",
        message="An unexpected error occurred",
    )
    if get_app_config().features.api_detailed_errors:
        error_detail.details = {"exception_type": type(exc).__name__}

    metadata = ResponseMetadata(request_id=request_id)
    response = ErrorResponse(error=error_detail, metadata=metadata)

    return JSONResponse(
        status_code=500,
        content=response.model_dump(mode="json"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI app.

    Call this function after creating the FastAPI app instance
    to enable standardized error handling.
    """
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    logger.debug("Exception handlers registered")

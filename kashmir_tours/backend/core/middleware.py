"""
Request Context Middleware.

Middleware for request tracking, timing, client identification, and context propagation.
"""

import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from kashmir_tours.backend.core.logging import LOG_SOURCES, get_logger
from kashmir_tours.backend.core.utils import utc_now

logger = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds request context to every request.

    Headers:
    - X-Request-ID: Unique request identifier (generated if not provided)
    - X-Frontend-ID: Client identifier (web, mobile, cli, api, internal)
    - X-Response-Time: Response duration in milliseconds

    All logs within a request automatically include request_id, source,
    method and path. Handlers can read request.state.request_id,
    request.state.source and request.state.start_time.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request with context tracking."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        source = request.headers.get("X-Frontend-ID", "unknown").lower()
        if source not in LOG_SOURCES:
            source = "unknown"

        start_time = utc_now()

        request.state.request_id = request_id
        request.state.source = source
        request.state.start_time = start_time

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            source=source,
            method=request.method,
            path=request.url.path,
        )

        logger.debug(
            "Request started",
            extra={
                "client_host": request.client.host if request.client else None,
                "user_agent": request.headers.get("User-Agent"),
            },
        )

        try:
            response = await call_next(request)

            duration_ms = int((utc_now() - start_time).total_seconds() * 1000)

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"

            logger.debug(
                "Request completed",
                extra={
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                },
            )

            return response

        except Exception as exc:
            duration_ms = int((utc_now() - start_time).total_seconds() * 1000)

            # Exception handlers build the response
            logger.error(
                "Request failed with exception",
                extra={
                    "duration_ms": duration_ms,
                    "error_type": type(exc).__name__,
                },
            )
            raise

        finally:
            structlog.contextvars.clear_contextvars()

"""API middleware for request tracking and error handling."""

import time
import uuid
from collections.abc import Callable

import structlog
from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .models import ErrorResponse

logger = structlog.get_logger()

# Paths too noisy to log on every hit
QUIET_PATHS = {"/health", "/metrics"}


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Add request ID to all requests and responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and add request ID."""
        request_id = str(uuid.uuid4())

        # Store in request state for other middleware/handlers
        request.state.request_id = request_id

        structlog.contextvars.bind_contextvars(request_id=request_id)

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            structlog.contextvars.clear_contextvars()


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log all requests and responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Log request details and response status."""
        start_time = time.time()

        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        logger.info(
            "request_started",
            method=request.method,
            path=request.url.path,
            client=request.client.host if request.client else None,
        )

        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000

        logger.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )

        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Turn unexpected failures into a consistent 500 response.

    Validation problems never reach this point; the node handlers answer
    those themselves with an ``errors`` list.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Catch exceptions and return consistent error format."""
        try:
            return await call_next(request)
        except Exception as exc:
            request_id = getattr(request.state, "request_id", "unknown")

            logger.exception(
                "unhandled_exception",
                exc_type=type(exc).__name__,
                exc_message=str(exc),
            )

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=ErrorResponse(
                    error="An internal error occurred",
                    request_id=request_id,
                ).model_dump(exclude_none=True),
            )

"""Custom middleware for request validation and error handling."""

import logging
import uuid
from typing import Callable

import structlog
from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from loginlog.core.errors import ErrorMessage, ErrorResponse

logger = logging.getLogger(__name__)


class RequestValidationMiddleware(BaseHTTPMiddleware):
    """Middleware for request validation and security checks.

    Enforces:
    - Request size limits
    - Request ID generation and propagation
    """

    def __init__(
        self,
        app: ASGIApp,
        max_request_size: int = 1024 * 1024,
    ) -> None:
        super().__init__(app)
        self.max_request_size = max_request_size

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and apply validation."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        # Bind request_id to all log entries during this request
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        try:
            rejection = self._validate(request, request_id)
            if rejection is not None:
                return rejection

            try:
                response = await call_next(request)
            except Exception as e:
                logger.exception(f"Unhandled exception during request processing: {e}")
                return ErrorResponse.create(
                    message=ErrorMessage.INTERNAL_ERROR,
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    request_id=request_id,
                )

            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            structlog.contextvars.clear_contextvars()

    def _validate(self, request: Request, request_id: str) -> Response | None:
        client_host = request.client.host if request.client else "unknown"

        # Check content-length for size limits
        content_length = request.headers.get("content-length")
        if content_length:
            try:
                size = int(content_length)
            except ValueError:
                size = 0
            if size > self.max_request_size:
                logger.warning(f"Request too large: {size} bytes from {client_host}")
                return ErrorResponse.create(
                    message=f"Request too large. Maximum size is {self.max_request_size} bytes",
                    status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                    request_id=request_id,
                )

        return None

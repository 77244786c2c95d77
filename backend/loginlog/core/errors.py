"""
Standardized error response system.

Every failure leaves the API as ``{"success": false, "message": ...}``.
"""
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse


class ErrorMessage:
    """Caller-visible error messages."""

    MISSING_CREDENTIALS = "Email and password are required"
    SERVER_ERROR = "Server error occurred"
    FETCH_FAILED = "Error fetching data"
    DELETE_FAILED = "Error deleting data"
    INTERNAL_ERROR = "Internal server error"


class ErrorResponse:
    """Standard error response format."""

    @staticmethod
    def create(
        message: str,
        status_code: int = 500,
        request_id: Optional[str] = None,
    ) -> JSONResponse:
        """
        Create a standardized error response.

        Args:
            message: Human-readable error message
            status_code: HTTP status code
            request_id: Request correlation ID, echoed as a header

        Returns:
            JSONResponse with standard error format
        """
        content: Dict[str, Any] = {"success": False, "message": message}
        headers = {"X-Request-ID": request_id} if request_id else None
        return JSONResponse(status_code=status_code, content=content, headers=headers)


class HTTPError(HTTPException):
    """
    HTTPException rendered in the standard error envelope.

    Usage:
        raise HTTPError(status_code=400, message="Email and password are required")
    """

    def __init__(self, status_code: int, message: str):
        self.message = message
        super().__init__(status_code=status_code, detail=message)


async def http_error_handler(request: Request, exc: HTTPError) -> JSONResponse:
    """
    Handle HTTPError exceptions and return standardized error response.

    This should be added to FastAPI exception handlers.
    """
    return ErrorResponse.create(
        message=exc.message,
        status_code=exc.status_code,
        request_id=getattr(request.state, "request_id", None),
    )


# Convenience functions for common errors

def bad_request(message: str = ErrorMessage.MISSING_CREDENTIALS) -> HTTPError:
    """Create a 400 error."""
    return HTTPError(status_code=status.HTTP_400_BAD_REQUEST, message=message)


def server_error(message: str = ErrorMessage.SERVER_ERROR) -> HTTPError:
    """Create a 500 error with a generic message."""
    return HTTPError(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, message=message)

# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Following the principle: "Errors should tell HOW to fix, not just WHAT failed."
#
# Every error response uses the same envelope as successful ones:
#   {"success": false, "data": null, "error": "...", "code": "..."}
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from core.models.response import ApiResponse, ErrorCode


class DirectoryException(Exception):
    """
    Base exception for the directory API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "DIRECTORY_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "success": False,
            "data": None,
            "error": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Directory Exceptions
# =============================================================================

class InvalidInputError(DirectoryException):
    """Raised when a required field is missing or blank."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR.value,
            status_code=400,
            suggestion="Fill in every required field and try again",
        )


class ResourceNotFoundError(DirectoryException):
    """Raised when a tool or category ID doesn't exist."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code=ErrorCode.NOT_FOUND.value,
            status_code=404,
            suggestion="Check that the ID is correct and the item hasn't been deleted",
        )


class RemoteServiceError(DirectoryException):
    """Raised when the database reports a failure."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code=ErrorCode.REMOTE_SERVICE_ERROR.value,
            status_code=502,
            suggestion="Try again later or contact support if the issue persists",
        )


class AuthenticationError(DirectoryException):
    """Raised when the bearer token is missing, invalid or expired."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="UNAUTHORIZED",
            status_code=401,
            suggestion="Sign in again to get a fresh access token",
        )


_EXCEPTIONS_BY_CODE: dict[ErrorCode, type[DirectoryException]] = {
    ErrorCode.VALIDATION_ERROR: InvalidInputError,
    ErrorCode.NOT_FOUND: ResourceNotFoundError,
    ErrorCode.REMOTE_SERVICE_ERROR: RemoteServiceError,
}


def unwrap(response: ApiResponse) -> Any:
    """
    Return `response.data`, or raise the matching DirectoryException.

    Used by route handlers to turn a service outcome into HTTP.
    """
    if response.error is None:
        return response.data
    exc_class = _EXCEPTIONS_BY_CODE.get(response.code, RemoteServiceError)
    raise exc_class(response.error)


# =============================================================================
# Exception Handlers
# =============================================================================

async def directory_exception_handler(
    request: Request,
    exc: DirectoryException
) -> JSONResponse:
    """
    Convert DirectoryException to JSON response.

    Returns the standard envelope with:
    - error: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    """
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle request validation errors.

    Converts validation errors to user-friendly messages.
    """
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "data": None,
            "error": "Validation error",
            "code": ErrorCode.VALIDATION_ERROR.value,
            "errors": str(exc),
        }
    )

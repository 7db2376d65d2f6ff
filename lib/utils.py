# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from typing import Any
from uuid import UUID

from pydantic import ValidationError


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Handles both string and UUID objects, ensuring consistent string output.

    Args:
        value: UUID as string or UUID object

    Returns:
        String representation of the UUID

    Example:
        user_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        user_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for application-specific errors.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging

    Example:
        class MyServiceError(ApplicationError):
            def __init__(self, message: str, **kwargs):
                super().__init__(message, code="MY_SERVICE_ERROR", **kwargs)
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion,
            "details": self.details,
        }


# =============================================================================
# Validation
# =============================================================================

class RequiredFieldError(ApplicationError):
    """
    Raised before a write when a required field is missing or blank.

    Never reaches the database - callers surface `message` verbatim.
    """

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            suggestion="Fill in every required field and try again",
            details={"fields": fields or []},
        )


def require_non_empty(**values: Any) -> None:
    """
    Check that every keyword value is present and not blank.

    Example:
        require_non_empty(tool_id=tool_id)  # raises if tool_id is "" or None

    Raises:
        RequiredFieldError: Listing every missing field
    """
    missing = [
        name for name, value in values.items()
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise RequiredFieldError(
            f"Required field(s) missing: {', '.join(missing)}",
            fields=missing,
        )


def validation_error_from(exc: ValidationError) -> RequiredFieldError:
    """
    Convert a pydantic ValidationError into a RequiredFieldError.

    Produces one readable line per failing field, e.g.
    "name: String should have at least 1 character".
    """
    fields = []
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "value"
        fields.append(location)
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return RequiredFieldError("; ".join(parts), fields=fields)

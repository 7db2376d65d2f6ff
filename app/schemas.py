# =============================================================================
# app/schemas.py - HTTP Response Envelope
# =============================================================================
# Every endpoint answers with the same shape the web client expects:
#   {"success": true,  "data": <payload>, "error": null}
#   {"success": false, "data": null,      "error": "<message>", "code": "..."}
# Failures are produced by app/exceptions.py.
# =============================================================================

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Successful API response."""

    success: bool = Field(default=True)

    data: T | None = Field(default=None)

    error: str | None = Field(default=None)

    model_config = {
        "json_schema_extra": {
            "example": {"success": True, "data": {}, "error": None}
        }
    }

# =============================================================================
# core/models/response.py - Service Outcome Schemas
# =============================================================================
# Every service operation resolves to an ApiResponse instead of raising:
# either `data` is populated or `error` is, never both. Callers branch on
# `error`. An empty result set is a success with an empty list.
#
# Failures also carry a machine-readable `code` so the HTTP layer can pick
# a status code without parsing messages.
# =============================================================================

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field, model_validator

T = TypeVar("T")


class ErrorCode(str, Enum):
    """
    Failure categories.

    - VALIDATION_ERROR: a required field was missing; nothing was sent
    - NOT_FOUND: a single-row lookup matched nothing
    - REMOTE_SERVICE_ERROR: the database or network reported a failure
    """
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    REMOTE_SERVICE_ERROR = "REMOTE_SERVICE_ERROR"


class ApiResponse(BaseModel, Generic[T]):
    """
    Result-or-error outcome of a service call.

    Example:
        response = await catalog.list_categories()
        if response.error:
            show_error(response.error)
        else:
            render(response.data)
    """

    data: T | None = None

    error: str | None = None

    code: ErrorCode | None = None

    @model_validator(mode="after")
    def _data_xor_error(self) -> "ApiResponse[T]":
        if self.data is not None and self.error is not None:
            raise ValueError("ApiResponse cannot carry both data and error")
        return self

    @classmethod
    def ok(cls, data: T) -> "ApiResponse[T]":
        return cls(data=data)

    @classmethod
    def fail(
        cls,
        error: str,
        code: ErrorCode = ErrorCode.REMOTE_SERVICE_ERROR,
    ) -> "ApiResponse[T]":
        return cls(error=error, code=code)

    @property
    def is_ok(self) -> bool:
        return self.error is None


class DirectoryStats(BaseModel):
    """
    Headline numbers for the admin dashboard.

    total_views stays 0 until a page-view source exists.
    """

    total_tools: int = Field(default=0, ge=0)

    total_categories: int = Field(default=0, ge=0)

    total_views: int = Field(default=0, ge=0)

# =============================================================================
# core/services/base.py - Shared Service Plumbing
# =============================================================================
# All directory services run typed requests through a QueryRunner and turn
# every failure into an ApiResponse, so nothing below the service layer
# escapes to callers as an exception.
# =============================================================================

import logging

from core.models.response import ApiResponse, ErrorCode
from core.requests import DirectoryRequest, to_query
from lib.query import QueryResult, QueryRunner
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import ApplicationError, RequiredFieldError

logger = logging.getLogger(__name__)


class DirectoryService:
    """
    Base class for services that talk to the remote database.

    Args:
        runner: Executes QuerySpecs. Defaults to the Supabase singleton;
            tests pass an in-memory runner.
    """

    def __init__(self, runner: QueryRunner | None = None):
        self.runner: QueryRunner = runner or SupabaseClient

    async def _execute(self, request: DirectoryRequest) -> QueryResult:
        return await self.runner.run(to_query(request))

    @staticmethod
    def _fail(action: str, exc: Exception) -> ApiResponse:
        """
        Map an exception to a failed ApiResponse and log it.

        Args:
            action: What was being attempted, e.g. "fetch categories"
            exc: The exception that stopped it
        """
        if isinstance(exc, RequiredFieldError):
            logger.info(f"Rejected {action}: {exc.message}")
            return ApiResponse.fail(exc.message, code=ErrorCode.VALIDATION_ERROR)

        if isinstance(exc, (SupabaseClientError, ApplicationError)):
            logger.error(f"Failed to {action}: {exc}")
            return ApiResponse.fail(exc.message)

        logger.exception(f"Unexpected error while trying to {action}: {exc}")
        return ApiResponse.fail(str(exc) or "Unknown error")

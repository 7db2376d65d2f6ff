# =============================================================================
# core/services/favorite_service.py - Favorites
# =============================================================================
# Bookmarks between the current user and tools.
#
# The database keeps (user_id, tool_id) unique. A second add of the same
# tool hits that constraint; it is reported as success ("already
# favorited") so adding is idempotent from the caller's point of view.
# =============================================================================

import logging
from uuid import UUID

from core.models.favorite import Favorite
from core.models.response import ApiResponse
from core.models.tool import Tool
from core.requests import FAVORITES_TABLE, DeleteRows, FavoriteStatus, FavoriteTools, InsertRow
from core.services.base import DirectoryService
from lib.query import QueryRunner
from lib.supabase_client import SupabaseClientError
from lib.utils import normalize_uuid, require_non_empty

logger = logging.getLogger(__name__)


class FavoriteService(DirectoryService):
    """
    Favorites for one user.

    Args:
        user_id: The authenticated user the favorites belong to
        runner: QueryRunner (defaults to Supabase)
    """

    def __init__(self, user_id: str | UUID, runner: QueryRunner | None = None):
        super().__init__(runner)
        self.user_id = normalize_uuid(user_id)

    async def list_favorite_tools(self) -> ApiResponse[list[Tool]]:
        """
        The user's favorited tools, most recently favorited first.

        Favorites whose tool no longer exists are skipped.
        """
        try:
            result = await self._execute(FavoriteTools(self.user_id))
            favorites = [Favorite.model_validate(row) for row in result.rows]
        except Exception as e:
            return self._fail("fetch favorite tools", e)

        return ApiResponse.ok([fav.tool for fav in favorites if fav.tool is not None])

    async def add_favorite(self, tool_id: str) -> ApiResponse[bool]:
        """Favorite a tool. Favoriting it again is a no-op."""
        try:
            require_non_empty(tool_id=tool_id)
            await self._execute(InsertRow(
                FAVORITES_TABLE,
                {"user_id": self.user_id, "tool_id": tool_id},
            ))
        except SupabaseClientError as e:
            if e.is_unique_violation:
                logger.info(f"Tool {tool_id} already favorited by {self.user_id}")
                return ApiResponse.ok(True)
            return self._fail("add favorite", e)
        except Exception as e:
            return self._fail("add favorite", e)

        logger.debug(f"User {self.user_id} favorited tool {tool_id}")
        return ApiResponse.ok(True)

    async def remove_favorite(self, tool_id: str) -> ApiResponse[bool]:
        """Remove a favorite. Removing one that does not exist succeeds."""
        try:
            require_non_empty(tool_id=tool_id)
            await self._execute(DeleteRows(
                FAVORITES_TABLE,
                {"user_id": self.user_id, "tool_id": tool_id},
            ))
        except Exception as e:
            return self._fail("remove favorite", e)

        logger.debug(f"User {self.user_id} unfavorited tool {tool_id}")
        return ApiResponse.ok(True)

    async def is_favorited(self, tool_id: str) -> ApiResponse[bool]:
        """
        True iff exactly one favorite row exists for this user and tool.

        "No row" is a normal answer (False), not an error.
        """
        try:
            require_non_empty(tool_id=tool_id)
            result = await self._execute(FavoriteStatus(self.user_id, tool_id))
        except SupabaseClientError as e:
            if e.is_no_rows:
                return ApiResponse.ok(False)
            return self._fail("check favorite status", e)
        except Exception as e:
            return self._fail("check favorite status", e)

        return ApiResponse.ok(len(result.rows) == 1)

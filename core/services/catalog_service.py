# =============================================================================
# core/services/catalog_service.py - Tool & Category Reads
# =============================================================================
# Read side of the directory: category lists, tool listings, search,
# pagination and dashboard stats.
#
# Cached reads (see lib/cache.py):
# - tools_{page}_{limit}   paginated tool listing
# - categories             compact category list (id, name, icon)
# - categories_full        full category list
#
# Every method returns an ApiResponse and never raises.
# =============================================================================

import asyncio
import logging

from core.models.category import Category
from core.models.response import ApiResponse, DirectoryStats, ErrorCode
from core.models.tool import Tool, ToolsPage
from core.requests import (
    CATEGORIES_TABLE,
    TOOLS_TABLE,
    FreeTools,
    ListAllTools,
    ListCategories,
    ListCategoriesCompact,
    PopularTools,
    RowCount,
    SearchTools,
    ToolById,
    ToolsByCategory,
    ToolsPageRequest,
)
from core.services.base import DirectoryService
from lib.cache import ResponseCache, cache_key
from lib.query import QueryRunner
from lib.supabase_client import SupabaseClientError
from lib.utils import require_non_empty

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
DEFAULT_POPULAR_LIMIT = 10


class CatalogService(DirectoryService):
    """
    Service for browsing tools and categories.

    Args:
        runner: QueryRunner (defaults to Supabase)
        cache: Shared response cache. Without one, nothing is cached.

    Example:
        catalog = CatalogService(cache=ResponseCache())
        response = await catalog.list_tools_paginated(page=2)
        if response.is_ok:
            print(response.data.total)
    """

    def __init__(
        self,
        runner: QueryRunner | None = None,
        cache: ResponseCache | None = None,
    ):
        super().__init__(runner)
        self.cache = cache

    # -------------------------------------------------------------------------
    # Cache helpers
    # -------------------------------------------------------------------------

    def _cached(self, key: str):
        return self.cache.get(key) if self.cache is not None else None

    def _remember(self, key: str, payload) -> None:
        if self.cache is not None:
            self.cache.set(key, payload)

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    async def list_categories(self) -> ApiResponse[list[Category]]:
        """All categories with every column, ordered by name."""
        key = cache_key("categories", "full")
        cached = self._cached(key)
        if cached is not None:
            return ApiResponse.ok(cached)

        try:
            result = await self._execute(ListCategories())
            categories = [Category.model_validate(row) for row in result.rows]
        except Exception as e:
            return self._fail("fetch categories", e)

        self._remember(key, categories)
        return ApiResponse.ok(categories)

    async def list_categories_optimized(self) -> ApiResponse[list[Category]]:
        """
        Categories with only id, name and icon, ordered by name.

        This is what the home page filter menu needs, so it is the list
        kept under the plain "categories" cache key.
        """
        key = cache_key("categories")
        cached = self._cached(key)
        if cached is not None:
            return ApiResponse.ok(cached)

        try:
            result = await self._execute(ListCategoriesCompact())
            categories = [Category.model_validate(row) for row in result.rows]
        except Exception as e:
            return self._fail("fetch categories", e)

        self._remember(key, categories)
        return ApiResponse.ok(categories)

    # -------------------------------------------------------------------------
    # Tool listings
    # -------------------------------------------------------------------------

    async def _tools(self, request, action: str) -> ApiResponse[list[Tool]]:
        try:
            result = await self._execute(request)
            return ApiResponse.ok([Tool.model_validate(row) for row in result.rows])
        except Exception as e:
            return self._fail(action, e)

    async def list_tools(self) -> ApiResponse[list[Tool]]:
        """Every tool with its category, newest first. Not paginated."""
        return await self._tools(ListAllTools(), "fetch tools")

    async def list_tools_by_category(self, category_id: str) -> ApiResponse[list[Tool]]:
        """Tools in one category, highest rated first."""
        try:
            require_non_empty(category_id=category_id)
        except Exception as e:
            return self._fail("fetch tools by category", e)
        return await self._tools(ToolsByCategory(category_id), "fetch tools by category")

    async def search_tools(
        self,
        keyword: str,
        category_id: str | None = None,
    ) -> ApiResponse[list[Tool]]:
        """
        Case-insensitive substring search on name or description.

        A blank keyword returns an empty list without querying.

        Args:
            keyword: Text to look for
            category_id: Optionally restrict to one category
        """
        if not keyword or not keyword.strip():
            return ApiResponse.ok([])

        return await self._tools(
            SearchTools(keyword=keyword.strip(), category_id=category_id or None),
            "search tools",
        )

    async def list_popular_tools(self, limit: int = DEFAULT_POPULAR_LIMIT) -> ApiResponse[list[Tool]]:
        """The `limit` highest rated tools."""
        if limit < 1:
            return ApiResponse.fail("limit must be at least 1", code=ErrorCode.VALIDATION_ERROR)
        return await self._tools(PopularTools(limit=limit), "fetch popular tools")

    async def list_free_tools(self) -> ApiResponse[list[Tool]]:
        """Free tools, highest rated first."""
        return await self._tools(FreeTools(), "fetch free tools")

    async def list_tools_paginated(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> ApiResponse[ToolsPage]:
        """
        One page of the newest-first listing, with the exact total.

        Args:
            page: 1-based page number
            limit: Page size

        Returns:
            ApiResponse wrapping ToolsPage(items, total, page, limit)
        """
        if page < 1 or limit < 1:
            return ApiResponse.fail(
                "page and limit must be at least 1",
                code=ErrorCode.VALIDATION_ERROR,
            )

        key = cache_key("tools", page, limit)
        cached = self._cached(key)
        if cached is not None:
            return ApiResponse.ok(cached)

        try:
            result = await self._execute(ToolsPageRequest(page=page, limit=limit))
            tools_page = ToolsPage(
                items=[Tool.model_validate(row) for row in result.rows],
                total=result.count or 0,
                page=page,
                limit=limit,
            )
        except Exception as e:
            return self._fail(f"fetch tools page {page}", e)

        self._remember(key, tools_page)
        return ApiResponse.ok(tools_page)

    async def get_tool(self, tool_id: str) -> ApiResponse[Tool]:
        """
        A single tool with its category.

        Returns a NOT_FOUND failure when no tool has this id.
        """
        try:
            require_non_empty(tool_id=tool_id)
            result = await self._execute(ToolById(tool_id))
        except Exception as e:
            if isinstance(e, SupabaseClientError) and e.is_no_rows:
                return ApiResponse.fail(f"Tool not found: {tool_id}", code=ErrorCode.NOT_FOUND)
            return self._fail("fetch tool", e)

        if result.first is None:
            return ApiResponse.fail(f"Tool not found: {tool_id}", code=ErrorCode.NOT_FOUND)

        try:
            return ApiResponse.ok(Tool.model_validate(result.first))
        except Exception as e:
            return self._fail("fetch tool", e)

    # -------------------------------------------------------------------------
    # Stats
    # -------------------------------------------------------------------------

    async def get_stats(self) -> ApiResponse[DirectoryStats]:
        """
        Tool and category totals, counted concurrently.

        If either count fails, the first failure is returned and no
        partial stats are reported. total_views is always 0.
        """
        results = await asyncio.gather(
            self._execute(RowCount(TOOLS_TABLE)),
            self._execute(RowCount(CATEGORIES_TABLE)),
            return_exceptions=True,
        )

        for outcome in results:
            if isinstance(outcome, Exception):
                return self._fail("fetch stats", outcome)
            if isinstance(outcome, BaseException):
                raise outcome

        tools_result, categories_result = results
        return ApiResponse.ok(DirectoryStats(
            total_tools=tools_result.count or 0,
            total_categories=categories_result.count or 0,
            total_views=0,
        ))

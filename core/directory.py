# =============================================================================
# core/directory.py - Directory Home Feed
# =============================================================================
# Everything the directory home page does with data, minus the rendering:
# - initial load: compact categories + first tool page, concurrently
# - infinite scroll through PaginatedListing
# - client-side filtering of the loaded tools by text and category name
# - per-category counts of loaded tools
# - the favorite id set and favorite toggling
# - search-bar dispatch (keyword search vs. category listing)
# =============================================================================

import asyncio
import logging

from core.listing import PaginatedListing
from core.models.category import Category
from core.models.response import ApiResponse, ErrorCode
from core.models.tool import Tool
from core.services.catalog_service import DEFAULT_PAGE_SIZE, CatalogService
from core.services.favorite_service import FavoriteService

logger = logging.getLogger(__name__)

# Category filter value meaning "no category filter"
ALL_CATEGORIES = "all"


class DirectoryFeed:
    """
    Data behind the directory home page.

    Args:
        catalog: Read service
        favorites: Favorites of the signed-in user, or None when anonymous
        page_size: Tools per page for the infinite scroll

    Example:
        feed = DirectoryFeed(CatalogService(cache=cache), FavoriteService(user_id))
        await feed.load()
        visible = feed.filtered_tools("image", "Design")
    """

    def __init__(
        self,
        catalog: CatalogService,
        favorites: FavoriteService | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.catalog = catalog
        self.favorites = favorites
        self.listing = PaginatedListing(catalog.list_tools_paginated, page_size=page_size)
        self.categories: list[Category] = []
        self.favorite_ids: set[str] = set()

    @property
    def tools(self) -> list[Tool]:
        return self.listing.items

    async def load(self) -> None:
        """
        Fetch categories and the first tool page concurrently.

        A category failure only leaves the category list empty; a tool
        failure leaves the listing ERRORED with a retry available.
        """
        categories_response, _ = await asyncio.gather(
            self.catalog.list_categories_optimized(),
            self.listing.load_initial(),
        )

        if categories_response.error:
            logger.error(f"Failed to load categories: {categories_response.error}")
            self.categories = []
        else:
            self.categories = list(categories_response.data)

    # -------------------------------------------------------------------------
    # Client-side views
    # -------------------------------------------------------------------------

    def filtered_tools(
        self,
        search_term: str = "",
        category_name: str = ALL_CATEGORIES,
    ) -> list[Tool]:
        """
        Loaded tools matching a text filter and a category name.

        Only filters what has been loaded so far; no request is made.
        """
        term = search_term.strip()
        return [
            tool for tool in self.listing.items
            if (not term or tool.matches(term))
            and (
                category_name == ALL_CATEGORIES
                or (tool.category is not None and tool.category.name == category_name)
            )
        ]

    def category_counts(self) -> dict[str, int]:
        """Number of loaded tools per category id (every category listed)."""
        counts = {category.id: 0 for category in self.categories}
        for tool in self.listing.items:
            if tool.category is not None and tool.category.id in counts:
                counts[tool.category.id] += 1
        return counts

    # -------------------------------------------------------------------------
    # Favorites
    # -------------------------------------------------------------------------

    async def load_favorites(self) -> ApiResponse[list[Tool]]:
        """Refresh the favorite id set. Anonymous users have none."""
        if self.favorites is None:
            self.favorite_ids = set()
            return ApiResponse.ok([])

        response = await self.favorites.list_favorite_tools()
        if response.error:
            logger.error(f"Failed to load favorites: {response.error}")
        else:
            self.favorite_ids = {tool.id for tool in response.data}
        return response

    async def toggle_favorite(self, tool_id: str) -> ApiResponse[bool]:
        """
        Favorite the tool if it is not favorited, otherwise unfavorite it.

        Returns:
            ApiResponse whose data is the new favorited state
        """
        if self.favorites is None:
            return ApiResponse.fail("Sign in to save favorites", code=ErrorCode.VALIDATION_ERROR)

        was_favorited = tool_id in self.favorite_ids
        if was_favorited:
            response = await self.favorites.remove_favorite(tool_id)
        else:
            response = await self.favorites.add_favorite(tool_id)

        if response.error:
            return response

        if was_favorited:
            self.favorite_ids.discard(tool_id)
        else:
            self.favorite_ids.add(tool_id)
        return ApiResponse.ok(not was_favorited)

    # -------------------------------------------------------------------------
    # Search bar
    # -------------------------------------------------------------------------

    async def search(
        self,
        keyword: str = "",
        category_id: str = ALL_CATEGORIES,
    ) -> ApiResponse[list[Tool]]:
        """
        What the search bar shows for a keyword and category selection.

        - no keyword, all categories -> nothing
        - keyword -> remote search (within the category if one is chosen)
        - category only -> that category's tools
        """
        has_category = bool(category_id) and category_id != ALL_CATEGORIES
        if keyword.strip():
            return await self.catalog.search_tools(
                keyword,
                category_id if has_category else None,
            )
        if has_category:
            return await self.catalog.list_tools_by_category(category_id)
        return ApiResponse.ok([])

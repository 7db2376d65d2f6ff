# =============================================================================
# core/listing.py - Paginated Tool Listing
# =============================================================================
# Drives an infinite-scroll tool list. The presentation layer wires a
# "sentinel is visible" signal (whatever scroll / viewport mechanism it has)
# to `on_sentinel_visible()`; everything else lives here.
#
# States:
#
#   IDLE --load_initial--> LOADING_INITIAL --ok--> LOADED <--> LOADING_MORE
#                                          \--error--> ERRORED --retry--^
#
# - At most one page request is in flight: `loading` is set before the
#   first await, so a second signal arriving meanwhile is a no-op
# - Page N+1 is only requested after page N has been applied
# - A short page (fewer items than the page size) ends the listing, even
#   if the reported total says otherwise
# - A failed "load more" keeps the items already loaded
# =============================================================================

import logging
from enum import Enum
from typing import Awaitable, Callable

from core.models.response import ApiResponse
from core.models.tool import Tool, ToolsPage

logger = logging.getLogger(__name__)

# Fetches one page: (page, limit) -> ApiResponse[ToolsPage]
PageFetcher = Callable[[int, int], Awaitable[ApiResponse[ToolsPage]]]


class ListingState(str, Enum):
    IDLE = "idle"
    LOADING_INITIAL = "loading_initial"
    LOADED = "loaded"
    LOADING_MORE = "loading_more"
    ERRORED = "errored"


class PaginatedListing:
    """
    Page state for an infinitely scrolling tool list.

    Args:
        fetch_page: Coroutine returning one page, usually
            `CatalogService.list_tools_paginated`
        page_size: Tools per page

    Example:
        listing = PaginatedListing(catalog.list_tools_paginated, page_size=20)
        await listing.load_initial()
        ...
        await listing.on_sentinel_visible()   # user scrolled near the end
        render(listing.items, spinner=listing.loading)
    """

    def __init__(self, fetch_page: PageFetcher, page_size: int = 20):
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self._fetch_page = fetch_page
        self.page_size = page_size
        # Bumped on reset/dispose so late responses from an older load are dropped
        self._generation = 0
        self._disposed = False
        self._clear()

    def _clear(self) -> None:
        self.state = ListingState.IDLE
        self.page = 1
        self.items: list[Tool] = []
        self.has_more = True
        self.loading = False
        self.error: str | None = None
        self._seen_ids: set[str] = set()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _request(self, page: int) -> ApiResponse[ToolsPage]:
        try:
            return await self._fetch_page(page, self.page_size)
        except Exception as e:
            logger.exception(f"Page fetcher raised for page {page}: {e}")
            return ApiResponse.fail(str(e) or "Failed to load tools")

    def _is_stale(self, generation: int) -> bool:
        return self._disposed or generation != self._generation

    def _append(self, tools_page: ToolsPage) -> None:
        for tool in tools_page.items:
            if tool.id in self._seen_ids:
                # rows shifted between page loads (e.g. a tool was added)
                logger.debug(f"Skipping duplicate tool {tool.id} on page {tools_page.page}")
                continue
            self._seen_ids.add(tool.id)
            self.items.append(tool)

        self.has_more = not tools_page.is_last
        if not self.has_more and tools_page.total > len(self.items):
            logger.debug(
                f"Short page {tools_page.page} ends the listing although total is "
                f"{tools_page.total} (loaded {len(self.items)})"
            )

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    async def load_initial(self) -> bool:
        """
        Load page 1, replacing anything loaded before.

        Returns:
            True if a request was issued
        """
        if self._disposed or self.loading:
            return False

        self._generation += 1
        generation = self._generation
        self._clear()
        self.state = ListingState.LOADING_INITIAL
        self.loading = True

        response = await self._request(1)
        if self._is_stale(generation):
            return True

        self.loading = False
        if response.error:
            self.state = ListingState.ERRORED
            self.error = response.error
            logger.warning(f"Initial tool load failed: {response.error}")
            return True

        self._append(response.data)
        self.page = 1
        self.state = ListingState.LOADED
        return True

    async def load_more(self) -> bool:
        """
        Load the next page and append it.

        No-op unless the listing is LOADED, not loading and has more pages.

        Returns:
            True if a request was issued
        """
        if (
            self._disposed
            or self.loading
            or not self.has_more
            or self.state is not ListingState.LOADED
        ):
            return False

        generation = self._generation
        next_page = self.page + 1
        self.loading = True
        self.state = ListingState.LOADING_MORE

        response = await self._request(next_page)
        if self._is_stale(generation):
            return True

        self.loading = False
        self.state = ListingState.LOADED
        if response.error:
            self.error = response.error
            logger.warning(f"Loading page {next_page} failed: {response.error}")
            return True

        self.error = None
        self._append(response.data)
        self.page = next_page
        return True

    async def on_sentinel_visible(self) -> bool:
        """The load-more sentinel scrolled into view."""
        return await self.load_more()

    async def retry(self) -> bool:
        """Re-run the initial load after it failed."""
        if self.state is not ListingState.ERRORED:
            return False
        return await self.load_initial()

    def reset(self) -> None:
        """
        Forget everything and go back to IDLE (e.g. the filter changed).

        A response still in flight from before the reset is discarded.
        """
        self._generation += 1
        self._clear()

    def dispose(self) -> None:
        """Tear down; later responses and signals are ignored."""
        self._disposed = True
        self._generation += 1
        self.loading = False

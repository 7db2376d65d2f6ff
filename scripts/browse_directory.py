#!/usr/bin/env python3
# =============================================================================
# scripts/browse_directory.py - Browse the Directory from the Terminal
# =============================================================================
# Walks the same data path as the web home page: categories plus the first
# page of tools, then "load more" on demand, keyword search and favorites.
#
# Usage:
#   poetry run python scripts/browse_directory.py              # anonymous
#   poetry run python scripts/browse_directory.py <user_id>    # with favorites
#
# Commands:
#   more              - Load the next page (same as scrolling to the end)
#   /search <text>    - Search tools by name or description
#   /filter <text>    - Filter the loaded tools without a request
#   /fav <tool_id>    - Toggle a favorite (needs a user id)
#   /favs             - List favorites
#   /retry            - Retry a failed initial load
#   /quit or /exit    - Exit
# =============================================================================

import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

# Check for Supabase settings
if not os.getenv("SUPABASE_URL") or not os.getenv("SUPABASE_ANON_KEY"):
    print("ERROR: SUPABASE_URL / SUPABASE_ANON_KEY not found in environment")
    print("Please set them in your .env file or environment")
    sys.exit(1)

from app.config import settings
from core.directory import DirectoryFeed
from core.listing import ListingState
from core.models.tool import Tool
from core.services import CatalogService, FavoriteService
from lib.cache import ResponseCache


def print_header(feed: DirectoryFeed, user_id: str | None) -> None:
    print("\n" + "=" * 60)
    print("  AI TOOLS DIRECTORY")
    print("=" * 60)
    print(f"  Categories: {', '.join(c.name for c in feed.categories) or '(none)'}")
    print(f"  Signed in as: {user_id or 'anonymous'}")
    print("  Type 'more' to load more tools, /quit to exit")
    print("=" * 60 + "\n")


def print_tools(tools: list[Tool], favorite_ids: set[str], start: int = 0) -> None:
    for index, tool in enumerate(tools[start:], start=start + 1):
        star = "*" if tool.id in favorite_ids else " "
        price = "free" if tool.is_free else "paid"
        print(f"  {index:>3}.{star} {tool.name} [{tool.category_name}] {tool.rating:.1f} ({price})  {tool.id}")
    print()


def print_status(feed: DirectoryFeed) -> None:
    listing = feed.listing
    if listing.state is ListingState.ERRORED:
        print(f"  Could not load tools: {listing.error}  (type /retry)\n")
    elif listing.error:
        print(f"  Loading more failed: {listing.error}\n")
    elif not listing.has_more:
        print(f"  All {len(listing.items)} tools loaded.\n")
    else:
        print(f"  {len(listing.items)} tools loaded (page {listing.page}).\n")


async def main():
    user_id = sys.argv[1] if len(sys.argv) > 1 else None

    catalog = CatalogService(cache=ResponseCache(ttl_seconds=settings.CACHE_TTL_SECONDS))
    favorites = FavoriteService(user_id) if user_id else None
    feed = DirectoryFeed(catalog, favorites, page_size=settings.DEFAULT_PAGE_SIZE)

    await feed.load()
    await feed.load_favorites()

    print_header(feed, user_id)
    print_tools(feed.tools, feed.favorite_ids)
    print_status(feed)

    while True:
        try:
            user_input = (await asyncio.to_thread(input, "> ")).strip()

            if not user_input:
                continue

            command, _, argument = user_input.partition(" ")
            command = command.lower()
            argument = argument.strip()

            if command in ["/quit", "/exit", "/q"]:
                print("\nBye!\n")
                break

            if command == "more":
                shown = len(feed.tools)
                if await feed.listing.on_sentinel_visible():
                    print_tools(feed.tools, feed.favorite_ids, start=shown)
                print_status(feed)
                continue

            if command == "/retry":
                if await feed.listing.retry():
                    print_tools(feed.tools, feed.favorite_ids)
                print_status(feed)
                continue

            if command == "/search":
                response = await feed.search(argument)
                if response.error:
                    print(f"  Search failed: {response.error}\n")
                elif not response.data:
                    print("  No tools found.\n")
                else:
                    print_tools(response.data, feed.favorite_ids)
                continue

            if command == "/filter":
                print_tools(feed.filtered_tools(argument), feed.favorite_ids)
                continue

            if command == "/fav":
                if not argument:
                    print("  Usage: /fav <tool_id>\n")
                    continue
                response = await feed.toggle_favorite(argument)
                if response.error:
                    print(f"  {response.error}\n")
                else:
                    print(f"  {'Added to' if response.data else 'Removed from'} favorites.\n")
                continue

            if command == "/favs":
                response = await feed.load_favorites()
                if response.error:
                    print(f"  Could not load favorites: {response.error}\n")
                else:
                    print_tools(response.data, feed.favorite_ids)
                continue

            print("  Unknown command. Try: more, /search, /filter, /fav, /favs, /retry, /quit\n")

        except KeyboardInterrupt:
            print("\n\nBye!\n")
            break
        except EOFError:
            print("\n\nBye!\n")
            break

    feed.listing.dispose()


if __name__ == "__main__":
    asyncio.run(main())

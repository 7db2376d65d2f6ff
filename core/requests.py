# =============================================================================
# core/requests.py - Typed Directory Requests
# =============================================================================
# Each read or write the directory performs is one small, typed request
# record. `to_query` is the only place that knows how a request becomes a
# remote QuerySpec (table, projection, filters, ordering, window).
#
#   request record  --to_query-->  QuerySpec  --QueryRunner.run-->  QueryResult
#
# Keeping the translation in one function means the services never build
# query fragments by hand, and the in-memory runner used by the tests sees
# exactly what Supabase would.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar

from lib.query import Embed, Filter, FilterOp, Operation, Order, QuerySpec

# -----------------------------------------------------------------------------
# Tables and embeds
# -----------------------------------------------------------------------------

TOOLS_TABLE = "tools"
CATEGORIES_TABLE = "categories"
FAVORITES_TABLE = "favorites"

CATEGORY_EMBED = Embed(
    alias="category",
    table=CATEGORIES_TABLE,
    foreign_key="category_id",
    columns=("id", "name", "description", "icon"),
)

# The paginated grid only renders the category name and icon
CATEGORY_EMBED_COMPACT = Embed(
    alias="category",
    table=CATEGORIES_TABLE,
    foreign_key="category_id",
    columns=("id", "name", "icon"),
)

FAVORITE_TOOL_EMBED = Embed(
    alias="tool",
    table=TOOLS_TABLE,
    foreign_key="tool_id",
    columns=("*",),
    embeds=(CATEGORY_EMBED,),
)

BY_RATING = Order("rating", descending=True)
NEWEST_FIRST = Order("created_at", descending=True)
BY_NAME = Order("name")


class RequestKind(str, Enum):
    """Every query the directory issues."""
    CATEGORIES = "categories"
    CATEGORIES_COMPACT = "categories_compact"
    ALL_TOOLS = "all_tools"
    TOOLS_BY_CATEGORY = "tools_by_category"
    SEARCH_TOOLS = "search_tools"
    POPULAR_TOOLS = "popular_tools"
    FREE_TOOLS = "free_tools"
    TOOLS_PAGE = "tools_page"
    TOOL_BY_ID = "tool_by_id"
    FAVORITE_TOOLS = "favorite_tools"
    FAVORITE_STATUS = "favorite_status"
    ROW_COUNT = "row_count"
    INSERT_ROW = "insert_row"
    UPDATE_ROW = "update_row"
    DELETE_ROWS = "delete_rows"


# -----------------------------------------------------------------------------
# Read requests
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ListCategories:
    kind: ClassVar[RequestKind] = RequestKind.CATEGORIES


@dataclass(frozen=True)
class ListCategoriesCompact:
    """id, name and icon only."""
    kind: ClassVar[RequestKind] = RequestKind.CATEGORIES_COMPACT


@dataclass(frozen=True)
class ListAllTools:
    kind: ClassVar[RequestKind] = RequestKind.ALL_TOOLS


@dataclass(frozen=True)
class ToolsByCategory:
    category_id: str
    kind: ClassVar[RequestKind] = RequestKind.TOOLS_BY_CATEGORY


@dataclass(frozen=True)
class SearchTools:
    """Substring match on name or description, optionally within a category."""
    keyword: str
    category_id: str | None = None
    kind: ClassVar[RequestKind] = RequestKind.SEARCH_TOOLS


@dataclass(frozen=True)
class PopularTools:
    limit: int = 10
    kind: ClassVar[RequestKind] = RequestKind.POPULAR_TOOLS


@dataclass(frozen=True)
class FreeTools:
    kind: ClassVar[RequestKind] = RequestKind.FREE_TOOLS


@dataclass(frozen=True)
class ToolsPageRequest:
    """
    One 1-based page of the newest-first tool listing.

    Page 3 with limit 20 covers rows 40..59 (inclusive).
    """
    page: int = 1
    limit: int = 20
    kind: ClassVar[RequestKind] = RequestKind.TOOLS_PAGE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.limit < 1:
            raise ValueError(f"limit must be >= 1, got {self.limit}")

    @property
    def window(self) -> tuple[int, int]:
        start = (self.page - 1) * self.limit
        return start, start + self.limit - 1


@dataclass(frozen=True)
class ToolById:
    tool_id: str
    kind: ClassVar[RequestKind] = RequestKind.TOOL_BY_ID


@dataclass(frozen=True)
class FavoriteTools:
    user_id: str
    kind: ClassVar[RequestKind] = RequestKind.FAVORITE_TOOLS


@dataclass(frozen=True)
class FavoriteStatus:
    user_id: str
    tool_id: str
    kind: ClassVar[RequestKind] = RequestKind.FAVORITE_STATUS


@dataclass(frozen=True)
class RowCount:
    """Exact row count of a table, without fetching rows."""
    table: str
    kind: ClassVar[RequestKind] = RequestKind.ROW_COUNT


# -----------------------------------------------------------------------------
# Write requests
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class InsertRow:
    table: str
    values: dict[str, Any] = field(default_factory=dict)
    kind: ClassVar[RequestKind] = RequestKind.INSERT_ROW


@dataclass(frozen=True)
class UpdateRow:
    table: str
    row_id: str
    values: dict[str, Any] = field(default_factory=dict)
    kind: ClassVar[RequestKind] = RequestKind.UPDATE_ROW


@dataclass(frozen=True)
class DeleteRows:
    """Delete every row whose columns equal all of `match`."""
    table: str
    match: dict[str, Any] = field(default_factory=dict)
    kind: ClassVar[RequestKind] = RequestKind.DELETE_ROWS


DirectoryRequest = (
    ListCategories | ListCategoriesCompact | ListAllTools | ToolsByCategory
    | SearchTools | PopularTools | FreeTools | ToolsPageRequest | ToolById
    | FavoriteTools | FavoriteStatus | RowCount | InsertRow | UpdateRow | DeleteRows
)


# =============================================================================
# Translation
# =============================================================================

def _eq(column: str, value: Any) -> Filter:
    return Filter(column, FilterOp.EQ, value)


def _contains(column: str, keyword: str) -> Filter:
    return Filter(column, FilterOp.ILIKE, f"%{keyword}%")


def _search(request: SearchTools) -> QuerySpec:
    keyword = request.keyword.strip()
    filters = (_eq("category_id", request.category_id),) if request.category_id else ()
    return QuerySpec(
        table=TOOLS_TABLE,
        embeds=(CATEGORY_EMBED,),
        filters=filters,
        any_of=(_contains("name", keyword), _contains("description", keyword)),
        order=BY_RATING,
    )


_TRANSLATORS: dict[RequestKind, Callable[[Any], QuerySpec]] = {
    RequestKind.CATEGORIES: lambda r: QuerySpec(
        table=CATEGORIES_TABLE, order=BY_NAME,
    ),
    RequestKind.CATEGORIES_COMPACT: lambda r: QuerySpec(
        table=CATEGORIES_TABLE, columns=("id", "name", "icon"), order=BY_NAME,
    ),
    RequestKind.ALL_TOOLS: lambda r: QuerySpec(
        table=TOOLS_TABLE, embeds=(CATEGORY_EMBED,), order=NEWEST_FIRST,
    ),
    RequestKind.TOOLS_BY_CATEGORY: lambda r: QuerySpec(
        table=TOOLS_TABLE,
        embeds=(CATEGORY_EMBED,),
        filters=(_eq("category_id", r.category_id),),
        order=BY_RATING,
    ),
    RequestKind.SEARCH_TOOLS: _search,
    RequestKind.POPULAR_TOOLS: lambda r: QuerySpec(
        table=TOOLS_TABLE, embeds=(CATEGORY_EMBED,), order=BY_RATING, limit=r.limit,
    ),
    RequestKind.FREE_TOOLS: lambda r: QuerySpec(
        table=TOOLS_TABLE,
        embeds=(CATEGORY_EMBED,),
        filters=(_eq("is_free", True),),
        order=BY_RATING,
    ),
    RequestKind.TOOLS_PAGE: lambda r: QuerySpec(
        table=TOOLS_TABLE,
        embeds=(CATEGORY_EMBED_COMPACT,),
        order=NEWEST_FIRST,
        row_range=r.window,
        count=True,
    ),
    RequestKind.TOOL_BY_ID: lambda r: QuerySpec(
        table=TOOLS_TABLE,
        embeds=(CATEGORY_EMBED,),
        filters=(_eq("id", r.tool_id),),
        single=True,
    ),
    RequestKind.FAVORITE_TOOLS: lambda r: QuerySpec(
        table=FAVORITES_TABLE,
        embeds=(FAVORITE_TOOL_EMBED,),
        filters=(_eq("user_id", r.user_id),),
        order=NEWEST_FIRST,
    ),
    RequestKind.FAVORITE_STATUS: lambda r: QuerySpec(
        table=FAVORITES_TABLE,
        columns=("id",),
        filters=(_eq("user_id", r.user_id), _eq("tool_id", r.tool_id)),
        single=True,
    ),
    RequestKind.ROW_COUNT: lambda r: QuerySpec(
        table=r.table, columns=("id",), count=True, head=True,
    ),
    RequestKind.INSERT_ROW: lambda r: QuerySpec(
        table=r.table, operation=Operation.INSERT, values=dict(r.values),
    ),
    RequestKind.UPDATE_ROW: lambda r: QuerySpec(
        table=r.table,
        operation=Operation.UPDATE,
        values=dict(r.values),
        filters=(_eq("id", r.row_id),),
    ),
    RequestKind.DELETE_ROWS: lambda r: QuerySpec(
        table=r.table,
        operation=Operation.DELETE,
        filters=tuple(_eq(column, value) for column, value in r.match.items()),
    ),
}


def to_query(request: DirectoryRequest) -> QuerySpec:
    """
    Translate a typed request into a remote QuerySpec.

    Raises:
        ValueError: If the request kind has no translation
    """
    translator = _TRANSLATORS.get(request.kind)
    if translator is None:
        raise ValueError(f"No query translation for request kind: {request.kind}")
    return translator(request)

# =============================================================================
# tests/test_requests.py - Request Translation Tests
# =============================================================================
# Checks that each typed directory request becomes the QuerySpec the
# remote database expects (table, projection, filters, order, window).
# =============================================================================

import pytest

from core.requests import (
    CATEGORIES_TABLE,
    FAVORITE_TOOL_EMBED,
    FAVORITES_TABLE,
    TOOLS_TABLE,
    DeleteRows,
    FavoriteStatus,
    FavoriteTools,
    FreeTools,
    InsertRow,
    ListCategories,
    ListCategoriesCompact,
    PopularTools,
    RowCount,
    SearchTools,
    ToolById,
    ToolsPageRequest,
    UpdateRow,
    to_query,
)
from lib.query import Filter, FilterOp, Operation


class TestReadTranslations:
    """Read requests."""

    def test_categories_ordered_by_name(self):
        spec = to_query(ListCategories())

        assert spec.table == CATEGORIES_TABLE
        assert spec.columns == ("*",)
        assert spec.order.column == "name"
        assert not spec.order.descending

    def test_compact_categories_projection(self):
        spec = to_query(ListCategoriesCompact())
        assert spec.select_clause() == "id, name, icon"

    def test_search_builds_or_group(self):
        spec = to_query(SearchTools(keyword=" gpt "))

        assert spec.table == TOOLS_TABLE
        assert spec.filters == ()
        assert spec.or_clause() == 'name.ilike."%gpt%",description.ilike."%gpt%"'
        assert spec.order.column == "rating" and spec.order.descending

    def test_search_within_category(self):
        spec = to_query(SearchTools(keyword="gpt", category_id="c1"))
        assert spec.filters == (Filter("category_id", FilterOp.EQ, "c1"),)

    def test_popular_uses_limit(self):
        spec = to_query(PopularTools(limit=5))
        assert spec.limit == 5
        assert spec.order.column == "rating"

    def test_free_filters_on_flag(self):
        spec = to_query(FreeTools())
        assert spec.filters == (Filter("is_free", FilterOp.EQ, True),)

    def test_tool_by_id_is_single(self):
        spec = to_query(ToolById("t1"))
        assert spec.single
        assert spec.select_clause() == "*, category:categories(id, name, description, icon)"

    def test_favorite_tools_embed_tool_and_category(self):
        spec = to_query(FavoriteTools("u1"))

        assert spec.table == FAVORITES_TABLE
        assert spec.embeds == (FAVORITE_TOOL_EMBED,)
        assert spec.select_clause() == (
            "*, tool:tools(*, category:categories(id, name, description, icon))"
        )

    def test_favorite_status_matches_user_and_tool(self):
        spec = to_query(FavoriteStatus("u1", "t1"))

        assert spec.single
        assert spec.filters == (
            Filter("user_id", FilterOp.EQ, "u1"),
            Filter("tool_id", FilterOp.EQ, "t1"),
        )

    def test_row_count_is_head_only(self):
        spec = to_query(RowCount(TOOLS_TABLE))

        assert spec.count and spec.head
        assert spec.columns == ("id",)


class TestToolsPageRequest:
    """Pagination window arithmetic."""

    @pytest.mark.parametrize(
        "page,limit,window",
        [
            (1, 20, (0, 19)),
            (3, 20, (40, 59)),
            (2, 5, (5, 9)),
        ],
    )
    def test_window_is_inclusive(self, page, limit, window):
        assert ToolsPageRequest(page=page, limit=limit).window == window

    def test_rejects_page_zero(self):
        with pytest.raises(ValueError):
            ToolsPageRequest(page=0)

    def test_rejects_non_positive_limit(self):
        with pytest.raises(ValueError):
            ToolsPageRequest(page=1, limit=0)

    def test_translation_counts_and_uses_compact_category(self):
        spec = to_query(ToolsPageRequest(page=2, limit=10))

        assert spec.row_range == (10, 19)
        assert spec.count
        assert spec.order.column == "created_at" and spec.order.descending
        assert spec.select_clause() == "*, category:categories(id, name, icon)"


class TestWriteTranslations:
    """Write requests."""

    def test_insert(self):
        spec = to_query(InsertRow(TOOLS_TABLE, {"name": "X"}))
        assert spec.operation is Operation.INSERT
        assert spec.values == {"name": "X"}

    def test_update_targets_id(self):
        spec = to_query(UpdateRow(CATEGORIES_TABLE, "c1", {"name": "New"}))

        assert spec.operation is Operation.UPDATE
        assert spec.filters == (Filter("id", FilterOp.EQ, "c1"),)

    def test_delete_matches_every_column(self):
        spec = to_query(DeleteRows(FAVORITES_TABLE, {"user_id": "u1", "tool_id": "t1"}))

        assert spec.operation is Operation.DELETE
        assert spec.filters == (
            Filter("user_id", FilterOp.EQ, "u1"),
            Filter("tool_id", FilterOp.EQ, "t1"),
        )


class TestFilterRendering:
    """PostgREST rendering of filter terms."""

    def test_quotes_reserved_characters(self):
        f = Filter("name", FilterOp.ILIKE, "%a,b.c%")
        assert f.to_postgrest() == 'name.ilike."%a,b.c%"'

    def test_escapes_double_quotes(self):
        f = Filter("name", FilterOp.ILIKE, '%say "hi"%')
        assert f.to_postgrest() == 'name.ilike."%say \\"hi\\"%"'

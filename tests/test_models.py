# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for all Pydantic models to ensure:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Default values work as expected
#
# Run with: poetry run pytest tests/test_models.py -v
# =============================================================================

import pytest
from pydantic import ValidationError

from core.models import (
    UNCATEGORIZED,
    ApiResponse,
    Category,
    CategoryUpdate,
    DirectoryStats,
    ErrorCode,
    FavoriteRequest,
    Tool,
    ToolCreate,
    ToolsPage,
    ToolUpdate,
)
from lib.utils import RequiredFieldError, require_non_empty


# =============================================================================
# Tool Model Tests
# =============================================================================

class TestTool:
    """Tests for Tool model."""

    def test_from_row_with_embedded_category(self):
        """Test parsing a row that embeds its category."""
        tool = Tool(**{
            "id": "t1",
            "name": "ChatGPT",
            "description": "Assistant",
            "category_id": "c1",
            "category": {"id": "c1", "name": "Chat", "icon": "C"},
            "is_free": True,
            "rating": 4.8,
            "created_at": "2024-01-01T00:00:00+00:00",
        })

        assert tool.category.name == "Chat"
        assert tool.category_name == "Chat"
        assert tool.created_at.year == 2024

    def test_defaults(self):
        """Test that defaults are applied correctly."""
        tool = Tool(id="t1", name="Bare")

        assert tool.description == ""
        assert tool.is_free is False
        assert tool.rating == 0.0
        assert tool.category is None

    def test_uncategorized(self):
        assert Tool(id="t1", name="Bare").category_name == UNCATEGORIZED

    def test_rating_bounds(self):
        with pytest.raises(ValidationError):
            Tool(id="t1", name="X", rating=5.5)

    def test_matches_name_or_description(self):
        tool = Tool(id="t1", name="Midjourney", description="Image generation")

        assert tool.matches("JOURNEY")
        assert tool.matches("image")
        assert not tool.matches("video")


class TestToolCreate:
    """Tests for ToolCreate validation."""

    def test_strips_whitespace(self):
        tool = ToolCreate(name="  X  ", description="d", category_id="c1", url="https://x.com")
        assert tool.name == "X"

    @pytest.mark.parametrize("field", ["name", "description", "category_id", "url"])
    def test_blank_required_field(self, field):
        data = {"name": "X", "description": "d", "category_id": "c1", "url": "https://x.com"}
        data[field] = "   "

        with pytest.raises(ValidationError):
            ToolCreate(**data)


class TestToolUpdate:
    """Tests for ToolUpdate partial semantics."""

    def test_only_set_fields_are_dumped(self):
        update = ToolUpdate(rating=3.0)
        assert update.model_dump(exclude_unset=True) == {"rating": 3.0}

    def test_blank_when_set_is_rejected(self):
        with pytest.raises(ValidationError):
            ToolUpdate(name="")

    @pytest.mark.parametrize("field", ["name", "description", "category_id", "url"])
    def test_explicit_null_required_field_is_rejected(self, field):
        with pytest.raises(ValidationError):
            ToolUpdate.model_validate({field: None})

    def test_explicit_null_optional_field_is_kept(self):
        update = ToolUpdate.model_validate({"logo": None})
        assert update.model_dump(exclude_unset=True) == {"logo": None}


class TestToolsPage:
    """Tests for ToolsPage.is_last."""

    def test_full_page_is_not_last(self):
        page = ToolsPage(items=[Tool(id=str(i), name="x") for i in range(2)], total=10, page=1, limit=2)
        assert not page.is_last

    def test_short_page_is_last(self):
        page = ToolsPage(items=[Tool(id="1", name="x")], total=10, page=1, limit=2)
        assert page.is_last


# =============================================================================
# Category / Favorite Model Tests
# =============================================================================

class TestCategory:
    """Tests for Category models."""

    def test_compact_row(self):
        category = Category(id="c1", name="Writing", icon="W")
        assert category.description is None

    def test_update_is_partial(self):
        assert CategoryUpdate(icon="X").model_dump(exclude_unset=True) == {"icon": "X"}

    def test_update_rejects_null_name(self):
        with pytest.raises(ValidationError):
            CategoryUpdate.model_validate({"name": None})


class TestFavoriteRequest:
    """Tests for FavoriteRequest aliases."""

    def test_accepts_camel_case(self):
        assert FavoriteRequest.model_validate({"toolId": "t1"}).tool_id == "t1"

    def test_accepts_snake_case(self):
        assert FavoriteRequest.model_validate({"tool_id": "t1"}).tool_id == "t1"

    def test_rejects_blank(self):
        with pytest.raises(ValidationError):
            FavoriteRequest.model_validate({"toolId": " "})


# =============================================================================
# ApiResponse Tests
# =============================================================================

class TestApiResponse:
    """Tests for the data-xor-error outcome."""

    def test_ok(self):
        response = ApiResponse.ok([1, 2])

        assert response.is_ok
        assert response.data == [1, 2]
        assert response.code is None

    def test_empty_list_is_success(self):
        assert ApiResponse.ok([]).is_ok

    def test_fail_defaults_to_remote_error(self):
        response = ApiResponse.fail("boom")

        assert not response.is_ok
        assert response.data is None
        assert response.code is ErrorCode.REMOTE_SERVICE_ERROR

    def test_both_data_and_error_rejected(self):
        with pytest.raises(ValidationError):
            ApiResponse(data=[1], error="boom")

    def test_stats_default_views(self):
        assert DirectoryStats(total_tools=1, total_categories=2).total_views == 0


class TestRequireNonEmpty:
    """Tests for lib.utils.require_non_empty."""

    def test_passes(self):
        require_non_empty(tool_id="t1")

    def test_lists_every_missing_field(self):
        with pytest.raises(RequiredFieldError) as exc_info:
            require_non_empty(name="", url=None, tool_id="t1")

        assert exc_info.value.message == "Required field(s) missing: name, url"
        assert exc_info.value.details == {"fields": ["name", "url"]}

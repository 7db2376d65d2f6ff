# =============================================================================
# core/services/admin_service.py - Administrative Writes
# =============================================================================
# Create, update and delete tools and categories for the admin panel.
#
# - Required fields are validated before anything is sent
# - Updates stamp `updated_at`
# - Tool writes return the tool with its embedded category
#
# Writes do NOT invalidate the response cache. Cached listings can lag an
# admin edit by up to one cache TTL.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ValidationError

from core.models.category import Category, CategoryCreate, CategoryUpdate
from core.models.response import ApiResponse, ErrorCode
from core.models.tool import Tool, ToolCreate, ToolUpdate
from core.requests import CATEGORIES_TABLE, TOOLS_TABLE, DeleteRows, InsertRow, ToolById, UpdateRow
from core.services.base import DirectoryService
from lib.utils import RequiredFieldError, require_non_empty, validation_error_from

logger = logging.getLogger(__name__)


def _validated(schema: type[BaseModel], payload: BaseModel | dict[str, Any]) -> BaseModel:
    """Coerce a dict (or model) into `schema`, raising RequiredFieldError."""
    if isinstance(payload, schema):
        return payload
    raw = payload.model_dump(exclude_unset=True) if isinstance(payload, BaseModel) else payload
    try:
        return schema.model_validate(raw)
    except ValidationError as e:
        raise validation_error_from(e)


def _changes(update: BaseModel) -> dict[str, Any]:
    """Fields explicitly set on an update model, stamped with updated_at."""
    values = update.model_dump(exclude_unset=True)
    if not values:
        raise RequiredFieldError("Nothing to update")
    values["updated_at"] = datetime.now(timezone.utc).isoformat()
    return values


class AdminService(DirectoryService):
    """
    Service for admin CRUD on tools and categories.

    Example:
        admin = AdminService()
        response = await admin.create_tool({"name": "Claude", ...})
        if response.error:
            flash(response.error)
    """

    # -------------------------------------------------------------------------
    # Tools
    # -------------------------------------------------------------------------

    async def _tool_with_category(self, row: dict[str, Any]) -> Tool:
        """
        Re-read a written tool so the response embeds its category.

        Falls back to the written row if the re-read fails; the write
        itself already succeeded.
        """
        try:
            result = await self._execute(ToolById(str(row["id"])))
            if result.first is not None:
                return Tool.model_validate(result.first)
        except Exception as e:
            logger.warning(f"Could not re-read tool {row.get('id')}: {e}")
        return Tool.model_validate(row)

    async def create_tool(self, payload: ToolCreate | dict[str, Any]) -> ApiResponse[Tool]:
        """
        Create a tool.

        Args:
            payload: name, description, category_id and url are required

        Returns:
            The new tool, with its category embedded
        """
        try:
            tool = _validated(ToolCreate, payload)
            result = await self._execute(InsertRow(TOOLS_TABLE, tool.model_dump(exclude_none=True)))
            if result.first is None:
                return ApiResponse.fail("Insert returned no data")
            created = await self._tool_with_category(result.first)
        except Exception as e:
            return self._fail("create tool", e)

        logger.info(f"Created tool: {created.id} ({created.name})")
        return ApiResponse.ok(created)

    async def update_tool(
        self,
        tool_id: str,
        updates: ToolUpdate | dict[str, Any],
    ) -> ApiResponse[Tool]:
        """
        Apply a partial update to a tool and stamp updated_at.

        Returns a NOT_FOUND failure if no tool has this id.
        """
        try:
            require_non_empty(tool_id=tool_id)
            values = _changes(_validated(ToolUpdate, updates))
            result = await self._execute(UpdateRow(TOOLS_TABLE, tool_id, values))
            if result.first is None:
                return ApiResponse.fail(f"Tool not found: {tool_id}", code=ErrorCode.NOT_FOUND)
            updated = await self._tool_with_category(result.first)
        except Exception as e:
            return self._fail("update tool", e)

        logger.info(f"Updated tool: {tool_id}")
        return ApiResponse.ok(updated)

    async def delete_tool(self, tool_id: str) -> ApiResponse[bool]:
        """Delete a tool. Deleting an id that does not exist still succeeds."""
        try:
            require_non_empty(tool_id=tool_id)
            await self._execute(DeleteRows(TOOLS_TABLE, {"id": tool_id}))
        except Exception as e:
            return self._fail("delete tool", e)

        logger.info(f"Deleted tool: {tool_id}")
        return ApiResponse.ok(True)

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    async def create_category(self, payload: CategoryCreate | dict[str, Any]) -> ApiResponse[Category]:
        """Create a category. Only `name` is required."""
        try:
            category = _validated(CategoryCreate, payload)
            result = await self._execute(
                InsertRow(CATEGORIES_TABLE, category.model_dump(exclude_none=True))
            )
            if result.first is None:
                return ApiResponse.fail("Insert returned no data")
            created = Category.model_validate(result.first)
        except Exception as e:
            return self._fail("create category", e)

        logger.info(f"Created category: {created.id} ({created.name})")
        return ApiResponse.ok(created)

    async def update_category(
        self,
        category_id: str,
        updates: CategoryUpdate | dict[str, Any],
    ) -> ApiResponse[Category]:
        """Apply a partial update to a category and stamp updated_at."""
        try:
            require_non_empty(category_id=category_id)
            values = _changes(_validated(CategoryUpdate, updates))
            result = await self._execute(UpdateRow(CATEGORIES_TABLE, category_id, values))
            if result.first is None:
                return ApiResponse.fail(
                    f"Category not found: {category_id}", code=ErrorCode.NOT_FOUND
                )
            updated = Category.model_validate(result.first)
        except Exception as e:
            return self._fail("update category", e)

        logger.info(f"Updated category: {category_id}")
        return ApiResponse.ok(updated)

    async def delete_category(self, category_id: str) -> ApiResponse[bool]:
        """Delete a category. The database decides what happens to its tools."""
        try:
            require_non_empty(category_id=category_id)
            await self._execute(DeleteRows(CATEGORIES_TABLE, {"id": category_id}))
        except Exception as e:
            return self._fail("delete category", e)

        logger.info(f"Deleted category: {category_id}")
        return ApiResponse.ok(True)

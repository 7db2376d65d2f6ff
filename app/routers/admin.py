# =============================================================================
# app/routers/admin.py - Admin CRUD Endpoints
# =============================================================================
# Create, update and delete tools and categories.
# All endpoints require a valid bearer token.
#
# Note: writes do not clear cached listings; they can lag for up to
# CACHE_TTL_SECONDS.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.auth import get_current_user
from app.dependencies import AdminDep
from app.exceptions import unwrap
from app.schemas import Envelope
from core.models.category import Category, CategoryCreate, CategoryUpdate
from core.models.tool import Tool, ToolCreate, ToolUpdate

router = APIRouter(dependencies=[Depends(get_current_user)])


# =============================================================================
# Tools
# =============================================================================

@router.post("/tools", response_model=Envelope[Tool], status_code=status.HTTP_201_CREATED)
async def create_tool(request: ToolCreate, admin: AdminDep):
    """Create a tool. Returns it with its category embedded."""
    return Envelope(data=unwrap(await admin.create_tool(request)))


@router.patch("/tools/{tool_id}", response_model=Envelope[Tool])
async def update_tool(
    tool_id: Annotated[str, Path(description="Tool ID")],
    request: ToolUpdate,
    admin: AdminDep,
):
    """Update the given fields of a tool."""
    return Envelope(data=unwrap(await admin.update_tool(tool_id, request)))


@router.delete("/tools/{tool_id}", response_model=Envelope[bool])
async def delete_tool(
    tool_id: Annotated[str, Path(description="Tool ID")],
    admin: AdminDep,
):
    """Delete a tool."""
    return Envelope(data=unwrap(await admin.delete_tool(tool_id)))


# =============================================================================
# Categories
# =============================================================================

@router.post("/categories", response_model=Envelope[Category], status_code=status.HTTP_201_CREATED)
async def create_category(request: CategoryCreate, admin: AdminDep):
    """Create a category."""
    return Envelope(data=unwrap(await admin.create_category(request)))


@router.patch("/categories/{category_id}", response_model=Envelope[Category])
async def update_category(
    category_id: Annotated[str, Path(description="Category ID")],
    request: CategoryUpdate,
    admin: AdminDep,
):
    """Update the given fields of a category."""
    return Envelope(data=unwrap(await admin.update_category(category_id, request)))


@router.delete("/categories/{category_id}", response_model=Envelope[bool])
async def delete_category(
    category_id: Annotated[str, Path(description="Category ID")],
    admin: AdminDep,
):
    """Delete a category."""
    return Envelope(data=unwrap(await admin.delete_category(category_id)))

# =============================================================================
# app/routers/tools.py - Tool Browsing Endpoints
# =============================================================================
# Public read endpoints for the directory: paginated listing, search,
# popular and free tools, and single-tool details.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query

from app.config import settings
from app.dependencies import CatalogDep
from app.exceptions import unwrap
from app.schemas import Envelope
from core.models.tool import Tool, ToolsPage

router = APIRouter()


@router.get("", response_model=Envelope[ToolsPage])
async def list_tools_paginated(
    catalog: CatalogDep,
    page: Annotated[int, Query(ge=1, description="Page number (1-based)")] = 1,
    limit: Annotated[int, Query(ge=1, le=100, description="Tools per page")] = settings.DEFAULT_PAGE_SIZE,
):
    """
    One page of tools, newest first.

    Returns {items, total, page, limit}. A page shorter than `limit` is the
    last one. Responses are cached for a few minutes.
    """
    return Envelope(data=unwrap(await catalog.list_tools_paginated(page=page, limit=limit)))


@router.get("/all", response_model=Envelope[list[Tool]])
async def list_all_tools(catalog: CatalogDep):
    """Every tool with its category, newest first."""
    return Envelope(data=unwrap(await catalog.list_tools()))


@router.get("/search", response_model=Envelope[list[Tool]])
async def search_tools(
    catalog: CatalogDep,
    q: Annotated[str, Query(description="Keyword matched against name and description")] = "",
    category_id: Annotated[str | None, Query(description="Restrict to one category")] = None,
):
    """
    Case-insensitive search on tool name and description.

    An empty keyword returns an empty list.
    """
    return Envelope(data=unwrap(await catalog.search_tools(q, category_id=category_id)))


@router.get("/popular", response_model=Envelope[list[Tool]])
async def list_popular_tools(
    catalog: CatalogDep,
    limit: Annotated[int, Query(ge=1, le=100)] = settings.POPULAR_TOOLS_LIMIT,
):
    """Highest rated tools."""
    return Envelope(data=unwrap(await catalog.list_popular_tools(limit=limit)))


@router.get("/free", response_model=Envelope[list[Tool]])
async def list_free_tools(catalog: CatalogDep):
    """Free tools, highest rated first."""
    return Envelope(data=unwrap(await catalog.list_free_tools()))


@router.get("/{tool_id}", response_model=Envelope[Tool])
async def get_tool(
    tool_id: Annotated[str, Path(description="Tool ID")],
    catalog: CatalogDep,
):
    """
    Tool details.

    Returns 404 if the tool does not exist.
    """
    return Envelope(data=unwrap(await catalog.get_tool(tool_id)))

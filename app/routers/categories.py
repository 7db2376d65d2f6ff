# =============================================================================
# app/routers/categories.py - Category Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query

from app.dependencies import CatalogDep
from app.exceptions import unwrap
from app.schemas import Envelope
from core.models.category import Category
from core.models.tool import Tool

router = APIRouter()


@router.get("", response_model=Envelope[list[Category]])
async def list_categories(
    catalog: CatalogDep,
    compact: Annotated[bool, Query(description="Only id, name and icon")] = False,
):
    """All categories, ordered by name."""
    if compact:
        response = await catalog.list_categories_optimized()
    else:
        response = await catalog.list_categories()
    return Envelope(data=unwrap(response))


@router.get("/{category_id}/tools", response_model=Envelope[list[Tool]])
async def list_category_tools(
    category_id: Annotated[str, Path(description="Category ID")],
    catalog: CatalogDep,
):
    """Tools in a category, highest rated first."""
    return Envelope(data=unwrap(await catalog.list_tools_by_category(category_id)))

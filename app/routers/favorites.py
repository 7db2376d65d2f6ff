# =============================================================================
# app/routers/favorites.py - Favorite Endpoints
# =============================================================================
# Favorites of the authenticated user.
#
#   GET    /favorites                -> favorited tools
#   GET    /favorites?toolId=...     -> whether that tool is favorited
#   POST   /favorites   {"toolId"}   -> add (idempotent)
#   DELETE /favorites   {"toolId"}   -> remove
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Query

from app.dependencies import FavoritesDep
from app.exceptions import unwrap
from app.schemas import Envelope
from core.models.favorite import FavoriteRequest

router = APIRouter()


@router.get("", response_model=Envelope)
async def get_favorites(
    favorites: FavoritesDep,
    tool_id: Annotated[
        str | None,
        Query(alias="toolId", description="Check a single tool instead of listing"),
    ] = None,
):
    """
    List favorited tools, or check one tool when `toolId` is given.
    """
    if tool_id:
        return Envelope(data=unwrap(await favorites.is_favorited(tool_id)))
    return Envelope(data=unwrap(await favorites.list_favorite_tools()))


@router.post("", response_model=Envelope[bool])
async def add_favorite(request: FavoriteRequest, favorites: FavoritesDep):
    """Favorite a tool. Favoriting an already favorited tool succeeds."""
    return Envelope(data=unwrap(await favorites.add_favorite(request.tool_id)))


@router.delete("", response_model=Envelope[bool])
async def remove_favorite(request: FavoriteRequest, favorites: FavoritesDep):
    """Remove a tool from favorites."""
    return Envelope(data=unwrap(await favorites.remove_favorite(request.tool_id)))

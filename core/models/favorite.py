# =============================================================================
# core/models/favorite.py - Favorite Schemas
# =============================================================================
# A favorite is a (user, tool) bookmark. The database enforces that a
# user favorites a given tool at most once.
# =============================================================================

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field

from .tool import Tool


class Favorite(BaseModel):
    """
    A favorite join row, optionally embedding the tool it points at.

    `tool` is None when the referenced tool no longer exists.
    """

    id: str = Field(..., description="Favorite row identifier")

    user_id: str = Field(..., description="Owner of the bookmark")

    tool_id: str = Field(..., description="Bookmarked tool")

    tool: Tool | None = Field(default=None)

    created_at: datetime | None = Field(default=None)


class FavoriteRequest(BaseModel):
    """Body of POST/DELETE /favorites."""

    # The web client posts {"toolId": ...}
    tool_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("tool_id", "toolId"),
        description="Tool to (un)favorite"
    )

    model_config = {"str_strip_whitespace": True}

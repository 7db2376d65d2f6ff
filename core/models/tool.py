# =============================================================================
# core/models/tool.py - Tool Schemas
# =============================================================================
# These models define the contract for directory entries:
# - Tool: A tool row, optionally with its embedded category snapshot
# - ToolCreate: Input for the admin "new tool" form
# - ToolUpdate: Partial input for the admin "edit tool" form
# - ToolsPage: One window of a paginated tool listing
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from .category import Category

# Shown wherever a tool has no embedded category
UNCATEGORIZED = "Uncategorized"


class Tool(BaseModel):
    """
    An AI tool listed in the directory.

    Tool queries embed the related category as `category`, so the UI can
    show its name without a second round-trip.

    Example:
        {
            "id": "t1",
            "name": "ChatGPT",
            "description": "Conversational assistant",
            "category_id": "c1",
            "category": {"id": "c1", "name": "Chat", "icon": "💬"},
            "is_free": true,
            "rating": 4.8,
            "url": "https://chat.openai.com"
        }
    """

    id: str = Field(..., description="Tool identifier")

    name: str = Field(..., description="Display name")

    description: str = Field(default="", description="Short description")

    logo: str | None = Field(
        default=None,
        description="Logo URL or storage path"
    )

    category_id: str | None = Field(
        default=None,
        description="Foreign key to categories.id"
    )

    # Snapshot of the related row, present when the query embeds it
    category: Category | None = Field(
        default=None,
        description="Embedded category snapshot"
    )

    is_free: bool = Field(default=False, description="Free to use")

    rating: float = Field(
        default=0.0,
        ge=0.0,
        le=5.0,
        description="Average rating from 0.0 to 5.0"
    )

    url: str = Field(default="", description="Destination URL")

    tags: list[str] | None = Field(default=None)

    created_at: datetime | None = Field(default=None)

    updated_at: datetime | None = Field(default=None)

    @property
    def category_name(self) -> str:
        """Embedded category name, or "Uncategorized"."""
        return self.category.name if self.category else UNCATEGORIZED

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match on name or description."""
        needle = term.lower()
        return needle in self.name.lower() or needle in self.description.lower()


class ToolCreate(BaseModel):
    """
    Schema for creating a tool from the admin panel.

    name, description, category_id and url are required and may not be
    blank; validation happens before anything is sent to the database.
    """

    name: str = Field(..., min_length=1, max_length=200)

    description: str = Field(..., min_length=1, max_length=2000)

    logo: str | None = Field(default=None)

    category_id: str = Field(..., min_length=1)

    is_free: bool = Field(default=False)

    rating: float = Field(default=0.0, ge=0.0, le=5.0)

    url: str = Field(..., min_length=1, max_length=2048)

    tags: list[str] | None = Field(default=None)

    model_config = {"str_strip_whitespace": True}


class ToolUpdate(BaseModel):
    """
    Schema for a partial tool update.

    Unset fields are left untouched. Fields that are set must not be blank.
    """

    name: str | None = Field(default=None, min_length=1, max_length=200)

    description: str | None = Field(default=None, min_length=1, max_length=2000)

    logo: str | None = Field(default=None)

    category_id: str | None = Field(default=None, min_length=1)

    is_free: bool | None = Field(default=None)

    rating: float | None = Field(default=None, ge=0.0, le=5.0)

    url: str | None = Field(default=None, min_length=1, max_length=2048)

    tags: list[str] | None = Field(default=None)

    model_config = {"str_strip_whitespace": True}

    @model_validator(mode="after")
    def _required_not_null(self) -> "ToolUpdate":
        nulled = [
            name for name in ("name", "description", "category_id", "url")
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulled:
            raise ValueError(f"Required field(s) cannot be null: {', '.join(nulled)}")
        return self


class ToolsPage(BaseModel):
    """
    One window of the paginated tool listing.

    `total` is the exact row count reported by the database. Whether more
    pages exist is decided from the page length alone: a page shorter than
    `limit` is the last one.

    Example:
        {"items": [...20 tools...], "total": 45, "page": 1, "limit": 20}
    """

    items: list[Tool] = Field(default_factory=list)

    total: int = Field(default=0, ge=0)

    page: int = Field(default=1, ge=1)

    limit: int = Field(default=20, ge=1)

    @property
    def is_last(self) -> bool:
        return len(self.items) < self.limit

# =============================================================================
# core/models/category.py - Category Schemas
# =============================================================================
# These models define the contract for tool categories:
# - Category: A category row as returned by the database
# - CategoryCreate: Input for the admin "new category" form
# - CategoryUpdate: Partial input for the admin "edit category" form
#
# Every tool belongs to exactly one category (nullable in the database,
# shown as "Uncategorized" when missing).
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, Field, model_validator


class Category(BaseModel):
    """
    A tool category.

    The compact listing only selects id, name and icon, so everything
    else is optional.

    Example:
        {
            "id": "c1",
            "name": "Writing",
            "description": "Copywriting and editing assistants",
            "icon": "✍️"
        }
    """

    id: str = Field(..., description="Category identifier")

    name: str = Field(..., description="Display name")

    description: str | None = Field(
        default=None,
        description="Optional longer description"
    )

    # Emoji or short glyph shown next to the name
    icon: str | None = Field(
        default=None,
        description="Optional icon glyph"
    )

    created_at: datetime | None = Field(
        default=None,
        description="Timestamp when the category was created"
    )

    updated_at: datetime | None = Field(
        default=None,
        description="Timestamp of the last admin edit"
    )


class CategoryCreate(BaseModel):
    """Schema for creating a category from the admin panel."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Display name (required)"
    )

    description: str | None = Field(default=None, max_length=500)

    icon: str | None = Field(default=None, max_length=16)

    model_config = {"str_strip_whitespace": True}


class CategoryUpdate(BaseModel):
    """
    Schema for a partial category update.

    Only the fields that are set are sent to the database.
    """

    name: str | None = Field(default=None, min_length=1, max_length=100)

    description: str | None = Field(default=None, max_length=500)

    icon: str | None = Field(default=None, max_length=16)

    model_config = {"str_strip_whitespace": True}

    @model_validator(mode="after")
    def _name_not_null(self) -> "CategoryUpdate":
        if "name" in self.model_fields_set and self.name is None:
            raise ValueError("Required field(s) cannot be null: name")
        return self

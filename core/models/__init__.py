# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - category.py: Category row and admin inputs
# - tool.py: Tool row, admin inputs and the paginated envelope
# - favorite.py: Favorite join row and request body
# - response.py: ApiResponse outcome, error codes and dashboard stats
#
# These models define the "contract" between services and clients.
# =============================================================================

from .category import Category, CategoryCreate, CategoryUpdate
from .favorite import Favorite, FavoriteRequest
from .response import ApiResponse, DirectoryStats, ErrorCode
from .tool import UNCATEGORIZED, Tool, ToolCreate, ToolsPage, ToolUpdate

__all__ = [
    # Category
    "Category",
    "CategoryCreate",
    "CategoryUpdate",
    # Tool
    "Tool",
    "ToolCreate",
    "ToolUpdate",
    "ToolsPage",
    "UNCATEGORIZED",
    # Favorite
    "Favorite",
    "FavoriteRequest",
    # Outcomes
    "ApiResponse",
    "DirectoryStats",
    "ErrorCode",
]

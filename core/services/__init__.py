# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .admin_service import AdminService
from .base import DirectoryService
from .catalog_service import CatalogService
from .favorite_service import FavoriteService

__all__ = [
    "AdminService",
    "CatalogService",
    "DirectoryService",
    "FavoriteService",
]

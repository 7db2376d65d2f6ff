# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# The response cache lives on `app.state` (created in the lifespan handler)
# so its lifetime is tied to the process and tests get a fresh one per app.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.auth import AuthUser, get_current_user
from core.services import AdminService, CatalogService, FavoriteService
from lib.cache import ResponseCache
from lib.query import QueryRunner
from lib.supabase_client import SupabaseClient


def get_query_runner() -> QueryRunner:
    """
    Get the QueryRunner used by every service.

    Returns the Supabase singleton wrapper; tests override this.
    """
    return SupabaseClient


def get_response_cache(request: Request) -> ResponseCache:
    """Get the process-wide response cache created at startup."""
    return request.app.state.response_cache


def get_catalog_service(
    runner: Annotated[QueryRunner, Depends(get_query_runner)],
    cache: Annotated[ResponseCache, Depends(get_response_cache)],
) -> CatalogService:
    return CatalogService(runner=runner, cache=cache)


def get_admin_service(
    runner: Annotated[QueryRunner, Depends(get_query_runner)],
) -> AdminService:
    return AdminService(runner=runner)


def get_favorite_service(
    runner: Annotated[QueryRunner, Depends(get_query_runner)],
    user: Annotated[AuthUser, Depends(get_current_user)],
) -> FavoriteService:
    """Favorites scoped to the authenticated user."""
    return FavoriteService(user_id=user.id, runner=runner)


# Type aliases for dependency injection
CatalogDep = Annotated[CatalogService, Depends(get_catalog_service)]
AdminDep = Annotated[AdminService, Depends(get_admin_service)]
FavoritesDep = Annotated[FavoriteService, Depends(get_favorite_service)]

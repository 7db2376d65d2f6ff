# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - query.py: Transport-neutral query shape (QuerySpec / QueryResult)
# - supabase_client.py: Supabase-backed QueryRunner
# - cache.py: TTL response cache
# - utils.py: Shared utilities (error classes, validation, UUID normalization)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.cache import ResponseCache, cache_key
from lib.query import QueryResult, QueryRunner, QuerySpec
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import ApplicationError, RequiredFieldError, normalize_uuid

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Queries
    "QueryResult",
    "QueryRunner",
    "QuerySpec",
    # Cache
    "ResponseCache",
    "cache_key",
    # Utils
    "ApplicationError",
    "RequiredFieldError",
    "normalize_uuid",
]

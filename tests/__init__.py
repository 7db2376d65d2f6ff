# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the AI Tools Directory:
# - conftest.py: Environment setup, InMemoryRunner and seeded data
# - test_models.py: Unit tests for Pydantic model validation
# - test_cache.py / test_requests.py / test_supabase_client.py: lib layer
# - test_*_service.py: Services against the in-memory runner
# - test_listing.py / test_directory.py: Infinite scroll and home feed
# - test_api.py: Integration tests for API endpoints
#
# Run tests with: poetry run pytest
# =============================================================================

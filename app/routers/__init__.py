# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - tools.py: Tool listing, search and details
# - categories.py: Category listing and per-category tools
# - stats.py: Dashboard totals
# - favorites.py: Favorites of the signed-in user
# - admin.py: Tool and category management
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import tools
from . import categories
from . import stats
from . import favorites
from . import admin

__all__ = [
    "health",
    "tools",
    "categories",
    "stats",
    "favorites",
    "admin",
]

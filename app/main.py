# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the AI Tools Directory API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    DirectoryException,
    directory_exception_handler,
    validation_exception_handler,
)
from app.routers import admin, categories, favorites, health, stats, tools
from app.auth import routes as auth_routes
from lib.cache import ResponseCache

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Create the shared response cache
    - Shutdown: Drop it
    """
    # Startup
    logger.info(f"Starting AI Tools Directory API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    app.state.response_cache = ResponseCache(ttl_seconds=settings.CACHE_TTL_SECONDS)
    logger.info(f"Response cache TTL: {settings.CACHE_TTL_SECONDS}s")

    yield

    # Shutdown
    logger.info("Shutting down AI Tools Directory API")
    app.state.response_cache = None


# Create FastAPI application
app = FastAPI(
    title="AI Tools Directory API",
    description="""
## Browse, search and curate AI tools

Tools and categories live in Supabase; this API reads them (with a short
response cache), manages favorites for signed-in users and exposes admin
CRUD for the catalog.

### Response Format

Every endpoint returns the same envelope:

```json
{"success": true, "data": {...}, "error": null}
```

Failures set `success` to false, `data` to null and carry an `error` message
and machine-readable `code`.

### Quick Start

```bash
# First page of tools
curl "http://localhost:8000/api/v1/tools?page=1&limit=20"

# Search
curl "http://localhost:8000/api/v1/tools/search?q=image"

# Favorite a tool
curl -X POST http://localhost:8000/api/v1/favorites \\
  -H "Authorization: Bearer $TOKEN" \\
  -H "Content-Type: application/json" \\
  -d '{"toolId": "..."}'
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Authentication endpoints for verifying JWT tokens",
        },
        {
            "name": "Tools",
            "description": "List, search and inspect tools",
        },
        {
            "name": "Categories",
            "description": "Categories and the tools in them",
        },
        {
            "name": "Stats",
            "description": "Dashboard totals",
        },
        {
            "name": "Favorites",
            "description": "Favorites of the signed-in user",
        },
        {
            "name": "Admin",
            "description": "Create, update and delete tools and categories",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(DirectoryException)
async def handle_directory_exception(request: Request, exc: DirectoryException):
    """Handle directory exceptions raised by route handlers."""
    return await directory_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Handle malformed query parameters and request bodies."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "data": None,
            "error": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Tool endpoints
app.include_router(
    tools.router,
    prefix="/api/v1/tools",
    tags=["Tools"]
)

# Category endpoints
app.include_router(
    categories.router,
    prefix="/api/v1/categories",
    tags=["Categories"]
)

# Stats endpoint
app.include_router(
    stats.router,
    prefix="/api/v1",
    tags=["Stats"]
)

# Favorites endpoints
app.include_router(
    favorites.router,
    prefix="/api/v1/favorites",
    tags=["Favorites"]
)

# Admin endpoints
app.include_router(
    admin.router,
    prefix="/api/v1/admin",
    tags=["Admin"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "AI Tools Directory API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }

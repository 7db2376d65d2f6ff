# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Supports both:
# - ES256 (new Supabase JWT signing keys) via JWKS
# - HS256 (legacy Supabase JWT secret) as fallback, only when the secret is set
#
# The authenticated user's id scopes favorites and gates the admin routes.
# There are no roles: any signed-in user may call the admin endpoints,
# row level security in Supabase decides what actually succeeds.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Any
from uuid import UUID

import httpx
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from app.auth.models import AuthUser
from app.config import settings
from app.exceptions import AuthenticationError
from lib.cache import ResponseCache

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; a missing header is reported by get_current_user
security = HTTPBearer(auto_error=False)

JWKS_CACHE_TTL = 3600  # 1 hour
JWKS_CACHE_KEY = "jwks"

_jwks_cache = ResponseCache(ttl_seconds=JWKS_CACHE_TTL)
# Last successfully fetched key set, served when a refresh fails
_last_jwks: dict[str, Any] = {}


def _get_jwks_url() -> str:
    """Get the JWKS URL from Supabase URL."""
    # Format: https://<project-ref>.supabase.co
    supabase_url = settings.SUPABASE_URL.rstrip('/')
    return f"{supabase_url}/auth/v1/.well-known/jwks.json"


async def _fetch_jwks() -> dict[str, Any]:
    """Fetch JWKS from Supabase with caching."""
    global _last_jwks

    cached = _jwks_cache.get(JWKS_CACHE_KEY)
    if cached is not None:
        return cached

    jwks_url = _get_jwks_url()
    try:
        async with httpx.AsyncClient(timeout=10) as client:
            response = await client.get(jwks_url)
            response.raise_for_status()
            jwks = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Return the stale key set as fallback
        return _last_jwks or {"keys": []}

    _jwks_cache.set(JWKS_CACHE_KEY, jwks)
    _last_jwks = jwks
    logger.debug(f"Fetched JWKS from {jwks_url}")
    return jwks


def _legacy_secret() -> tuple[str, str]:
    """HS256 key pair, refused outright when no secret is configured."""
    if not settings.SUPABASE_JWT_SECRET:
        logger.warning("Rejected HS256 token: SUPABASE_JWT_SECRET is not set")
        raise AuthenticationError("Invalid token: HS256 tokens are not accepted")
    return settings.SUPABASE_JWT_SECRET, "HS256"


async def _get_signing_key(token: str) -> tuple[Any, str]:
    """
    Get the appropriate signing key for a token.

    Returns:
        Tuple of (key, algorithm) to use for verification

    Raises:
        AuthenticationError: If the token needs the HS256 secret and none is set
    """
    # Decode header without verification to get algorithm and key ID
    try:
        unverified_header = jwt.get_unverified_header(token)
    except JWTError:
        # Fall back to HS256 if we can't read the header
        return _legacy_secret()

    alg = unverified_header.get("alg", "HS256")
    kid = unverified_header.get("kid")

    # If HS256, use the legacy secret
    if alg == "HS256":
        return _legacy_secret()

    # For ES256 or other algorithms, use JWKS
    if kid:
        jwks = await _fetch_jwks()
        for key in jwks.get("keys", []):
            if key.get("kid") == kid:
                return key, alg

    # Fallback to HS256
    logger.warning(f"Could not find key for alg={alg}, kid={kid}, falling back to HS256")
    return _legacy_secret()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security)
) -> AuthUser:
    """
    Extract and validate user from Supabase JWT token.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies the JWT signature (supports ES256 and HS256)
    3. Validates the token hasn't expired
    4. Returns an AuthUser with the user's ID and email

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        AuthUser: The authenticated user

    Raises:
        AuthenticationError: 401 if the token is missing, invalid or expired
    """
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    token = credentials.credentials

    try:
        signing_key, algorithm = await _get_signing_key(token)

        payload = jwt.decode(
            token,
            signing_key,
            algorithms=[algorithm],
            audience="authenticated"
        )
    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise AuthenticationError("Token has expired")
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise AuthenticationError(f"Invalid token: {str(e)}")

    user_id = payload.get("sub")
    if not user_id:
        logger.warning("JWT token missing 'sub' claim")
        raise AuthenticationError("Invalid token: missing user ID")

    try:
        user_uuid = UUID(user_id)
    except ValueError:
        logger.warning(f"Invalid UUID in token: {user_id}")
        raise AuthenticationError("Invalid token: malformed user ID")

    logger.debug(f"Authenticated user: {user_id}")
    return AuthUser(id=user_uuid, email=payload.get("email"))

# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for authentication-related operations.
#
# Note: Actual signup/login is handled by Supabase Auth client-side.
# These routes only report what the bearer token says.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser

router = APIRouter()


@router.get("/me", response_model=AuthUser)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> AuthUser:
    """
    Get the identity carried by the current token.

    Raises:
        401: If not authenticated
    """
    return user


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }

# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Sign-up and login happen client-side against Supabase Auth.
# This router only lets a client check that its stored token still works.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser

router = APIRouter()


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email,
    }

# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase Auth JWT.

    Only identity is needed; song records are not owned per user.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None
    role: Optional[str] = None

# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Verifies Supabase Auth access tokens sent as "Authorization: Bearer <jwt>".
#
# Supports both:
# - asymmetric Supabase signing keys (ES256/RS256) looked up via JWKS
# - HS256 with the legacy project JWT secret
# =============================================================================

import logging
import time
from uuid import UUID

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JOSEError, JWTError, jwt

from app.auth.models import AuthUser
from app.config import settings

logger = logging.getLogger(__name__)

security = HTTPBearer()

TOKEN_AUDIENCE = "authenticated"

# Cache for JWKS keys
_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour


def _get_jwks_url() -> str:
    """JWKS endpoint of the Supabase Auth server."""
    return f"{settings.SUPABASE_URL.rstrip('/')}/auth/v1/.well-known/jwks.json"


def _fetch_jwks() -> dict:
    """Fetch JWKS from Supabase, reusing the last copy for an hour."""
    global _jwks_cache, _jwks_cache_time

    now = time.time()
    if _jwks_cache and (now - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        response = httpx.get(_get_jwks_url(), timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = now
        return _jwks_cache
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Stale keys beat no keys
        return _jwks_cache or {"keys": []}


def _get_signing_key(token: str) -> tuple[str | dict, str]:
    """
    Pick the key and algorithm to verify a token with.

    Returns:
        Tuple of (key, algorithm)
    """
    try:
        header = jwt.get_unverified_header(token)
    except JWTError:
        return settings.SUPABASE_JWT_SECRET, "HS256"

    alg = header.get("alg", "HS256")
    kid = header.get("kid")

    if alg == "HS256" or not kid:
        return settings.SUPABASE_JWT_SECRET, "HS256"

    for key in _fetch_jwks().get("keys", []):
        if key.get("kid") == kid:
            return key, alg

    logger.warning(f"No JWKS key for alg={alg}, kid={kid}, falling back to HS256")
    return settings.SUPABASE_JWT_SECRET, "HS256"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> AuthUser:
    """
    Extract and validate the user from a Supabase JWT.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    token = credentials.credentials

    try:
        signing_key, algorithm = _get_signing_key(token)
        if algorithm == "HS256" and not signing_key:
            logger.error("SUPABASE_JWT_SECRET is not set; cannot verify HS256 tokens")
            raise _unauthorized("Token verification is not configured")
        payload = jwt.decode(
            token,
            signing_key,
            algorithms=[algorithm],
            audience=TOKEN_AUDIENCE,
        )
    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise _unauthorized("Token has expired")
    except JOSEError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise _unauthorized(f"Invalid token: {e}")

    user_id = payload.get("sub")
    if not user_id:
        logger.warning("JWT token missing 'sub' claim")
        raise _unauthorized("Invalid token: missing user ID")

    try:
        user_uuid = UUID(user_id)
    except ValueError:
        logger.warning(f"Invalid UUID in token: {user_id}")
        raise _unauthorized("Invalid token: malformed user ID")

    logger.debug(f"Authenticated user: {user_id}")
    return AuthUser(id=user_uuid, email=payload.get("email"), role=payload.get("role"))

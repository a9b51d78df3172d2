# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import datetime, timezone
from uuid import uuid4


# =============================================================================
# Identifier Utilities
# =============================================================================

def generate_song_id() -> str:
    """
    Generate a new external identifier for a song.

    Uses a random (version 4) UUID drawn from the OS entropy source, so
    collisions across calls and processes are not a practical concern.

    Returns:
        String form of the UUID, e.g. "550e8400-e29b-41d4-a716-446655440000"
    """
    return str(uuid4())


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)

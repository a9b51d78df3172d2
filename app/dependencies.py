# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from core.services.song_repository import SongRepository


def get_song_repository(request: Request) -> SongRepository:
    """
    Get the song repository built at startup.

    The repository lives on app.state so tests can swap it through
    app.dependency_overrides without touching Supabase.
    """
    return request.app.state.song_repository


# Type alias for dependency injection
SongRepositoryDep = Annotated[SongRepository, Depends(get_song_repository)]

# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - song.py: Song record, create and partial-update schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .song import (
    IMMUTABLE_FIELDS,
    SONG_COLUMNS,
    Song,
    SongFields,
    SongInput,
    SongUpdate,
)

__all__ = [
    "IMMUTABLE_FIELDS",
    "SONG_COLUMNS",
    "Song",
    "SongFields",
    "SongInput",
    "SongUpdate",
]

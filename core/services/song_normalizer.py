# =============================================================================
# core/services/song_normalizer.py - Form Data -> Song Record
# =============================================================================
# Maps a client-submitted form object into the complete record shape.
#
# Create mode: the caller supplies the new Id and CreatedAt, missing
# optional fields stay None.
# Edit mode: the current record is the starting point and only the fields
# the client actually sent are applied on top. Id and CreatedAt always
# come from the current record.
# =============================================================================

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from core.models.song import IMMUTABLE_FIELDS, Song, SongUpdate


def _extract_changes(update: BaseModel | Mapping[str, Any]) -> dict[str, Any]:
    """Return only the fields explicitly present in the update."""
    if isinstance(update, Mapping):
        update = SongUpdate.model_validate(dict(update))

    changes = update.model_dump(exclude_unset=True)
    for field in IMMUTABLE_FIELDS:
        changes.pop(field, None)
    return changes


def normalize_song_data(
    update: BaseModel | Mapping[str, Any],
    current: Song | None = None,
    *,
    song_id: str | None = None,
    created_at: datetime | None = None,
) -> Song:
    """
    Build a complete Song from a partial update.

    Args:
        update: SongInput, SongUpdate, or a raw mapping of PascalCase fields
        current: The stored record when editing, None when creating
        song_id: New identifier (create mode only)
        created_at: Creation timestamp (create mode only)

    Returns:
        The record to persist

    Raises:
        ValueError: If creating without song_id or created_at
        pydantic.ValidationError: If a raw mapping holds invalid values

    Example:
        edited = normalize_song_data({"Chords": "G C D"}, current=song)
        assert edited.id == song.id and edited.title == song.title
    """
    changes = _extract_changes(update)

    if current is None:
        if not song_id or created_at is None:
            raise ValueError("Creating a song requires song_id and created_at")
        return Song(id=song_id, created_at=created_at, **changes)

    merged = current.model_dump()
    merged.update(changes)
    merged["id"] = current.id
    merged["created_at"] = current.created_at
    return Song(**merged)

# =============================================================================
# core/models/song.py - Song Schemas
# =============================================================================
# These models define the contract for song records:
# - SongInput: a validated create request (Title required)
# - SongUpdate: a validated partial update (every field optional)
# - Song: a complete persisted record, including Id and CreatedAt
#
# The API speaks PascalCase (Title, SongKey, ...). Python code uses
# snake_case attributes, and the datastore keeps the column names the
# songs table was created with (songKey, audioFiles, ...).
# =============================================================================

from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


# Python attribute -> datastore column
SONG_COLUMNS: dict[str, str] = {
    "id": "id",
    "title": "title",
    "author": "author",
    "level": "level",
    "song_key": "songKey",
    "chords": "chords",
    "audio_files": "audioFiles",
    "ultimate_guitar_link": "ultimateGuitarLink",
    "short_title": "shortTitle",
    "created_at": "createdAt",
}

# Fields that are assigned once at creation and never edited
IMMUTABLE_FIELDS = ("id", "created_at")


def _require_title(value: str | None) -> str:
    if value is None or not value.strip():
        raise ValueError("Title must be a non-empty string")
    return value


class SongFields(BaseModel):
    """Optional descriptive fields shared by every song schema."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    author: str | None = Field(default=None, alias="Author", description="Song author or artist")
    level: str | None = Field(default=None, alias="Level", description="Difficulty level")
    song_key: str | None = Field(default=None, alias="SongKey", description="Musical key, e.g. 'G'")
    chords: str | None = Field(default=None, alias="Chords", description="Chord chart text")
    audio_files: str | None = Field(default=None, alias="AudioFiles", description="Links to audio recordings")
    ultimate_guitar_link: str | None = Field(
        default=None,
        alias="UltimateGuitarLink",
        description="Link to the tab on Ultimate Guitar"
    )
    short_title: str | None = Field(default=None, alias="ShortTitle", description="Abbreviated title")


class SongInput(SongFields):
    """
    Schema for creating a song.

    Example:
        {
            "Title": "Amazing Grace",
            "Author": "John Newton",
            "SongKey": "G"
        }
    """

    title: Annotated[str, AfterValidator(_require_title)] = Field(
        ...,
        alias="Title",
        description="Song title (required, non-empty)"
    )


class SongUpdate(SongFields):
    """
    Schema for a partial edit.

    Only the fields the client actually sent are applied, so callers
    should read it with `model_dump(exclude_unset=True)`. Id and CreatedAt
    are not part of this schema and are dropped if sent.
    """

    title: Annotated[str | None, AfterValidator(_require_title)] = Field(
        default=None,
        alias="Title",
        description="New title (non-empty if sent)"
    )


class Song(SongFields):
    """
    A complete song record as stored.

    Example:
        {
            "Id": "550e8400-e29b-41d4-a716-446655440000",
            "Title": "Amazing Grace",
            "Author": null,
            "CreatedAt": "2024-01-15T10:30:00Z"
        }
    """

    id: str = Field(..., alias="Id", min_length=1, description="Unique song identifier")
    title: str = Field(..., alias="Title", description="Song title")
    created_at: datetime = Field(..., alias="CreatedAt", description="When the song was created")

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Song":
        """Build a Song from a datastore row keyed by column name."""
        return cls(**{
            attr: row.get(column)
            for attr, column in SONG_COLUMNS.items()
        })

    def to_row(self) -> dict[str, Any]:
        """Serialize to a datastore row keyed by column name."""
        data = self.model_dump(mode="json")
        return {column: data[attr] for attr, column in SONG_COLUMNS.items()}

    def to_api(self) -> dict[str, Any]:
        """Serialize to the PascalCase shape the API returns."""
        return self.model_dump(mode="json", by_alias=True)

# =============================================================================
# core/services/song_repository.py - Song Datastore Access
# =============================================================================
# Create/read/update operations against the Supabase songs table.
#
# The repository is built from an explicit SupabaseConfig. The underlying
# client is created on first use, so constructing a repository never
# touches the network.
#
# Lookups return None when nothing matches. Anything the datastore itself
# rejects (network failure, bad credentials, constraint violation) raises
# SongRepositoryError instead.
# A stored row that does not form a valid song (null title or createdAt)
# is reported as INVALID_SONG_ROW.
#
# Usage:
#   repository = SongRepository(settings.supabase_config())
#   song = repository.find_by_title("Amazing Grace")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError
from supabase import Client, create_client

from app.config import SupabaseConfig
from app.exceptions import SongRepositoryError
from core.models.song import SONG_COLUMNS, Song

logger = logging.getLogger(__name__)


class SongRepository:
    """
    Typed wrapper for song queries.

    Example:
        repository = SongRepository(config)
        song_id = repository.insert(song)
        stored = repository.find_by_id(song_id)
    """

    def __init__(self, config: SupabaseConfig, client: Client | None = None):
        self.config = config
        self._client = client

    @property
    def table_name(self) -> str:
        return self.config.songs_table

    def get_client(self) -> Client:
        """
        Get or create the Supabase client.

        Raises:
            SongRepositoryError: If client creation fails
        """
        if self._client is None:
            try:
                self._client = create_client(self.config.url, self.config.key)
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SongRepositoryError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY / SUPABASE_SERVICE_KEY",
                )
        return self._client

    def _table(self):
        return self.get_client().table(self.table_name)

    def _to_song(self, row: dict[str, Any]) -> Song:
        try:
            return Song.from_row(row)
        except ValidationError as e:
            raise SongRepositoryError(
                message=f"Stored song row is invalid: {e}",
                code="INVALID_SONG_ROW",
                suggestion="Fix or remove the row in the songs table",
                details={"id": row.get(SONG_COLUMNS["id"])},
            )

    def _find_one(self, column: str, value: str) -> Song | None:
        try:
            response = (
                self._table()
                .select("*")
                .eq(column, value)
                .order(SONG_COLUMNS["created_at"])
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise SongRepositoryError(
                message=f"Failed to fetch song by {column}: {e}",
                code="FETCH_SONG_FAILED",
                suggestion="Check that the songs table is reachable",
                details={column: value},
            )

        rows = response.data or []
        logger.debug(f"Lookup {column}={value!r} matched {len(rows)} row(s)")
        if not rows:
            return None
        return self._to_song(rows[0])

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def find_by_title(self, title: str) -> Song | None:
        """
        Fetch a song by its title.

        Titles are not enforced unique; the oldest match is returned.

        Returns:
            Song, or None if not found

        Raises:
            SongRepositoryError: If the query fails
        """
        return self._find_one(SONG_COLUMNS["title"], title)

    def find_by_id(self, song_id: str) -> Song | None:
        """
        Fetch a song by its identifier.

        Returns:
            Song, or None if not found

        Raises:
            SongRepositoryError: If the query fails
        """
        return self._find_one(SONG_COLUMNS["id"], song_id)

    def list_all(self) -> list[Song]:
        """Fetch every song, oldest first."""
        try:
            response = (
                self._table()
                .select("*")
                .order(SONG_COLUMNS["created_at"])
                .execute()
            )
        except Exception as e:
            raise SongRepositoryError(
                message=f"Failed to list songs: {e}",
                code="LIST_SONGS_FAILED",
                suggestion="Check that the songs table is reachable",
            )

        songs = [self._to_song(row) for row in response.data or []]
        logger.debug(f"Listed {len(songs)} songs")
        return songs

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def insert(self, song: Song) -> str:
        """
        Insert a new song.

        Returns:
            The persisted identifier

        Raises:
            SongRepositoryError: If the insert fails or returns nothing
        """
        row = song.to_row()

        try:
            response = self._table().insert(row).execute()
        except Exception as e:
            raise SongRepositoryError(
                message=f"Failed to insert song: {e}",
                code="INSERT_SONG_FAILED",
                suggestion="Check for constraint violations on the songs table",
                details={"id": song.id, "title": song.title},
            )

        if not response.data:
            raise SongRepositoryError(
                message="Insert returned no data",
                code="INSERT_SONG_FAILED",
                details={"id": song.id},
            )

        song_id = response.data[0].get(SONG_COLUMNS["id"], song.id)
        logger.info(f"Created song: {song_id} ({song.title!r})")
        return song_id

    def update(self, song_id: str, song: Song) -> Song | None:
        """
        Overwrite a stored song's editable fields.

        Id and CreatedAt are never written, so an update cannot change them.

        Returns:
            The stored record after the update, or None if no row matched

        Raises:
            SongRepositoryError: If the update fails
        """
        row: dict[str, Any] = song.to_row()
        row.pop(SONG_COLUMNS["id"])
        row.pop(SONG_COLUMNS["created_at"])

        try:
            response = (
                self._table()
                .update(row)
                .eq(SONG_COLUMNS["id"], song_id)
                .execute()
            )
        except Exception as e:
            raise SongRepositoryError(
                message=f"Failed to update song: {e}",
                code="UPDATE_SONG_FAILED",
                suggestion="Check for constraint violations on the songs table",
                details={"id": song_id},
            )

        if not response.data:
            logger.info(f"Update matched no song: {song_id}")
            return None

        logger.info(f"Updated song: {song_id}")
        return self._to_song(response.data[0])

    def ping(self) -> None:
        """
        Run the cheapest possible query to prove the table is reachable.

        Raises:
            SongRepositoryError: If the datastore cannot be queried
        """
        try:
            self._table().select(SONG_COLUMNS["id"]).limit(1).execute()
        except Exception as e:
            raise SongRepositoryError(
                message=f"Songs table unreachable: {e}",
                code="PING_FAILED",
            )

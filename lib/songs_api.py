# =============================================================================
# lib/songs_api.py - Songs API Client
# =============================================================================
# Async HTTP client for the /api/songs endpoints.
#
# Used by the page layer to fetch a song before presenting the edit form,
# and by SongFormController to submit creates and edits.
#
# Usage:
#   async with SongsApiClient(settings.API_BASE_URL, token=jwt) as api:
#       song = await api.get_song_by_title("Amazing Grace")
# =============================================================================

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from core.models.song import Song, SongUpdate

logger = logging.getLogger(__name__)

SONGS_PATH = "/api/songs"


class SongsApiError(Exception):
    """Non-success response from the songs API."""

    def __init__(
        self,
        message: str,
        status_code: int,
        code: str | None = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.message}"


class SongsApiClient:
    """
    Thin wrapper over httpx.AsyncClient speaking the songs API envelope.

    Every successful response looks like {"success": true, "data": ...};
    anything else is raised as SongsApiError.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(base_url=base_url, timeout=10.0)
        self._headers = headers

    @classmethod
    def from_settings(cls, token: str | None = None) -> "SongsApiClient":
        """Client for the API at settings.API_BASE_URL."""
        from app.config import settings

        return cls(settings.API_BASE_URL, token=token)

    async def __aenter__(self) -> "SongsApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        response = await self._http.request(method, url, headers=self._headers, **kwargs)

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.is_success and body.get("success"):
            return body.get("data")

        message = body.get("error") or response.reason_phrase or "Request failed"
        logger.warning(f"{method} {url} failed with {response.status_code}: {message}")
        raise SongsApiError(
            message=message,
            status_code=response.status_code,
            code=body.get("code"),
            details=body.get("details"),
        )

    async def _get_one(self, params: dict[str, str]) -> Song | None:
        try:
            data = await self._request("GET", SONGS_PATH, params=params)
        except SongsApiError as e:
            if e.status_code == 404:
                return None
            raise
        return Song.model_validate(data)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def list_songs(self) -> list[Song]:
        data = await self._request("GET", SONGS_PATH)
        return [Song.model_validate(item) for item in data or []]

    async def get_song_by_title(self, title: str) -> Song | None:
        """Fetch one song by title; None when the API answers 404."""
        return await self._get_one({"title": title})

    async def get_song_by_id(self, song_id: str) -> Song | None:
        """Fetch one song by id; None when the API answers 404."""
        return await self._get_one({"id": song_id})

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def create_song(self, data: dict[str, Any]) -> str:
        """
        Create a song from PascalCase form data.

        Returns:
            The new song's identifier
        """
        result = await self._request("POST", SONGS_PATH, json=data)
        return result["id"]

    async def update_song(self, song_id: str, changes: Mapping[str, Any]) -> Song:
        """
        Send a partial edit.

        Only the fields present in `changes` go over the wire, so the server
        merges them into its current record and leaves everything else alone.
        Id and CreatedAt are never sent.

        Raises:
            pydantic.ValidationError: If a changed field is invalid
        """
        body = SongUpdate.model_validate(dict(changes)).model_dump(
            mode="json",
            by_alias=True,
            exclude_unset=True,
        )
        result = await self._request("PATCH", f"{SONGS_PATH}/{song_id}", json=body)
        return Song.model_validate(result)


async def load_song_for_edit(api: SongsApiClient, title: str) -> Song | None:
    """
    Fetch the song an edit page is about to render.

    Returns:
        The song, or None so the page can show "Song not found"
    """
    song = await api.get_song_by_title(title)
    if song is None:
        logger.info(f"Edit page requested for unknown song: {title!r}")
    return song

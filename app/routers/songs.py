# =============================================================================
# app/routers/songs.py - Song Endpoints
# =============================================================================
# GET    /api/songs             list, or one song via ?title= / ?id=
# GET    /api/songs/{song_id}   one song by id
# POST   /api/songs             create (JSON); file import is not implemented
# PATCH  /api/songs/{song_id}   merge a partial update into a song
#
# Reads are public. Writes require a Supabase Auth bearer token.
# Every success response is {"success": true, "data": ...}.
# =============================================================================

import json
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, Query, Request, status

from app.auth import AuthUser, get_current_user
from app.dependencies import SongRepositoryDep
from app.exceptions import (
    BulkImportNotImplementedError,
    SongNotFoundError,
    SongValidationError,
    UnsupportedMediaTypeError,
)
from core.services.song_normalizer import normalize_song_data
from core.services.song_validation import validate_song_input, validate_song_update
from lib.utils import generate_song_id, utc_now

logger = logging.getLogger(__name__)

router = APIRouter()

JSON_CONTENT_TYPE = "application/json"
MULTIPART_CONTENT_TYPE = "multipart/form-data"


# =============================================================================
# Helper Functions
# =============================================================================

def _check_content_type(request: Request) -> None:
    """
    Accept JSON bodies only.

    A missing content type is treated as JSON. Multipart uploads are the
    unimplemented bulk import and get 501; anything else gets 415.
    """
    content_type = request.headers.get("content-type", "").lower()

    if MULTIPART_CONTENT_TYPE in content_type:
        raise BulkImportNotImplementedError()
    if content_type and JSON_CONTENT_TYPE not in content_type:
        raise UnsupportedMediaTypeError(content_type)


async def _read_json_body(request: Request) -> Any:
    """
    Decode the request body as JSON.

    An empty body decodes to {} so it fails validation on its fields
    (Title) rather than on syntax.
    """
    raw = await request.body()
    if not raw.strip():
        return {}

    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SongValidationError([
            {"field": "body", "message": f"Invalid JSON: {e}", "type": "json_invalid"},
        ])


def _success(data: Any) -> dict[str, Any]:
    return {"success": True, "data": data}


# =============================================================================
# Endpoints
# =============================================================================

@router.get("")
async def get_songs(
    repository: SongRepositoryDep,
    title: Annotated[str | None, Query(description="Fetch the song with this title")] = None,
    song_id: Annotated[str | None, Query(alias="id", description="Fetch the song with this id")] = None,
):
    """
    Fetch all songs, or one song by title or id.

    Title takes precedence when both are given. A lookup that matches
    nothing returns 404.
    """
    if title:
        song = repository.find_by_title(title)
        if song is None:
            raise SongNotFoundError("title", title)
        return _success(song.to_api())

    if song_id:
        song = repository.find_by_id(song_id)
        if song is None:
            raise SongNotFoundError("id", song_id)
        return _success(song.to_api())

    songs = repository.list_all()
    return _success([song.to_api() for song in songs])


@router.get("/{song_id}")
async def get_song(
    song_id: Annotated[str, Path(description="Song identifier")],
    repository: SongRepositoryDep,
):
    """Fetch one song by id."""
    song = repository.find_by_id(song_id)
    if song is None:
        raise SongNotFoundError("id", song_id)
    return _success(song.to_api())


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_song(
    request: Request,
    repository: SongRepositoryDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Add a new song.

    Request body (application/json), PascalCase fields:
    - Title: string (required)
    - Author, Level, SongKey, Chords, AudioFiles,
      UltimateGuitarLink, ShortTitle: string (optional)

    Id and CreatedAt are assigned here; values sent by the client are ignored.
    Returns {"success": true, "data": {"id": ...}}.
    """
    _check_content_type(request)
    payload = await _read_json_body(request)
    song_input = validate_song_input(payload)

    song = normalize_song_data(
        song_input,
        song_id=generate_song_id(),
        created_at=utc_now(),
    )
    persisted_id = repository.insert(song)

    logger.info(f"User {user.id} created song {persisted_id}")
    return _success({"id": persisted_id})


@router.patch("/{song_id}")
async def update_song(
    song_id: Annotated[str, Path(description="Song identifier")],
    request: Request,
    repository: SongRepositoryDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Merge a partial update into an existing song.

    Only fields present in the body change. Id and CreatedAt always keep
    their stored values. Returns the full record after the edit.
    """
    _check_content_type(request)
    payload = await _read_json_body(request)
    changes = validate_song_update(payload)

    current = repository.find_by_id(song_id)
    if current is None:
        raise SongNotFoundError("id", song_id)

    merged = normalize_song_data(changes, current)
    saved = repository.update(song_id, merged)
    if saved is None:
        raise SongNotFoundError("id", song_id)

    logger.info(f"User {user.id} updated song {song_id}")
    return _success(saved.to_api())

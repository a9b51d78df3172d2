# =============================================================================
# tests/test_songs_client.py - Songs API Client Tests
# =============================================================================
# SongsApiClient is driven against httpx.MockTransport handlers, so each
# test controls exactly what the "server" answers.
# =============================================================================

import asyncio
import json

import httpx
import pytest

from lib.songs_api import SongsApiClient, SongsApiError, load_song_for_edit


BASE_URL = "http://songbook.test"


def make_api(handler, token="test-token"):
    http_client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return SongsApiClient(BASE_URL, token=token, http_client=http_client)


def run(coro):
    return asyncio.run(coro)


class TestReads:

    def test_get_by_title(self, existing_song):
        seen = {}

        def handler(request):
            seen["params"] = dict(request.url.params)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"success": True, "data": existing_song.to_api()})

        song = run(make_api(handler).get_song_by_title("Wagon Wheel"))

        assert song == existing_song
        assert seen["params"] == {"title": "Wagon Wheel"}
        assert seen["auth"] == "Bearer test-token"

    def test_get_by_id_not_found(self):
        def handler(request):
            return httpx.Response(404, json={"success": False, "error": "Song not found: x", "code": "SONG_NOT_FOUND"})

        assert run(make_api(handler).get_song_by_id("x")) is None

    def test_server_error_raises(self):
        def handler(request):
            return httpx.Response(500, json={"success": False, "error": "Internal server error"})

        with pytest.raises(SongsApiError) as exc_info:
            run(make_api(handler).get_song_by_title("Wagon Wheel"))

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Internal server error"

    def test_non_json_error_body(self):
        def handler(request):
            return httpx.Response(502, text="Bad Gateway")

        with pytest.raises(SongsApiError) as exc_info:
            run(make_api(handler).list_songs())

        assert exc_info.value.status_code == 502

    def test_list_songs(self, existing_song):
        def handler(request):
            return httpx.Response(200, json={"success": True, "data": [existing_song.to_api()]})

        assert run(make_api(handler).list_songs()) == [existing_song]

    def test_load_song_for_edit_missing(self):
        def handler(request):
            return httpx.Response(404, json={"success": False, "error": "Song not found: Nope"})

        assert run(load_song_for_edit(make_api(handler), "Nope")) is None


class TestWrites:

    def test_create_song(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={"success": True, "data": {"id": "new-id"}})

        song_id = run(make_api(handler).create_song({"Title": "Amazing Grace"}))

        assert song_id == "new-id"
        assert seen == {"method": "POST", "body": {"Title": "Amazing Grace"}}

    def test_create_validation_error(self):
        details = [{"field": "Title", "message": "Field required", "type": "missing"}]

        def handler(request):
            return httpx.Response(400, json={"success": False, "error": "Validation error", "details": details})

        with pytest.raises(SongsApiError) as exc_info:
            run(make_api(handler).create_song({}))

        assert exc_info.value.status_code == 400
        assert exc_info.value.details == details

    def test_update_song_sends_only_changed_fields(self, existing_song):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"success": True, "data": existing_song.to_api()})

        saved = run(make_api(handler).update_song(existing_song.id, {"Chords": "Am C G"}))

        assert saved == existing_song
        assert seen["method"] == "PATCH"
        assert seen["path"] == f"/api/songs/{existing_song.id}"
        assert seen["body"] == {"Chords": "Am C G"}

    def test_update_song_keeps_explicit_null(self, existing_song):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"success": True, "data": existing_song.to_api()})

        run(make_api(handler).update_song(existing_song.id, {"ShortTitle": None}))

        assert seen["body"] == {"ShortTitle": None}

    def test_update_song_drops_identity_fields(self, existing_song):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"success": True, "data": existing_song.to_api()})

        run(make_api(handler).update_song(
            existing_song.id,
            {"Id": "other-id", "CreatedAt": "2020-01-01T00:00:00Z", "Author": "Old Crow"},
        ))

        assert seen["body"] == {"Author": "Old Crow"}


def test_from_settings_uses_api_base_url():
    from app.config import settings

    api = SongsApiClient.from_settings(token="abc")

    assert str(api._http.base_url).rstrip("/") == settings.API_BASE_URL.rstrip("/")
    run(api.aclose())

# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - In-memory song repository standing in for Supabase
# - TestClient fixtures with repository and auth overridden
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-for-hs256-tokens")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from datetime import datetime, timezone
from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from app.auth import AuthUser, get_current_user
from app.dependencies import get_song_repository
from app.exceptions import SongRepositoryError
from app.main import app
from core.models.song import Song


# =============================================================================
# In-memory repository
# =============================================================================

class FakeSongRepository:
    """Dict-backed stand-in with the same surface as SongRepository."""

    def __init__(self):
        self.songs: dict[str, Song] = {}
        self.failure: Exception | None = None

    def _check(self):
        if self.failure is not None:
            raise self.failure

    def find_by_title(self, title: str) -> Song | None:
        self._check()
        return next((s for s in self.songs.values() if s.title == title), None)

    def find_by_id(self, song_id: str) -> Song | None:
        self._check()
        return self.songs.get(song_id)

    def list_all(self) -> list[Song]:
        self._check()
        return sorted(self.songs.values(), key=lambda s: s.created_at)

    def insert(self, song: Song) -> str:
        self._check()
        if song.id in self.songs:
            raise SongRepositoryError("duplicate key value violates unique constraint")
        self.songs[song.id] = song
        return song.id

    def update(self, song_id: str, song: Song) -> Song | None:
        self._check()
        current = self.songs.get(song_id)
        if current is None:
            return None
        stored = song.model_copy(update={"id": current.id, "created_at": current.created_at})
        self.songs[song_id] = stored
        return stored

    def ping(self) -> None:
        self._check()


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_repository():
    """Empty in-memory repository."""
    return FakeSongRepository()


@pytest.fixture
def existing_song():
    """A fully populated stored song."""
    return Song(
        id="7d8a6a3e-3c1b-4f5e-9a7e-2b1f0c9d8e7f",
        title="Wagon Wheel",
        author="Old Crow Medicine Show",
        level="beginner",
        song_key="A",
        chords="A E F#m D",
        audio_files="https://example.com/wagon-wheel.mp3",
        ultimate_guitar_link="https://tabs.ultimate-guitar.com/tab/wagon-wheel",
        short_title="Wagon",
        created_at=datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
    )


@pytest.fixture
def test_user():
    return AuthUser(id=UUID("11111111-2222-3333-4444-555555555555"), email="tester@example.com")


@pytest.fixture
def anonymous_client(fake_repository):
    """TestClient with the real auth dependency left in place."""
    app.dependency_overrides[get_song_repository] = lambda: fake_repository
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def client(fake_repository, test_user):
    """TestClient acting as an authenticated user."""
    app.dependency_overrides[get_song_repository] = lambda: fake_repository
    app.dependency_overrides[get_current_user] = lambda: test_user
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()

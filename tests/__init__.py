# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Songbook API:
# - test_models.py: Song schemas and payload validation
# - test_normalizer.py: Create/edit normalization
# - test_song_repository.py: Repository against a mocked Supabase client
# - test_songs_api.py: HTTP endpoints via TestClient
# - test_songs_client.py: Async API client via httpx.MockTransport
# - test_song_form.py: Form controller state machine
# - test_auth.py, test_config.py: Ambient auth and settings
#
# Run tests with: pytest
# =============================================================================

# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - songs_api.py: Async HTTP client for the songs API
# - utils.py: Identifier generation and small helpers
# =============================================================================

from lib.songs_api import SongsApiClient, SongsApiError, load_song_for_edit
from lib.utils import generate_song_id, utc_now

__all__ = [
    # Songs API
    "SongsApiClient",
    "SongsApiError",
    "load_song_for_edit",
    # Utils
    "generate_song_id",
    "utc_now",
]

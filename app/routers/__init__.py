# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - songs.py: Song catalog read/create/edit endpoints
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import songs

__all__ = [
    "health",
    "songs",
]

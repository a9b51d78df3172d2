# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .song_form import FormBusyError, FormMode, FormState, SongFormController
from .song_normalizer import normalize_song_data
from .song_repository import SongRepository
from .song_validation import (
    format_validation_errors,
    validate_song_input,
    validate_song_update,
)

__all__ = [
    "FormBusyError",
    "FormMode",
    "FormState",
    "SongFormController",
    "normalize_song_data",
    "SongRepository",
    "format_validation_errors",
    "validate_song_input",
    "validate_song_update",
]

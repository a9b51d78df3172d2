# =============================================================================
# core/services/song_validation.py - Song Payload Validation
# =============================================================================
# Turns arbitrary decoded JSON into SongInput / SongUpdate models.
# Every failing field is collected into one SongValidationError so the
# client can fix them all in a single round trip.
# =============================================================================

import logging
from typing import Any

from pydantic import ValidationError

from app.exceptions import SongValidationError
from core.models.song import SongInput, SongUpdate

logger = logging.getLogger(__name__)


def format_validation_errors(exc: ValidationError) -> list[dict[str, str]]:
    """
    Flatten a pydantic ValidationError into field-level entries.

    Returns:
        List of {"field", "message", "type"} dicts, one per failure
    """
    return [
        {
            "field": ".".join(str(part) for part in error["loc"]) or "body",
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]


def _not_an_object(payload: Any) -> dict[str, str]:
    return {
        "field": "body",
        "message": f"Expected a JSON object, got {type(payload).__name__}",
        "type": "dict_type",
    }


def validate_song_input(payload: Any) -> SongInput:
    """
    Validate a create payload.

    Args:
        payload: Decoded request body (anything json.loads can return)

    Returns:
        SongInput with Title guaranteed non-empty

    Raises:
        SongValidationError: Listing every failing field
    """
    if not isinstance(payload, dict):
        # Still name Title so a client sending garbage learns what is required
        raise SongValidationError([
            _not_an_object(payload),
            {"field": "Title", "message": "Field required", "type": "missing"},
        ])

    try:
        return SongInput.model_validate(payload)
    except ValidationError as e:
        errors = format_validation_errors(e)
        logger.debug(f"Rejected song input: {errors}")
        raise SongValidationError(errors) from e


def validate_song_update(payload: Any) -> SongUpdate:
    """
    Validate a partial update payload.

    Raises:
        SongValidationError: If the body is not an object or a field is invalid
    """
    if not isinstance(payload, dict):
        raise SongValidationError([_not_an_object(payload)])

    try:
        return SongUpdate.model_validate(payload)
    except ValidationError as e:
        errors = format_validation_errors(e)
        logger.debug(f"Rejected song update: {errors}")
        raise SongValidationError(errors) from e

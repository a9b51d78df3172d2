# =============================================================================
# core/services/song_form.py - Song Form Controller
# =============================================================================
# Client-side state holder for the create/edit song forms.
#
# States:
#   idle --submit--> submitting --ack--> success (navigates via on_success)
#                               --fail--> error (kept for display, retry allowed)
#
# Only one submission may be in flight. A second submit while submitting
# raises FormBusyError and sends nothing. Cancelling just navigates away;
# an in-flight submission is left to finish on its own.
#
# Edits send only the fields the user touched, so a field changed by
# someone else since the form was loaded is not written back.
# =============================================================================

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from core.models.song import Song
from core.services.song_normalizer import normalize_song_data
from lib.songs_api import SongsApiClient

logger = logging.getLogger(__name__)


class FormState(str, Enum):
    """Lifecycle of a single form."""
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


class FormMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class FormBusyError(Exception):
    """Raised when submit is called while a submission is in flight."""

    def __init__(self):
        super().__init__("A submission is already in progress")


class SongFormController:
    """
    Drives submit/cancel for one song form.

    Example:
        form = SongFormController(
            api,
            mode=FormMode.EDIT,
            initial_data=song,
            on_success=lambda song_id: router.push(f"/dashboard/songs/{song_id}"),
        )
        await form.submit({"Chords": "G C D"})
        if form.state is FormState.ERROR:
            show(form.error_message)
    """

    def __init__(
        self,
        api: SongsApiClient,
        *,
        mode: FormMode = FormMode.CREATE,
        initial_data: Song | None = None,
        on_success: Callable[[str], Any] | None = None,
        on_cancel: Callable[[], Any] | None = None,
    ):
        if mode is FormMode.EDIT and initial_data is None:
            raise ValueError("Edit mode requires the song being edited")

        self.api = api
        self.mode = mode
        self.initial_data = initial_data
        self.on_success = on_success
        self.on_cancel = on_cancel

        self._state = FormState.IDLE
        self._error: Exception | None = None
        self.preview: Song | None = initial_data
        self.song_id: str | None = initial_data.id if initial_data else None

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def loading(self) -> bool:
        return self._state is FormState.SUBMITTING

    @property
    def error(self) -> Exception | None:
        return self._error

    @property
    def error_message(self) -> str | None:
        return str(self._error) if self._error else None

    async def _send(self, form_data: Mapping[str, Any]) -> str:
        if self.mode is FormMode.EDIT:
            # Local merge is for display; the server merges into its own copy
            self.preview = normalize_song_data(form_data, self.initial_data)
            saved = await self.api.update_song(self.initial_data.id, form_data)
            self.preview = saved
            return saved.id
        return await self.api.create_song(dict(form_data))

    async def submit(self, form_data: Mapping[str, Any]) -> str | None:
        """
        Submit the form.

        Args:
            form_data: PascalCase field values from the form

        Returns:
            The song id on success, None if the submission failed

        Raises:
            FormBusyError: If a previous submit has not finished
        """
        if self._state is FormState.SUBMITTING:
            raise FormBusyError()

        self._state = FormState.SUBMITTING
        self._error = None

        try:
            song_id = await self._send(form_data)
        except Exception as e:
            logger.warning(f"Song {self.mode.value} submission failed: {e}")
            self._error = e
            self._state = FormState.ERROR
            return None

        self.song_id = song_id
        self._state = FormState.SUCCESS
        if self.on_success:
            self.on_success(song_id)
        return song_id

    def cancel(self) -> None:
        """Navigate away without touching any in-flight submission."""
        if self.on_cancel:
            self.on_cancel()

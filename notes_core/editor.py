"""Edit session for a single note's detail screen."""

from __future__ import annotations

import logging
from typing import Optional

from notes_core.exceptions import NotFound, PersistFailed
from notes_core.models import Note
from notes_core.viewmodel import NoteListViewModel

logger = logging.getLogger(__name__)


class NoteEditor:
    """Start, save or cancel an edit of one note.

    Cancel is the only undo: it restores the draft to the stored content.
    """

    def __init__(self, view_model: NoteListViewModel, note_id: str) -> None:
        self._view_model = view_model
        self.note_id = note_id
        self.is_editing = False
        self.draft = self._stored_content()

    @property
    def note(self) -> Note:
        note = self._view_model.find(self.note_id)
        if note is None:
            raise NotFound(self.note_id)
        return note

    def _stored_content(self) -> str:
        return self.note.content or ""

    def start_editing(self) -> None:
        self.draft = self._stored_content()
        self.is_editing = True

    def save_changes(self) -> Optional[Note]:
        """Save the draft.

        A blank draft reverts to the stored content. On PersistFailed the
        editor stays in editing mode with the draft kept.
        """
        try:
            saved = self._view_model.submit_edit(self.note_id, self.draft)
        except PersistFailed:
            logger.warning("Keeping draft for note %s after failed save", self.note_id)
            raise
        if saved is None:
            self.draft = self._stored_content()
        else:
            self.draft = saved.content or ""
        self.is_editing = False
        return saved

    def cancel_editing(self) -> None:
        self.draft = self._stored_content()
        self.is_editing = False

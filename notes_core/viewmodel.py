"""List state for the notes screen.

The view model holds a snapshot of the store, applies input policy
(trimming, rejecting blank text) and funnels every mutation through the
store, refreshing the snapshot exactly once afterwards.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, Optional

from notes_core.config import Settings
from notes_core.exceptions import NotesError
from notes_core.models import ClearScope, Note, SortMode
from notes_core.ordering import order_notes
from notes_core.storage import Store

logger = logging.getLogger(__name__)


class NoteListViewModel:
    """Snapshot of the store plus ordering and mutation policy."""

    def __init__(
        self,
        store: Store,
        *,
        sort_mode: SortMode = SortMode.NEWEST_FIRST,
        touch_on_edit: bool = False,
        clear_scope: ClearScope = ClearScope.STORE,
    ) -> None:
        self._store = store
        self._sort_mode = SortMode(sort_mode)
        self.touch_on_edit = touch_on_edit
        self.clear_scope = ClearScope(clear_scope)
        self._snapshot: list[Note] = []
        self.refresh_count = 0

    @classmethod
    def from_settings(cls, store: Store, settings: Settings) -> NoteListViewModel:
        return cls(
            store,
            sort_mode=settings.default_sort_mode,
            touch_on_edit=settings.touch_on_edit,
            clear_scope=settings.clear_scope,
        )

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> list[Note]:
        """The notes as of the last refresh, in store order."""
        return list(self._snapshot)

    def refresh(self) -> list[Note]:
        """Re-read the store into the snapshot."""
        self._snapshot = self._store.list()
        self.refresh_count += 1
        return self.snapshot

    def find(self, note_id: str) -> Optional[Note]:
        """Look a note up in the snapshot."""
        for note in self._snapshot:
            if note.id == note_id:
                return note
        return None

    @contextmanager
    def _mutation(self, action: str) -> Iterator[None]:
        try:
            yield
        except NotesError as e:
            logger.warning("Failed to %s: %s", action, e)
            try:
                self.refresh()
            except NotesError as refresh_error:
                logger.warning("Failed to refresh notes: %s", refresh_error)
            raise
        self.refresh()

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    @property
    def sort_mode(self) -> SortMode:
        return self._sort_mode

    def set_sort_mode(self, mode: SortMode) -> None:
        """Change the ordering of ordered_list(). The store is untouched."""
        self._sort_mode = SortMode(mode)

    def ordered_list(self) -> list[Note]:
        """The snapshot sorted by the current sort mode."""
        return order_notes(self._snapshot, self._sort_mode)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @staticmethod
    def can_submit(text: Optional[str]) -> bool:
        """Whether text would produce a note (the add button is enabled)."""
        return bool(text and text.strip())

    def submit_new(self, text: Optional[str]) -> Optional[Note]:
        """Create a note from trimmed text. Blank text is ignored."""
        if not self.can_submit(text):
            return None
        with self._mutation("save new note"):
            return self._store.create(text.strip())

    def submit_edit(self, note_id: str, text: Optional[str]) -> Optional[Note]:
        """Save trimmed text as a note's content.

        Blank text discards the edit and leaves the note unchanged; it does
        not delete the note.
        """
        if not self.can_submit(text):
            logger.debug("Discarding blank edit for note %s", note_id)
            return None
        with self._mutation("save note"):
            return self._store.update(note_id, text.strip(), touch=self.touch_on_edit)

    def remove(self, note_id: str) -> None:
        with self._mutation("delete note"):
            self._store.delete(note_id)

    def remove_many(self, note_ids: Iterable[str]) -> int:
        with self._mutation("delete notes"):
            return self._store.delete_all(note_ids)

    def clear_all(self) -> int:
        """Remove every note, per clear_scope. Returns the number removed."""
        with self._mutation("clear notes"):
            if self.clear_scope is ClearScope.STORE:
                ids = [n.id for n in self._store.list()]
            else:
                ids = [n.id for n in self._snapshot]
            return self._store.delete_all(ids)

"""Error taxonomy for the notes store.

Store errors are raised to the caller as typed exceptions. None of them
is a presentation concern: the view model decides what the user sees.
"""

from __future__ import annotations


class NotesError(Exception):
    """Base class for every notes error."""

    code = "NOTES_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StorageUnavailable(NotesError):
    """The backing file cannot be opened, created or migrated.

    Fatal at startup.
    """

    code = "STORAGE_UNAVAILABLE"


class NotFound(NotesError):
    """An operation referenced a note id that is not in the store."""

    code = "NOT_FOUND"

    def __init__(self, note_id: str) -> None:
        super().__init__(f"Note {note_id} not found")
        self.note_id = note_id


class PersistFailed(NotesError):
    """A write transaction failed after being accepted.

    The in-memory change has already been rolled back when this is raised.
    """

    code = "PERSIST_FAILED"

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Failed to persist notes: {cause}")
        self.cause = cause


class StoreNotReady(NotesError):
    """An operation was attempted before the store finished opening."""

    code = "STORE_NOT_READY"

    def __init__(self, message: str = "Store is not open") -> None:
        super().__init__(message)

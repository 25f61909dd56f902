"""Process bootstrap for the notes core.

Builds exactly one Store per process, opens it, wires the view model to
it and flushes it at exit. Collaborators receive the store explicitly.
"""

from __future__ import annotations

import asyncio
import atexit
import locale
import logging
from dataclasses import dataclass

from notes_core.config import Settings, settings as default_settings
from notes_core.exceptions import NotesError, StorageUnavailable
from notes_core.storage import Store
from notes_core.viewmodel import NoteListViewModel

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def setup_locale() -> None:
    """Use the user's collation rules for alphabetical ordering."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning("Collation locale unavailable, using C ordering: %s", e)


@dataclass
class NotesApp:
    """The process-wide store and the view model bound to it."""

    settings: Settings
    store: Store
    view_model: NoteListViewModel

    def shutdown(self) -> None:
        """Flush and close the store. Safe to call more than once."""
        atexit.unregister(self.shutdown)
        try:
            self.store.close()
        except NotesError as e:
            logger.error("Failed to flush notes on shutdown: %s", e)
            raise
        logger.info("Notes app shut down.")


async def start(settings: Settings | None = None) -> NotesApp:
    """Open the store and build the app.

    A store that cannot be opened aborts startup with SystemExit(1).
    """
    settings = settings or default_settings
    setup_logging(settings.log_level)
    setup_locale()

    store = Store(settings)
    try:
        await store.open()
    except StorageUnavailable as e:
        logger.critical("Unresolved notes store error: %s", e)
        raise SystemExit(1) from e

    view_model = NoteListViewModel.from_settings(store, settings)
    view_model.refresh()

    app = NotesApp(settings=settings, store=store, view_model=view_model)
    atexit.register(app.shutdown)
    logger.info("Notes store ready with %d notes", store.count)
    return app


def main() -> None:
    app = asyncio.run(start())
    logger.info("Store location: %s", app.store.location or "in-memory")


if __name__ == "__main__":
    main()

"""JSON file-based storage layer for notes.

A ``Store`` owns the durable note collection. Every mutating call is one
transaction: the change is staged on the working copy and flushed to disk
with an atomic replace, or rolled back if the flush fails.
"""

from __future__ import annotations

import asyncio
import json
import logging
import threading
import time
from datetime import UTC, datetime
from pathlib import Path
from typing import Callable, Iterable, Optional

from notes_core.config import Settings
from notes_core.exceptions import (
    NotFound,
    PersistFailed,
    StorageUnavailable,
    StoreNotReady,
)
from notes_core.merge import merge_by_property
from notes_core.metrics import NOTES_COUNT, PERSIST_DURATION, STORE_OPERATIONS
from notes_core.models import SCHEMA_VERSION, Note, NoteStore

logger = logging.getLogger(__name__)

IN_MEMORY_LOCATION = ":memory:"

MergePolicy = Callable[[list[Note], list[Note], list[Note]], list[Note]]
FileSignature = Optional[tuple[int, int]]


def resolve_location(settings: Settings) -> Path:
    """Pick the backing file: first existing candidate, else the fallback."""
    for path in settings.candidate_paths:
        if path.exists():
            logger.info("Found notes store: %s", path.stem)
            return path
    logger.warning(
        "No notes store found in %s, using fallback: %s",
        settings.data_dir,
        settings.fallback_store_name,
    )
    return settings.fallback_path


def _file_signature(path: Path) -> FileSignature:
    try:
        st = path.stat()
    except FileNotFoundError:
        return None
    return (st.st_mtime_ns, st.st_size)


def _read_document(path: Path) -> NoteStore:
    raw = json.loads(path.read_text(encoding="utf-8"))
    return NoteStore.model_validate(raw)


def _write_document(path: Path, document: NoteStore) -> None:
    """Write to a sibling temp file, then atomically replace the target."""
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        tmp.write_text(document.model_dump_json(indent=2), encoding="utf-8")
        tmp.replace(path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


class Store:
    """Durable CRUD over the note collection."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._lock = threading.RLock()
        self._path: Optional[Path] = None
        self._signature: FileSignature = None
        self._notes: list[Note] = []
        self._persisted: list[Note] = []
        self._dirty = False
        self._open = False
        self.automatically_merges_changes = False
        self.merge_policy: Optional[MergePolicy] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        """Whether open() has completed and close() has not been called."""
        return self._open

    @property
    def location(self) -> Optional[Path]:
        """The backing file, or None for an in-memory store."""
        return self._path

    async def open(self, location: str | Path | None = None) -> Store:
        """Resolve and load the backing file, creating it if absent.

        Loading runs on a worker thread and is bounded by
        ``settings.open_timeout``.

        Raises:
            StorageUnavailable: The file cannot be created, read or
                understood, or loading timed out.
        """
        if self._open:
            return self

        timeout = self._settings.open_timeout
        try:
            path, document, signature = await asyncio.wait_for(
                asyncio.to_thread(self._load, location),
                timeout=timeout,
            )
        except TimeoutError as exc:
            logger.error("Opening notes store timed out after %.1fs", timeout)
            raise StorageUnavailable(
                f"Timed out after {timeout}s opening notes store"
            ) from exc

        with self._lock:
            self._path = path
            self._signature = signature
            self._notes = list(document.notes)
            self._persisted = list(document.notes)
            self._dirty = False
            self.automatically_merges_changes = True
            self.merge_policy = merge_by_property
            self._open = True
            NOTES_COUNT.set(len(self._notes))

        if path is None:
            logger.info("Using in-memory notes store")
        else:
            logger.info("Loaded %d notes from %s", len(self._notes), path)
        return self

    def _load(
        self, location: str | Path | None
    ) -> tuple[Optional[Path], NoteStore, FileSignature]:
        if self._settings.in_memory or str(location) == IN_MEMORY_LOCATION:
            return None, NoteStore(), None

        path = Path(location) if location is not None else resolve_location(self._settings)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            if path.exists():
                document = _read_document(path)
            else:
                logger.info("No notes file at %s, creating it", path)
                document = NoteStore()
                _write_document(path, document)
        except (OSError, ValueError) as exc:
            logger.error("Notes store loading failed: %s", exc)
            raise StorageUnavailable(f"Cannot open notes store at {path}: {exc}") from exc

        if document.schema_version > SCHEMA_VERSION:
            raise StorageUnavailable(
                f"Notes store {path} has schema version "
                f"{document.schema_version}, newest supported is {SCHEMA_VERSION}"
            )
        return path, document, _file_signature(path)

    def close(self) -> None:
        """Flush pending changes and release the handle."""
        with self._lock:
            if not self._open:
                return
            try:
                self.persist()
            finally:
                self._open = False
            logger.info("Notes store closed")

    def _require_open(self) -> None:
        if not self._open:
            raise StoreNotReady()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def has_changes(self) -> bool:
        """Whether there are changes not yet flushed to disk."""
        return self._dirty

    @property
    def count(self) -> int:
        """Number of stored notes."""
        self._require_open()
        return len(self._notes)

    def list(self) -> list[Note]:
        """Return every stored note, in storage order."""
        with self._lock:
            self._require_open()
            try:
                self._absorb_external()
            except (OSError, ValueError) as exc:
                raise StorageUnavailable(
                    f"Cannot read external changes from {self._path}: {exc}"
                ) from exc
            return list(self._notes)

    def get(self, note_id: str) -> Note:
        """Return the note with the given id."""
        with self._lock:
            self._require_open()
            return self._notes[self._position(note_id)]

    def _position(self, note_id: str) -> int:
        for i, note in enumerate(self._notes):
            if note.id == note_id:
                return i
        raise NotFound(note_id)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, content: Optional[str]) -> Note:
        """Create and persist a new note. Any content is accepted."""
        with self._lock:
            self._require_open()
            note = Note.new(content)
            self._notes.append(note)
            self._dirty = True
            self._commit("create")
            logger.info("Created note %s", note.id)
            return note

    def update(self, note_id: str, content: Optional[str], *, touch: bool = False) -> Note:
        """Overwrite a note's content and persist.

        With ``touch`` the creation timestamp is moved to now as well.
        """
        with self._lock:
            self._require_open()
            try:
                index = self._position(note_id)
            except NotFound:
                STORE_OPERATIONS.labels(operation="update", status="not_found").inc()
                raise
            note = self._notes[index].with_content(content)
            if touch:
                note = note.with_created_at(datetime.now(UTC))
            self._notes[index] = note
            self._dirty = True
            self._commit("update")
            logger.info("Updated note %s", note_id)
            return note

    def delete(self, note_id: str) -> None:
        """Remove a note permanently."""
        with self._lock:
            self._require_open()
            try:
                index = self._position(note_id)
            except NotFound:
                STORE_OPERATIONS.labels(operation="delete", status="not_found").inc()
                raise
            del self._notes[index]
            self._dirty = True
            self._commit("delete")
            logger.info("Deleted note %s", note_id)

    def delete_all(self, note_ids: Iterable[str]) -> int:
        """Remove every listed note in one transaction.

        Ids that are not in the store are skipped. Returns the number of
        notes removed.
        """
        wanted = set(note_ids)
        with self._lock:
            self._require_open()
            kept = [n for n in self._notes if n.id not in wanted]
            removed = len(self._notes) - len(kept)
            if removed:
                self._notes = kept
                self._dirty = True
            self._commit("delete_all")
            skipped = len(wanted) - removed
            if skipped:
                logger.debug("delete_all skipped %d unknown ids", skipped)
            logger.info("Deleted %d notes", removed)
            return removed

    def _commit(self, operation: str) -> None:
        try:
            self.persist()
        except PersistFailed:
            STORE_OPERATIONS.labels(operation=operation, status="failed").inc()
            raise
        STORE_OPERATIONS.labels(operation=operation, status="success").inc()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def persist(self) -> bool:
        """Flush pending changes.

        Returns whether anything was written. With no pending changes this
        is a successful no-op that returns False.

        Raises:
            PersistFailed: The write failed. The working copy has been
                rolled back to the last persisted state.
        """
        with self._lock:
            self._require_open()
            if not self._dirty:
                logger.debug("No changes to save")
                return False

            start = time.perf_counter()
            try:
                if self._path is not None:
                    self._absorb_external()
                    _write_document(self._path, NoteStore(notes=self._notes))
                    self._signature = _file_signature(self._path)
            except (OSError, ValueError) as exc:
                logger.error("Notes save failed, rolling back: %s", exc)
                self._notes = list(self._persisted)
                self._dirty = False
                NOTES_COUNT.set(len(self._notes))
                raise PersistFailed(exc) from exc

            self._persisted = list(self._notes)
            self._dirty = False
            PERSIST_DURATION.observe(time.perf_counter() - start)
            NOTES_COUNT.set(len(self._notes))
            logger.debug("Saved %d notes", len(self._notes))
            return True

    def _absorb_external(self) -> bool:
        """Merge changes written to the backing file by someone else."""
        if (
            self._path is None
            or not self.automatically_merges_changes
            or self.merge_policy is None
        ):
            return False
        signature = _file_signature(self._path)
        if signature is None or signature == self._signature:
            return False

        disk = _read_document(self._path).notes
        merged = self.merge_policy(self._persisted, disk, self._notes)
        self._persisted = list(disk)
        self._notes = merged
        self._signature = signature
        self._dirty = merged != disk
        logger.info("Merged external changes from %s", self._path)
        return True

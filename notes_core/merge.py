"""Property-level merge of in-memory notes with the on-disk state.

The policy is "in-memory property values win": for each note and each
property, a value changed in memory since the last persisted state
overrides the disk value; untouched properties take whatever is on disk.
"""

from __future__ import annotations

import logging
from typing import Iterable

from notes_core.models import Note

logger = logging.getLogger(__name__)

MERGED_FIELDS = ("content", "created_at")


def _index(notes: Iterable[Note]) -> dict[str, Note]:
    return {n.id: n for n in notes}


def _merge_note(base: Note, disk: Note, memory: Note) -> Note:
    """Merge one note present in all three states."""
    update = {}
    for field in MERGED_FIELDS:
        mem_value = getattr(memory, field)
        if mem_value != getattr(base, field):
            update[field] = mem_value
    return disk.model_copy(update=update) if update else disk


def _changed(base: Note, other: Note) -> bool:
    return any(getattr(base, f) != getattr(other, f) for f in MERGED_FIELDS)


def merge_by_property(
    base: list[Note],
    disk: list[Note],
    memory: list[Note],
) -> list[Note]:
    """Three-way merge keyed by note id.

    Args:
        base: The state last loaded from or written to disk.
        disk: The state currently on disk.
        memory: The working state held in memory.

    Returns:
        The merged list: disk order first, then notes that only exist in
        memory, in memory order.
    """
    base_by_id = _index(base)
    memory_by_id = _index(memory)
    merged: list[Note] = []
    seen: set[str] = set()

    for disk_note in disk:
        seen.add(disk_note.id)
        base_note = base_by_id.get(disk_note.id)
        mem_note = memory_by_id.get(disk_note.id)

        if base_note is None:
            # Created externally; memory can only hold it if ids collide.
            merged.append(mem_note if mem_note is not None else disk_note)
        elif mem_note is None:
            logger.debug("Dropping %s: deleted in memory", disk_note.id)
        else:
            merged.append(_merge_note(base_note, disk_note, mem_note))

    for mem_note in memory:
        if mem_note.id in seen:
            continue
        base_note = base_by_id.get(mem_note.id)
        if base_note is None or _changed(base_note, mem_note):
            merged.append(mem_note)
        else:
            logger.debug("Dropping %s: deleted on disk", mem_note.id)

    return merged

"""Deterministic presentation ordering for note snapshots."""

from __future__ import annotations

import locale
import unicodedata
from datetime import UTC, datetime
from typing import Iterable

from notes_core.models import Note, SortMode


def _timestamp_key(note: Note) -> tuple[bool, datetime]:
    ts = note.created_at
    if ts is None:
        return (False, datetime.min.replace(tzinfo=UTC))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return (True, ts)


def _base_letters(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def _content_key(note: Note) -> tuple[str, str]:
    # Accents only break ties, so the order holds under the C locale too.
    folded = (note.content or "").casefold()
    return (locale.strxfrm(_base_letters(folded)), locale.strxfrm(folded))


def order_notes(notes: Iterable[Note], mode: SortMode) -> list[Note]:
    """Return notes sorted for display.

    NEWEST_FIRST sorts by created_at descending with missing timestamps
    last. ALPHABETICAL_CONTENT sorts by content ascending, ignoring case,
    with accented letters sorted next to their base letter; missing
    content sorts as the empty string. Equal keys keep their input order.
    """
    mode = SortMode(mode)
    if mode is SortMode.NEWEST_FIRST:
        # sorted() stays stable with reverse=True
        return sorted(notes, key=_timestamp_key, reverse=True)
    return sorted(notes, key=_content_key)

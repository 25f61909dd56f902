"""Tests for notes_core.ordering."""

from datetime import UTC, datetime, timedelta

from notes_core.models import Note, SortMode
from notes_core.ordering import order_notes

T0 = datetime(2025, 9, 10, 12, 0, tzinfo=UTC)


def _note(content, minutes=None) -> Note:
    created = None if minutes is None else T0 + timedelta(minutes=minutes)
    return Note(content=content, created_at=created)


# ---------------------------------------------------------------------------
# NEWEST_FIRST
# ---------------------------------------------------------------------------


class TestNewestFirst:
    def test_descending_by_timestamp(self) -> None:
        notes = [_note("old", 0), _note("new", 10), _note("mid", 5)]
        result = order_notes(notes, SortMode.NEWEST_FIRST)
        assert [n.content for n in result] == ["new", "mid", "old"]

    def test_missing_timestamp_sinks_to_end(self) -> None:
        notes = [_note("none"), _note("old", 0), _note("new", 10)]
        result = order_notes(notes, SortMode.NEWEST_FIRST)
        assert [n.content for n in result] == ["new", "old", "none"]

    def test_total_order(self) -> None:
        notes = [_note(str(i), m) for i, m in enumerate([3, None, 7, 1, 7, None, 0])]
        result = order_notes(notes, SortMode.NEWEST_FIRST)
        for a, b in zip(result, result[1:]):
            if b.created_at is None:
                continue
            assert a.created_at is not None
            assert a.created_at >= b.created_at

    def test_ties_keep_input_order(self) -> None:
        notes = [_note("first", 5), _note("second", 5), _note("third", 5)]
        result = order_notes(notes, SortMode.NEWEST_FIRST)
        assert [n.content for n in result] == ["first", "second", "third"]

    def test_naive_timestamp_treated_as_utc(self) -> None:
        naive = Note(content="naive", created_at=datetime(2025, 9, 10, 12, 30))
        result = order_notes([_note("aware", 0), naive], SortMode.NEWEST_FIRST)
        assert [n.content for n in result] == ["naive", "aware"]


# ---------------------------------------------------------------------------
# ALPHABETICAL_CONTENT
# ---------------------------------------------------------------------------


class TestAlphabeticalContent:
    def test_case_insensitive(self) -> None:
        notes = [_note("banana", 0), _note("Apple", 1)]
        result = order_notes(notes, SortMode.ALPHABETICAL_CONTENT)
        assert [n.content for n in result] == ["Apple", "banana"]

    def test_mixed_case_scenario(self) -> None:
        notes = [_note("B note", 0), _note("a note", 1), _note("C note", 2)]
        result = order_notes(notes, SortMode.ALPHABETICAL_CONTENT)
        assert [n.content for n in result] == ["a note", "B note", "C note"]

    def test_missing_content_sorts_as_empty(self) -> None:
        notes = [_note("zebra", 0), _note(None, 1), _note("", 2)]
        result = order_notes(notes, SortMode.ALPHABETICAL_CONTENT)
        assert result[0].content is None
        assert result[1].content == ""
        assert result[2].content == "zebra"

    def test_equal_content_is_stable(self) -> None:
        first, second = _note("Same", 0), _note("same", 1)
        result = order_notes([first, second], SortMode.ALPHABETICAL_CONTENT)
        assert [n.id for n in result] == [first.id, second.id]

    def test_accented_letters_sort_with_base_letter(self) -> None:
        notes = [_note("zebra", 0), _note("éclair", 1), _note("apple", 2)]
        result = order_notes(notes, SortMode.ALPHABETICAL_CONTENT)
        assert [n.content for n in result] == ["apple", "éclair", "zebra"]

    def test_accent_breaks_ties_only(self) -> None:
        notes = [_note("Résumé", 0), _note("resume", 1), _note("rest", 2)]
        result = order_notes(notes, SortMode.ALPHABETICAL_CONTENT)
        assert [n.content for n in result] == ["rest", "resume", "Résumé"]

    def test_accepts_string_mode(self) -> None:
        result = order_notes([_note("b", 0), _note("a", 1)], "alphabetical_content")
        assert [n.content for n in result] == ["a", "b"]

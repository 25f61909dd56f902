"""Tests for notes_core.merge — property-level in-memory-wins merge."""

from datetime import UTC, datetime, timedelta

from notes_core.merge import merge_by_property
from notes_core.models import Note

T0 = datetime(2025, 9, 10, 12, 0, tzinfo=UTC)


def _base() -> Note:
    return Note(id="n1", content="base", created_at=T0)


class TestMergeByProperty:
    def test_no_changes(self) -> None:
        note = _base()
        assert merge_by_property([note], [note], [note]) == [note]

    def test_memory_change_wins_over_disk_change(self) -> None:
        base = _base()
        disk = base.with_content("disk")
        memory = base.with_content("memory")
        merged = merge_by_property([base], [disk], [memory])
        assert merged[0].content == "memory"

    def test_untouched_property_takes_disk_value(self) -> None:
        """Memory edits content, disk edits timestamp: both survive."""
        base = _base()
        later = T0 + timedelta(hours=1)
        disk = base.with_created_at(later)
        memory = base.with_content("memory")
        merged = merge_by_property([base], [disk], [memory])
        assert merged == [Note(id="n1", content="memory", created_at=later)]

    def test_disk_change_kept_when_memory_untouched(self) -> None:
        base = _base()
        disk = base.with_content("disk")
        merged = merge_by_property([base], [disk], [base])
        assert merged[0].content == "disk"

    def test_note_added_on_disk(self) -> None:
        base = _base()
        external = Note(id="n2", content="external", created_at=T0)
        merged = merge_by_property([base], [base, external], [base])
        assert [n.id for n in merged] == ["n1", "n2"]

    def test_note_added_in_memory(self) -> None:
        base = _base()
        local = Note(id="n3", content="local", created_at=T0)
        merged = merge_by_property([base], [base], [base, local])
        assert [n.id for n in merged] == ["n1", "n3"]

    def test_deleted_in_memory_stays_deleted(self) -> None:
        base = _base()
        disk = base.with_content("edited on disk")
        assert merge_by_property([base], [disk], []) == []

    def test_deleted_on_disk_unmodified_in_memory(self) -> None:
        base = _base()
        assert merge_by_property([base], [], [base]) == []

    def test_deleted_on_disk_but_edited_in_memory(self) -> None:
        base = _base()
        memory = base.with_content("rescued")
        merged = merge_by_property([base], [], [memory])
        assert merged == [memory]

    def test_order_disk_first_then_memory_only(self) -> None:
        a = Note(id="a", content="a", created_at=T0)
        b = Note(id="b", content="b", created_at=T0)
        c = Note(id="c", content="c", created_at=T0)
        merged = merge_by_property([a], [b, a], [a, c])
        assert [n.id for n in merged] == ["b", "a", "c"]

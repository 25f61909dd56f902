"""Pydantic models for the notes store."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

SCHEMA_VERSION = 1
EMPTY_NOTE_LABEL = "Empty Note"


class SortMode(str, Enum):
    """Presentation ordering applied to a snapshot."""

    NEWEST_FIRST = "newest_first"
    ALPHABETICAL_CONTENT = "alphabetical_content"


class ClearScope(str, Enum):
    """What clearing all notes removes."""

    STORE = "store"  # every note in the store
    SNAPSHOT = "snapshot"  # only the notes currently shown


class Note(BaseModel):
    """A single timestamped text note."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(default_factory=lambda: str(uuid4()))
    content: Optional[str] = Field(default=None, description="Note text")
    created_at: Optional[datetime] = Field(
        default=None,
        description="Creation timestamp (UTC)",
    )

    @classmethod
    def new(cls, content: Optional[str]) -> Note:
        """Build a fresh note stamped with the current time."""
        return cls(content=content, created_at=datetime.now(UTC))

    @property
    def display_text(self) -> str:
        """Content for a list row, or a placeholder when there is none."""
        return self.content if self.content else EMPTY_NOTE_LABEL

    def with_content(self, content: Optional[str]) -> Note:
        return self.model_copy(update={"content": content})

    def with_created_at(self, created_at: datetime) -> Note:
        return self.model_copy(update={"created_at": created_at})


class NoteStore(BaseModel):
    """Container for all notes, used for JSON serialization."""

    model_config = ConfigDict(extra="ignore")

    schema_version: int = SCHEMA_VERSION
    notes: list[Note] = Field(default_factory=list)

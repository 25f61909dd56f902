"""Notes configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

from notes_core.models import ClearScope, SortMode

DEFAULT_STORE_NAMES = ["DataModel", "Model", "Notes", "NotesApp", "CoreData"]


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "NOTES_",
    }

    # Backing store
    data_dir: Path = Path.home() / ".notes"
    in_memory: bool = False
    store_names: list[str] = Field(default_factory=lambda: list(DEFAULT_STORE_NAMES))
    fallback_store_name: str = "DataModel"
    open_timeout: float = 10.0

    # Policies
    touch_on_edit: bool = False
    clear_scope: ClearScope = ClearScope.STORE
    default_sort_mode: SortMode = SortMode.NEWEST_FIRST

    # Logging
    log_level: str = "INFO"

    @property
    def candidate_paths(self) -> list[Path]:
        """Return candidate backing files in lookup order."""
        return [self.data_dir / f"{name}.json" for name in self.store_names]

    @property
    def fallback_path(self) -> Path:
        """Backing file used when no candidate exists yet."""
        return self.data_dir / f"{self.fallback_store_name}.json"


settings = Settings()

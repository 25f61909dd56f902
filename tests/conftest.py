"""Shared fixtures for the notes core tests."""

from __future__ import annotations

from pathlib import Path

import anyio
import pytest

from notes_core.config import Settings
from notes_core.storage import Store


@pytest.fixture()
def file_settings(tmp_path: Path) -> Settings:
    """Settings pointing at a temp data directory."""
    return Settings(data_dir=tmp_path / "data", in_memory=False)


@pytest.fixture()
def memory_settings(tmp_path: Path) -> Settings:
    """Settings for an in-memory store."""
    return Settings(data_dir=tmp_path / "unused", in_memory=True)


@pytest.fixture()
def file_store(file_settings: Settings) -> Store:
    """An opened Store backed by a temp JSON file."""
    store = Store(file_settings)
    anyio.run(store.open)
    return store


@pytest.fixture()
def memory_store(memory_settings: Settings) -> Store:
    """An opened in-memory Store."""
    store = Store(memory_settings)
    anyio.run(store.open)
    return store

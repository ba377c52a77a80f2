"""
Pytest configuration and fixtures for shots_organizer tests.
"""

from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

import pytest

from shots_organizer.core.types import FileRecord


@pytest.fixture
def root(tmp_path: Path) -> Path:
    """Create an empty organizer root."""
    directory = tmp_path / "shots"
    directory.mkdir()
    return directory


@pytest.fixture
def make_file() -> Callable[..., Path]:
    """Factory writing a small file, creating parent directories."""

    def _make(path: Path, content: str = "capture") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _make


@pytest.fixture
def make_record() -> Callable[..., FileRecord]:
    """Factory for FileRecord values that do not exist on disk."""

    def _make(
        path: Path,
        is_dir: bool = False,
        is_symlink: bool = False,
        created: Optional[datetime] = None,
        modified: Optional[datetime] = None,
    ) -> FileRecord:
        return FileRecord(
            path=path,
            parent=path.parent,
            name=path.name,
            is_dir=is_dir,
            is_symlink=is_symlink,
            created=created,
            modified=modified or datetime(2025, 1, 1, 12, 0, 0),
        )

    return _make

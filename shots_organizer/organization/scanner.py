"""
Tree scanner.

Walks the organizer root and records every file and directory with the
metadata the planner needs.
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

import arrow

from ..core.errors import ScanError
from ..core.types import FileRecord

logger = logging.getLogger(__name__)


def _local_time(timestamp: float) -> datetime:
    return arrow.get(timestamp).to("local").naive


def make_record(
    path: Path, stat_result: os.stat_result, is_dir: bool, is_symlink: bool = False
) -> FileRecord:
    """Build a FileRecord from a stat result."""
    birth_time: Optional[float] = getattr(stat_result, "st_birthtime", None)

    return FileRecord(
        path=path,
        parent=path.parent,
        name=path.name,
        is_dir=is_dir,
        is_symlink=is_symlink,
        created=_local_time(birth_time) if birth_time else None,
        modified=_local_time(stat_result.st_mtime),
    )


def scan(root: Path, exclude_dirs: Iterable[str] = ()) -> List[FileRecord]:
    """
    Recursively scan a directory.

    Symbolic links are recorded but never followed, so nothing outside the
    root is ever visited.

    Args:
        root: Directory to scan
        exclude_dirs: Directory names to leave out (with their contents)

    Returns:
        One FileRecord per entry under root, in sorted order

    Raises:
        ScanError: If root does not exist, is not a directory or is unreadable
    """
    root = Path(root)
    excluded = set(exclude_dirs)

    if not root.exists():
        raise ScanError(f"Directory does not exist: {root}")
    if not root.is_dir():
        raise ScanError(f"Path is not a directory: {root}")

    try:
        os.listdir(root)
    except OSError as e:
        raise ScanError(f"Cannot read directory {root}: {e}") from e

    def _on_error(error: OSError) -> None:
        logger.warning(f"Skipping unreadable directory {error.filename}: {error}")

    records: List[FileRecord] = []

    for dirpath, dirnames, filenames in os.walk(
        root, onerror=_on_error, followlinks=False
    ):
        current = Path(dirpath)

        # Prune in place so os.walk does not descend into excluded directories
        if current == root:
            dirnames[:] = [name for name in dirnames if name not in excluded]
        dirnames.sort()

        for name in list(dirnames):
            path = current / name
            if path.is_symlink():
                # Recorded so its parent is never pruned, but not followed
                dirnames.remove(name)
                record = _stat_record(path, is_dir=False, is_symlink=True)
            else:
                record = _stat_record(path, is_dir=True)
                if record is None:
                    dirnames.remove(name)
            if record is not None:
                records.append(record)

        for name in sorted(filenames):
            path = current / name
            record = _stat_record(path, is_dir=False, is_symlink=path.is_symlink())
            if record is not None:
                records.append(record)

    logger.info(f"Scanned {len(records)} entries in {root}")
    return records


def _stat_record(
    path: Path, is_dir: bool, is_symlink: bool = False
) -> Optional[FileRecord]:
    try:
        stat_result = path.lstat() if is_symlink else path.stat()
    except OSError as e:
        logger.warning(f"Cannot stat {path}: {e}")
        return None

    if is_symlink:
        logger.debug(f"Not following symlink {path}")
    return make_record(path, stat_result, is_dir=is_dir, is_symlink=is_symlink)

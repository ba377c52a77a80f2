"""
Date resolution for screen captures.

This module provides the two ways a file's date can be determined:
- Filename patterns written by macOS, the iOS Simulator and screen recorders
- File system timestamps (birth time, falling back to modification time)
"""

import logging
import re
from typing import List, Optional, Pattern

from pydantic import ValidationError

from .types import DateSource, FileRecord, ResolvedDate

logger = logging.getLogger(__name__)

# Filename date patterns, tried in order. Each captures year, month, day.
FILENAME_PATTERNS: List[Pattern[str]] = [
    # Screenshot 2025-06-01 at 9.00.00 AM.png / Screen Recording 2025-06-01 at ...
    re.compile(r"(?:Screenshot|Screen Recording) (\d{4})-(\d{2})-(\d{2}) at"),
    # 2025-06-01_09-00-00.mov
    re.compile(r"^(\d{4})-(\d{2})-(\d{2})_"),
    # Simulator Screenshot - iPhone 15 - 2025-06-01 at 09.00.00.png
    re.compile(r"Simulator Screenshot.*?(\d{4})-(\d{2})-(\d{2}) at"),
]

# Years accepted from filenames
FILENAME_MIN_YEAR = 2020
FILENAME_MAX_YEAR = 2030


def resolve_from_filename(filename: str) -> Optional[ResolvedDate]:
    """
    Parse a date out of a filename.

    Args:
        filename: Base name of the file

    Returns:
        ResolvedDate from the first matching pattern, or None if no pattern
        matches or the parsed components are out of range

    Raises:
        ValueError: If filename is empty
    """
    if not filename:
        raise ValueError("filename must not be empty")

    for pattern in FILENAME_PATTERNS:
        match = pattern.search(filename)
        if match:
            break
    else:
        return None

    year, month, day = (int(group) for group in match.groups())

    if not FILENAME_MIN_YEAR <= year <= FILENAME_MAX_YEAR:
        logger.debug(f"Year {year} out of range in {filename}")
        return None

    try:
        return ResolvedDate(year=year, month=month, day=day)
    except ValidationError:
        logger.debug(f"Invalid date components in {filename}: {match.groups()}")
        return None


def resolve_from_metadata(record: FileRecord) -> Optional[ResolvedDate]:
    """
    Take the date from file system timestamps.

    Uses the birth time when the platform records one, otherwise the
    modification time.

    Args:
        record: Scanned file record

    Returns:
        ResolvedDate, or None if the timestamp predates the earliest
        supported year
    """
    timestamp = record.created or record.modified

    try:
        return ResolvedDate(
            year=timestamp.year, month=timestamp.month, day=timestamp.day
        )
    except ValidationError:
        logger.debug(f"Timestamp {timestamp} of {record.path} is too early")
        return None


def resolve(
    record: FileRecord, source: DateSource = DateSource.FILENAME
) -> Optional[ResolvedDate]:
    """
    Resolve the date of a scanned file.

    Args:
        record: Scanned file record
        source: Whether to read the filename or the file system timestamps

    Returns:
        ResolvedDate, or None if the date could not be determined
    """
    if DateSource(source) == DateSource.METADATA:
        return resolve_from_metadata(record)
    return resolve_from_filename(record.name)

"""
Core types and pure helpers: date resolution and capture classification.
"""

from .classifier import is_organizable
from .date_resolution import resolve, resolve_from_filename, resolve_from_metadata
from .errors import (
    InvariantViolation,
    NonEmptyDirectoryError,
    OrganizerError,
    PathContainmentError,
    PlanConflictError,
    ScanError,
)
from .types import (
    ArchiveRule,
    DateSource,
    ExecutionResult,
    FileRecord,
    MoveOperation,
    Plan,
    RemoveDirectoryOperation,
    ResolvedDate,
    SkippedFile,
    SkipReason,
)

__all__ = [
    "is_organizable",
    "resolve",
    "resolve_from_filename",
    "resolve_from_metadata",
    "InvariantViolation",
    "NonEmptyDirectoryError",
    "OrganizerError",
    "PathContainmentError",
    "PlanConflictError",
    "ScanError",
    "ArchiveRule",
    "DateSource",
    "ExecutionResult",
    "FileRecord",
    "MoveOperation",
    "Plan",
    "RemoveDirectoryOperation",
    "ResolvedDate",
    "SkippedFile",
    "SkipReason",
]

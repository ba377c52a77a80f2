"""
Type definitions for the organizer.

Values are validated once when they enter the system (a scan result, a
resolved date, a planned operation) and are immutable afterwards.
"""

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Earliest year a resolved date may carry
MIN_YEAR = 2020


class DateSource(str, Enum):
    """Where a file's date is read from."""

    FILENAME = "filename"
    METADATA = "metadata"


class ArchiveRule(str, Enum):
    """Rule deciding which years are bucketed under a _YYYY directory."""

    FIXED_RANGE = "fixed_range"  # 2020-2023 archival
    BEFORE_CURRENT_YEAR = "before_current_year"  # year < today.year archival


class SkipReason(str, Enum):
    """Why the planner left a file where it is."""

    NOT_ORGANIZABLE = "not_organizable"
    ALREADY_IN_PLACE = "already_in_place"
    TARGET_EXISTS = "target_exists"
    NO_DATE = "no_date"


class FileRecord(BaseModel):
    """A single filesystem entry observed by the scanner."""

    path: Path = Field(description="Absolute path of the entry")
    parent: Path = Field(description="Directory containing the entry")
    name: str = Field(description="Base name of the entry")
    is_dir: bool = Field(default=False, description="Whether entry is a directory")
    is_symlink: bool = Field(
        default=False, description="Whether entry is a symbolic link"
    )
    created: Optional[datetime] = Field(
        default=None, description="Birth time, where the platform records one"
    )
    modified: datetime = Field(description="Last modification time")

    model_config = ConfigDict(frozen=True)


class ResolvedDate(BaseModel):
    """Calendar date derived from a file."""

    year: int = Field(ge=MIN_YEAR)
    month: int = Field(ge=1, le=12)
    day: int = Field(ge=1, le=31)

    model_config = ConfigDict(frozen=True)


class MoveOperation(BaseModel):
    """Move a file from source to destination."""

    kind: Literal["move"] = "move"
    source: Path
    destination: Path

    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> Path:
        return self.destination


class RemoveDirectoryOperation(BaseModel):
    """Remove a directory emptied by earlier moves."""

    kind: Literal["remove_dir"] = "remove_dir"
    path: Path

    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> Path:
        return self.path


Operation = Annotated[
    Union[MoveOperation, RemoveDirectoryOperation], Field(discriminator="kind")
]


class SkippedFile(BaseModel):
    """A file the planner decided not to move."""

    path: Path
    reason: SkipReason

    model_config = ConfigDict(use_enum_values=True)


class Plan(BaseModel):
    """
    Ordered set of operations keyed by destination path.

    Directory removals are keyed by the directory itself. Keys are unique,
    so at most one operation writes to any destination.
    """

    root: Path
    operations: Dict[Path, Operation] = Field(default_factory=dict)
    skipped: List[SkippedFile] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.operations)

    def add(self, operation: Union[MoveOperation, RemoveDirectoryOperation]) -> None:
        """
        Add an operation to the plan.

        Raises:
            KeyError: If the key is already taken; callers check first.
        """
        if operation.key in self.operations:
            raise KeyError(f"Destination already planned: {operation.key}")
        self.operations[operation.key] = operation

    def get(
        self, key: Path
    ) -> Optional[Union[MoveOperation, RemoveDirectoryOperation]]:
        return self.operations.get(key)

    def moves(self) -> List[MoveOperation]:
        return [op for op in self.operations.values() if isinstance(op, MoveOperation)]

    def removals(self) -> List[RemoveDirectoryOperation]:
        return [
            op
            for op in self.operations.values()
            if isinstance(op, RemoveDirectoryOperation)
        ]

    def skip_counts(self) -> Dict[str, int]:
        """Number of skipped files per reason."""
        counts = {reason.value: 0 for reason in SkipReason}
        for entry in self.skipped:
            counts[SkipReason(entry.reason).value] += 1
        return counts


class ExecutionResult(BaseModel):
    """Result of executing a plan."""

    total_planned: int = 0
    moved: int = 0
    removed_directories: int = 0
    skipped: int = 0
    failed: int = 0
    remaining: int = 0
    dry_run: bool = False
    transaction_id: Optional[str] = None
    errors: List[str] = Field(default_factory=list)

"""
Transaction logging for organization runs.

Records every executed operation so a run can be inspected and rolled back.
"""

import json
import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import DEFAULT_JOURNAL_DIR

logger = logging.getLogger(__name__)


class TransactionStatus(str, Enum):
    """Status of a transaction operation."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    ROLLED_BACK = "rolled_back"


class TransactionOperation(BaseModel):
    """A single filesystem operation in a transaction."""

    operation_id: str = Field(description="Unique operation ID")
    operation_type: str = Field(description="Operation type (move/remove_dir)")
    source_path: Path = Field(description="File moved, or directory removed")
    target_path: Optional[Path] = Field(
        default=None, description="Destination of a move"
    )
    status: TransactionStatus = Field(
        default=TransactionStatus.PENDING,
        description="Operation status",
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When operation was logged",
    )
    error_message: Optional[str] = Field(
        default=None, description="Error message if failed"
    )

    model_config = ConfigDict(use_enum_values=True)


class TransactionLog(BaseModel):
    """Transaction log for one organization run."""

    transaction_id: str = Field(description="Unique transaction ID")
    root: Path = Field(description="Organizer root the run applied to")
    started_at: datetime = Field(
        default_factory=datetime.now,
        description="When transaction started",
    )
    completed_at: Optional[datetime] = Field(
        default=None, description="When transaction completed"
    )
    operations: List[TransactionOperation] = Field(
        default_factory=list, description="List of operations"
    )

    def add_operation(
        self,
        operation_id: str,
        operation_type: str,
        source_path: Path,
        target_path: Optional[Path] = None,
    ) -> TransactionOperation:
        """
        Add an operation to the transaction log.

        Args:
            operation_id: Unique operation ID
            operation_type: Type of operation (move/remove_dir)
            source_path: File moved, or directory removed
            target_path: Destination of a move

        Returns:
            Created operation
        """
        operation = TransactionOperation(
            operation_id=operation_id,
            operation_type=operation_type,
            source_path=source_path,
            target_path=target_path,
        )
        self.operations.append(operation)
        return operation

    def update_operation_status(
        self,
        operation_id: str,
        status: TransactionStatus,
        error_message: Optional[str] = None,
    ) -> None:
        """
        Update the status of an operation.

        Args:
            operation_id: Operation ID to update
            status: New status
            error_message: Optional error message
        """
        for op in self.operations:
            if op.operation_id == operation_id:
                op.status = status
                if error_message:
                    op.error_message = error_message
                return

    def get_statistics(self) -> Dict[str, int]:
        """Operation counts by status, plus the total."""
        stats = {"total": len(self.operations)}
        stats.update({status.value: 0 for status in TransactionStatus})

        for op in self.operations:
            status = TransactionStatus(op.status).value
            stats[status] += 1

        return stats

    def has_failures(self) -> bool:
        return any(op.status == TransactionStatus.FAILED for op in self.operations)

    def save(self, log_path: Path) -> None:
        """
        Save transaction log to file.

        Args:
            log_path: Path to save log file
        """
        log_path.parent.mkdir(parents=True, exist_ok=True)

        with open(log_path, "w", encoding="utf-8") as f:
            json.dump(
                self.model_dump(mode="json"),
                f,
                indent=2,
                default=str,
            )

        logger.info(f"Saved transaction log to {log_path}")

    @classmethod
    def load(cls, log_path: Path) -> "TransactionLog":
        """
        Load transaction log from file.

        Raises:
            ValueError: If the log does not exist
        """
        if not log_path.exists():
            raise ValueError(f"Transaction log not found: {log_path}")

        with open(log_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        return cls.model_validate(data)

    def get_rollback_operations(self) -> List[TransactionOperation]:
        """
        Get operations that need to be rolled back.

        Returns:
            Completed operations, most recent first
        """
        completed = [
            op for op in self.operations if op.status == TransactionStatus.COMPLETED
        ]
        completed.reverse()
        return completed


def transaction_log_path(
    root: Path, transaction_id: str, journal_dir: str = DEFAULT_JOURNAL_DIR
) -> Path:
    """Location of a run's transaction log under the organizer root."""
    return root / journal_dir / "transactions" / f"{transaction_id}.json"

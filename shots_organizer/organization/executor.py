"""
Operation executor.

Applies a plan to the filesystem. This is the only place the organizer
changes anything on disk; a run executes at most max_operations operations
and records what it did in a transaction log for rollback.
"""

import errno
import logging
import shutil
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional, Set

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeRemainingColumn,
)

from ..config import DEFAULT_JOURNAL_DIR
from ..core.errors import NonEmptyDirectoryError, PathContainmentError
from ..core.types import ExecutionResult, MoveOperation, Plan, RemoveDirectoryOperation
from .transaction import TransactionLog, TransactionStatus, transaction_log_path

logger = logging.getLogger(__name__)
console = Console()

DEFAULT_MAX_OPERATIONS = 5000


class OperationExecutor:
    """Execute planned operations against the filesystem."""

    def __init__(
        self,
        root: Path,
        max_operations: int = DEFAULT_MAX_OPERATIONS,
        dry_run: bool = False,
        journal: bool = True,
        journal_dir: str = DEFAULT_JOURNAL_DIR,
        show_progress: bool = True,
    ):
        """
        Initialize the executor.

        Args:
            root: Organizer root; every touched path must lie under it
            max_operations: Upper bound on operations executed per run
            dry_run: If True, log operations without executing them
            journal: Save a transaction log of executed operations
            journal_dir: Directory under root holding transaction logs
            show_progress: Display a progress bar
        """
        if max_operations < 1:
            raise ValueError(f"max_operations must be positive, got {max_operations}")

        self.root = Path(root)
        self.max_operations = max_operations
        self.dry_run = dry_run
        self.journal = journal
        self.journal_dir = journal_dir
        self.show_progress = show_progress
        self.transaction_log: Optional[TransactionLog] = None
        # Set once a journal has been saved, also when execute() raised
        self.transaction_id: Optional[str] = None

    def execute(self, plan: Plan) -> ExecutionResult:
        """
        Execute a plan in insertion order.

        Args:
            plan: Plan produced by the operation planner

        Returns:
            Execution result with statistics

        Raises:
            PathContainmentError: If an operation targets a path outside root
            NonEmptyDirectoryError: If a directory planned for removal is not
                empty
        """
        logger.info(f"Executing plan ({'DRY RUN' if self.dry_run else 'LIVE'})")

        operations = list(plan.operations.values())
        batch = operations[: self.max_operations]

        result = ExecutionResult(
            dry_run=self.dry_run,
            total_planned=len(operations),
            remaining=len(operations) - len(batch),
        )

        if result.remaining:
            logger.warning(
                f"Plan has {len(operations)} operations; executing the first "
                f"{self.max_operations}, {result.remaining} left for the next run"
            )

        self.transaction_id = None
        self.transaction_log = TransactionLog(
            transaction_id=str(uuid.uuid4()), root=self.root
        )

        # Directories that keep entries because a move out of them did not happen
        blocked: Set[Path] = set()

        try:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
                TimeRemainingColumn(),
                console=console,
                disable=not self.show_progress,
            ) as progress:
                task = progress.add_task("Organizing files...", total=len(batch))

                for operation in batch:
                    if isinstance(operation, MoveOperation):
                        self._execute_move(operation, result, blocked)
                    else:
                        self._execute_removal(operation, result, blocked)
                    progress.advance(task)
        finally:
            # Moves completed before an invariant violation stay rollbackable
            self._save_journal()

        result.transaction_id = self.transaction_id
        return result

    def _save_journal(self) -> None:
        """Save the transaction log if this run changed anything."""
        self.transaction_log.completed_at = datetime.now()
        if self.dry_run or not self.journal or not self.transaction_log.operations:
            return

        transaction_id = self.transaction_log.transaction_id
        self.transaction_log.save(
            transaction_log_path(self.root, transaction_id, self.journal_dir)
        )
        self.transaction_id = transaction_id

    def _check_contained(self, path: Path) -> None:
        try:
            path.resolve().relative_to(self.root.resolve())
        except ValueError:
            raise PathContainmentError(
                f"{path} is outside the organizer root {self.root}"
            ) from None

    def _execute_move(
        self, operation: MoveOperation, result: ExecutionResult, blocked: Set[Path]
    ) -> None:
        source = operation.source
        destination = operation.destination

        self._check_contained(source)
        self._check_contained(destination)

        if self.dry_run:
            logger.info(f"[DRY RUN] Would move {source} → {destination}")
            result.moved += 1
            return

        if destination.exists():
            logger.info(f"Skipping {source}: {destination} appeared after planning")
            blocked.add(source.parent)
            result.skipped += 1
            return

        operation_id = str(uuid.uuid4())
        self.transaction_log.add_operation(
            operation_id=operation_id,
            operation_type=operation.kind,
            source_path=source,
            target_path=destination,
        )
        self.transaction_log.update_operation_status(
            operation_id, TransactionStatus.IN_PROGRESS
        )

        try:
            if not destination.parent.exists():
                destination.parent.mkdir(parents=True, exist_ok=True)
                logger.info(f"Created directory: {destination.parent}")
            _rename(source, destination)
        except OSError as e:
            logger.error(f"Failed to move {source}: {e}")
            blocked.add(source.parent)
            result.failed += 1
            result.errors.append(f"{source}: {e}")
            self.transaction_log.update_operation_status(
                operation_id, TransactionStatus.FAILED, str(e)
            )
            return

        logger.info(f"Moved {source.name} → {destination.parent}")
        result.moved += 1
        self.transaction_log.update_operation_status(
            operation_id, TransactionStatus.COMPLETED
        )

    def _execute_removal(
        self,
        operation: RemoveDirectoryOperation,
        result: ExecutionResult,
        blocked: Set[Path],
    ) -> None:
        path = operation.path
        self._check_contained(path)

        if path.resolve() == self.root.resolve():
            raise PathContainmentError(f"Refusing to remove the organizer root {path}")

        if any(directory == path or path in directory.parents for directory in blocked):
            logger.warning(f"Keeping {path}: not all files were moved out")
            blocked.add(path.parent)
            result.skipped += 1
            return

        if self.dry_run:
            logger.info(f"[DRY RUN] Would remove empty directory {path}")
            result.removed_directories += 1
            return

        operation_id = str(uuid.uuid4())
        self.transaction_log.add_operation(
            operation_id=operation_id,
            operation_type=operation.kind,
            source_path=path,
        )

        try:
            path.rmdir()
        except OSError as e:
            if e.errno in (errno.ENOTEMPTY, errno.EEXIST):
                self.transaction_log.update_operation_status(
                    operation_id, TransactionStatus.FAILED, str(e)
                )
                raise NonEmptyDirectoryError(
                    f"Directory planned for removal is not empty: {path}"
                ) from e
            logger.error(f"Failed to remove {path}: {e}")
            blocked.add(path.parent)
            result.failed += 1
            result.errors.append(f"{path}: {e}")
            self.transaction_log.update_operation_status(
                operation_id, TransactionStatus.FAILED, str(e)
            )
            return

        logger.info(f"Removed empty directory {path}")
        result.removed_directories += 1
        self.transaction_log.update_operation_status(
            operation_id, TransactionStatus.COMPLETED
        )

    def rollback(self, transaction_id: str) -> int:
        """
        Rollback a transaction.

        Args:
            transaction_id: Transaction ID to rollback

        Returns:
            Number of operations rolled back

        Raises:
            ValueError: If the transaction log does not exist
        """
        logger.info(f"Rolling back transaction {transaction_id}")

        log_path = transaction_log_path(self.root, transaction_id, self.journal_dir)
        transaction_log = TransactionLog.load(log_path)

        operations = transaction_log.get_rollback_operations()
        logger.info(f"Rolling back {len(operations)} operations")

        rolled_back = 0
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            console=console,
            disable=not self.show_progress,
        ) as progress:
            task = progress.add_task("Rolling back...", total=len(operations))

            for operation in operations:
                try:
                    if operation.operation_type == "remove_dir":
                        operation.source_path.mkdir(parents=True, exist_ok=True)
                        logger.info(f"Recreated directory: {operation.source_path}")
                    elif operation.target_path and operation.target_path.exists():
                        if operation.source_path.exists():
                            raise FileExistsError(
                                f"{operation.source_path} exists, not overwriting"
                            )
                        operation.source_path.parent.mkdir(parents=True, exist_ok=True)
                        _rename(operation.target_path, operation.source_path)
                        logger.info(
                            f"Moved back: {operation.target_path} → "
                            f"{operation.source_path}"
                        )
                    else:
                        logger.warning(
                            f"Cannot roll back {operation.operation_id}: "
                            f"{operation.target_path} is missing"
                        )
                        progress.advance(task)
                        continue

                    transaction_log.update_operation_status(
                        operation.operation_id, TransactionStatus.ROLLED_BACK
                    )
                    rolled_back += 1

                except OSError as e:
                    logger.error(f"Error rolling back {operation.operation_id}: {e}")

                progress.advance(task)

        transaction_log.completed_at = datetime.now()
        transaction_log.save(log_path)

        logger.info("Rollback complete")
        return rolled_back


def _rename(source: Path, destination: Path) -> None:
    """Rename a file, copying across filesystems when rename cannot."""
    try:
        source.rename(destination)
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
        logger.warning(f"{source} and {destination} are on different devices, copying")
        shutil.move(str(source), str(destination))

"""
Operation planner.

Turns a scan of the organizer root into a complete, conflict-checked plan of
moves and directory removals. Planning never touches the filesystem: all
decisions are made from the scan snapshot, so the same snapshot always
produces the same plan.
"""

import logging
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

from ..core.classifier import is_organizable
from ..core.date_resolution import resolve
from ..core.errors import PlanConflictError
from ..core.types import (
    DateSource,
    FileRecord,
    MoveOperation,
    Plan,
    RemoveDirectoryOperation,
    SkippedFile,
    SkipReason,
)
from .strategy import OrganizationStrategy

logger = logging.getLogger(__name__)


class OperationPlanner:
    """Plan the reorganization of a scanned tree."""

    def __init__(
        self,
        root: Path,
        strategy: Optional[OrganizationStrategy] = None,
        date_source: DateSource = DateSource.FILENAME,
        include_audio: bool = False,
        prune_empty_dirs: bool = True,
    ):
        """
        Initialize the planner.

        Args:
            root: Organizer root; every destination lies under it
            strategy: Destination layout strategy
            date_source: Where file dates are read from
            include_audio: Also organize audio recordings
            prune_empty_dirs: Plan removal of directories emptied by moves
        """
        self.root = Path(root)
        self.strategy = strategy or OrganizationStrategy()
        self.date_source = DateSource(date_source)
        self.include_audio = include_audio
        self.prune_empty_dirs = prune_empty_dirs

    def plan(self, records: Iterable[FileRecord]) -> Plan:
        """
        Build the plan for a scan.

        Args:
            records: Scan result for the root

        Returns:
            Plan keyed by destination path, moves first, then removals

        Raises:
            PlanConflictError: If two files resolve to the same destination
        """
        records = list(records)
        plan = Plan(root=self.root)
        existing: Set[Path] = {record.path for record in records}

        for record in records:
            if record.is_dir or record.is_symlink:
                continue
            self._plan_file(plan, record, existing)

        if self.prune_empty_dirs:
            for operation in self._plan_removals(plan, records):
                plan.add(operation)

        logger.info(
            f"Planned {len(plan.moves())} moves and "
            f"{len(plan.removals())} directory removals "
            f"({len(plan.skipped)} files skipped)"
        )
        return plan

    def _plan_file(self, plan: Plan, record: FileRecord, existing: Set[Path]) -> None:
        if not is_organizable(record.name, include_audio=self.include_audio):
            plan.skipped.append(
                SkippedFile(path=record.path, reason=SkipReason.NOT_ORGANIZABLE)
            )
            return

        date = resolve(record, self.date_source)
        if date is None:
            logger.info(f"Could not determine date of {record.name}")
            plan.skipped.append(SkippedFile(path=record.path, reason=SkipReason.NO_DATE))
            return

        destination = self.strategy.get_target_path(self.root, date, record.name)

        if destination == record.path:
            logger.debug(f"Already in place: {record.path}")
            plan.skipped.append(
                SkippedFile(path=record.path, reason=SkipReason.ALREADY_IN_PLACE)
            )
            return

        if destination in existing:
            logger.info(f"Skipping {record.path}: {destination} already exists")
            plan.skipped.append(
                SkippedFile(path=record.path, reason=SkipReason.TARGET_EXISTS)
            )
            return

        claimed = plan.get(destination)
        if claimed is not None:
            first = getattr(claimed, "source", claimed.key)
            raise PlanConflictError(destination, first, record.path)

        plan.add(MoveOperation(source=record.path, destination=destination))

    def _plan_removals(
        self, plan: Plan, records: List[FileRecord]
    ) -> List[RemoveDirectoryOperation]:
        """
        Find directories left empty once the planned moves run.

        A directory is removed when it had entries and every one of them
        leaves: files through a move, subdirectories through their own
        removal. Layout directories are kept.
        """
        moved_sources = {op.source for op in plan.moves()}
        children: Dict[Path, List[FileRecord]] = defaultdict(list)
        for record in records:
            children[record.parent].append(record)

        directories = [record.path for record in records if record.is_dir]
        # Deepest first, so a parent sees the fate of its subdirectories
        directories.sort(key=lambda path: (-len(path.parts), str(path)))

        removed: Set[Path] = set()
        operations: List[RemoveDirectoryOperation] = []

        for directory in directories:
            if self.strategy.is_layout_directory(self.root, directory):
                continue

            entries = children.get(directory, [])
            if not entries:
                continue

            if all(
                entry.path in removed or entry.path in moved_sources
                for entry in entries
            ):
                removed.add(directory)
                operations.append(RemoveDirectoryOperation(path=directory))

        return operations

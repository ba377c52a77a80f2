"""
Organization strategy for screen captures.

Defines the destination layout: archival years live under _YYYY/, recent
years directly under the root, both split into "MM MonthName" directories.
"""

import re
from pathlib import Path
from typing import Optional

import arrow
from pydantic import BaseModel, ConfigDict, Field

from ..core.types import ArchiveRule, ResolvedDate

MONTH_NAMES = [
    "01 January",
    "02 February",
    "03 March",
    "04 April",
    "05 May",
    "06 June",
    "07 July",
    "08 August",
    "09 September",
    "10 October",
    "11 November",
    "12 December",
]

ARCHIVE_DIR_PATTERN = re.compile(r"^_\d{4}$")


def month_directory_name(month: int) -> str:
    """Return the directory name for a month number (1-12)."""
    if not 1 <= month <= 12:
        raise ValueError(f"Month out of range: {month}")
    return MONTH_NAMES[month - 1]


class OrganizationStrategy(BaseModel):
    """Strategy for placing files under the organizer root."""

    archive_rule: ArchiveRule = Field(
        default=ArchiveRule.FIXED_RANGE,
        description="Rule deciding which years are archival",
    )

    archive_first_year: int = Field(
        default=2020, description="First archival year for the fixed range rule"
    )

    archive_last_year: int = Field(
        default=2023, description="Last archival year for the fixed range rule"
    )

    current_year: Optional[int] = Field(
        default=None,
        description="Year treated as current; defaults to today's year",
    )

    model_config = ConfigDict(use_enum_values=True)

    def get_current_year(self) -> int:
        if self.current_year is not None:
            return self.current_year
        return arrow.now().year

    def is_archival_year(self, year: int) -> bool:
        """
        Check whether files from a year go under a _YYYY directory.

        Args:
            year: Calendar year

        Returns:
            True if the year is archival under the configured rule
        """
        if self.archive_rule == ArchiveRule.BEFORE_CURRENT_YEAR:
            return year < self.get_current_year()
        return self.archive_first_year <= year <= self.archive_last_year

    def get_target_directory(self, root: Path, date: ResolvedDate) -> Path:
        """
        Get the directory a file with the given date belongs in.

        Args:
            root: Organizer root
            date: Resolved date of the file

        Returns:
            root/_YYYY/MM MonthName for archival years, root/MM MonthName
            otherwise
        """
        month_name = month_directory_name(date.month)

        if self.is_archival_year(date.year):
            return root / f"_{date.year}" / month_name

        return root / month_name

    def get_target_path(self, root: Path, date: ResolvedDate, filename: str) -> Path:
        """Get the full destination path for a file."""
        return self.get_target_directory(root, date) / filename

    def is_layout_directory(self, root: Path, directory: Path) -> bool:
        """
        Check whether a directory belongs to the organized layout.

        Layout directories are the root, _YYYY directories directly under it,
        and month directories under either of those.
        """
        if directory == root:
            return True

        try:
            parts = directory.relative_to(root).parts
        except ValueError:
            return False

        if len(parts) == 1:
            return bool(ARCHIVE_DIR_PATTERN.match(parts[0])) or parts[0] in MONTH_NAMES

        if len(parts) == 2:
            return bool(ARCHIVE_DIR_PATTERN.match(parts[0])) and parts[1] in MONTH_NAMES

        return False

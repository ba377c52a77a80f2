"""Organizer configuration."""

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings

from .core.types import ArchiveRule, DateSource

# Hidden directory under the root holding the transaction journal
DEFAULT_JOURNAL_DIR = ".shots-organizer"


class OrganizerSettings(BaseSettings):
    """Settings loaded from SHOTS_* environment variables or a .env file."""

    # Safety bound on operations executed per run
    max_operations: int = Field(default=5000, ge=1)

    # Archival bucketing
    archive_rule: ArchiveRule = ArchiveRule.FIXED_RANGE
    archive_first_year: int = 2020
    archive_last_year: int = 2023

    date_source: DateSource = DateSource.FILENAME
    include_audio: bool = False  # also organize .mp3 recordings
    prune_empty_dirs: bool = True

    # Transaction journal
    journal: bool = True
    journal_dir: str = DEFAULT_JOURNAL_DIR

    model_config = ConfigDict(
        env_prefix="SHOTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra fields from .env
    )

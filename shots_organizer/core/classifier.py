"""
Screenshot and screen recording detection.

Decides from a filename alone whether a file is something the organizer
should relocate.
"""

import re
from typing import FrozenSet

# Substrings identifying a screen capture (matched against the lowercased name)
CAPTURE_MARKERS = ("screenshot", "screen recording", "simulator screenshot")

MEDIA_EXTENSIONS: FrozenSet[str] = frozenset(
    {".png", ".jpg", ".jpeg", ".mov", ".mp4", ".gif"}
)

# Recorders that save the audio track separately
AUDIO_EXTENSIONS: FrozenSet[str] = frozenset({".mp3"})

# e.g. 2025-01-31_14-02-11.mov
TIMESTAMP_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}_")


def media_extensions(include_audio: bool = False) -> FrozenSet[str]:
    """Return the set of extensions a capture may carry."""
    if include_audio:
        return MEDIA_EXTENSIONS | AUDIO_EXTENSIONS
    return MEDIA_EXTENSIONS


def is_screen_capture(filename: str) -> bool:
    """Check whether the name carries one of the capture markers."""
    lower_name = filename.lower()
    return any(marker in lower_name for marker in CAPTURE_MARKERS)


def has_media_extension(filename: str, include_audio: bool = False) -> bool:
    """Check the extension case-insensitively."""
    lower_name = filename.lower()
    return any(lower_name.endswith(ext) for ext in media_extensions(include_audio))


def has_timestamp_prefix(filename: str) -> bool:
    return TIMESTAMP_PREFIX.match(filename) is not None


def is_organizable(filename: str, include_audio: bool = False) -> bool:
    """
    Determine whether a file should be organized.

    A file qualifies when it is a screen capture with a media extension, or
    when its name starts with a YYYY-MM-DD_ timestamp.

    Args:
        filename: Base name of the file
        include_audio: Also accept audio extensions

    Returns:
        True if the file is a screenshot or recording to relocate
    """
    if not isinstance(filename, str):
        return False

    if is_screen_capture(filename) and has_media_extension(filename, include_audio):
        return True

    return has_timestamp_prefix(filename)

"""Version information for shots-organizer."""

from importlib import metadata

DISTRIBUTION_NAME = "shots-organizer"

# Reported when the package is imported from a source tree that was never installed
UNKNOWN_VERSION = "0+unknown"


def get_version() -> str:
    """Get the installed distribution's version.

    Returns:
        Version string from the package metadata, or UNKNOWN_VERSION
    """
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return UNKNOWN_VERSION


__version__ = get_version()

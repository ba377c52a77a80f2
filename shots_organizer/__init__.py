"""
shots-organizer: sort screenshots and screen recordings into dated folders.
"""

from .version import __version__

__all__ = ["__version__"]

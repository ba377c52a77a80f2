"""Exceptions raised by the organizer."""

from pathlib import Path


class OrganizerError(Exception):
    """Base error for the project."""


class ScanError(OrganizerError):
    """The root directory could not be read."""


class PlanConflictError(OrganizerError):
    """Two source files resolve to the same destination."""

    def __init__(self, destination: Path, first: Path, second: Path):
        self.destination = destination
        self.first = first
        self.second = second
        super().__init__(
            f"Conflicting destination {destination}: "
            f"claimed by both {first} and {second}"
        )


class InvariantViolation(OrganizerError):
    """An operation broke a planning invariant; the run must stop."""


class PathContainmentError(InvariantViolation):
    """A planned path lies outside the organizer root."""


class NonEmptyDirectoryError(InvariantViolation):
    """A directory planned for removal still has entries."""

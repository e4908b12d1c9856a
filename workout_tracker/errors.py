"""Central error types used across the application."""

from __future__ import annotations


class WorkoutTrackerError(RuntimeError):
    """Base error for the workout tracker."""


class InvalidStateTransition(WorkoutTrackerError):
    """Raised when a lifecycle command does not apply to the current state."""


class FixFormatError(WorkoutTrackerError):
    """Raised when a recorded fix file is missing required columns."""


class ProfileFormatError(WorkoutTrackerError):
    """Raised when the user preference file cannot be parsed."""


__all__ = [
    "WorkoutTrackerError",
    "InvalidStateTransition",
    "FixFormatError",
    "ProfileFormatError",
]

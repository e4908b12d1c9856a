"""Real-time workout tracking engine."""

from .energy import estimate_calories, estimate_pace
from .errors import InvalidStateTransition, WorkoutTrackerError
from .models import (
    GeoPoint,
    MotionDecision,
    RawFix,
    RejectionReason,
    SessionState,
    UserProfile,
    WorkoutSession,
    WorkoutSnapshot,
)
from .motion_filter import MotionFilter, MotionFilterConfig
from .session import SessionController, SessionControllerConfig
from .utils import format_calories, format_distance, format_duration, format_pace

__all__ = [
    "estimate_calories",
    "estimate_pace",
    "format_calories",
    "format_distance",
    "format_duration",
    "format_pace",
    "GeoPoint",
    "InvalidStateTransition",
    "MotionDecision",
    "MotionFilter",
    "MotionFilterConfig",
    "RawFix",
    "RejectionReason",
    "SessionController",
    "SessionControllerConfig",
    "SessionState",
    "UserProfile",
    "WorkoutSession",
    "WorkoutSnapshot",
    "WorkoutTrackerError",
]

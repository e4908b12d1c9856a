"""Replay a recorded fix file through the tracking engine.

Usage:
    python -m workout_tracker fixes.csv --weight 72 --output session.json
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from .clock import ManualClock
from .config import PROFILE_PATH
from .errors import FixFormatError
from .export import write_session_json
from .fix_reader import read_fixes_csv
from .models import RawFix, UserProfile, WorkoutSession
from .profile import load_profile_or_default
from .session import SessionController, SessionControllerConfig
from .sources import ReplayFixSource
from .utils import format_calories, format_distance, format_duration, format_pace

_LOG = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Replay recorded location fixes through the motion filter and"
            " report distance, duration, pace and calories."
        )
    )
    parser.add_argument("fixes", type=Path, help="CSV with latitude, longitude, accuracy, timestamp_ms")
    parser.add_argument(
        "--profile",
        type=Path,
        default=Path(PROFILE_PATH),
        help="JSON preference file with user_weight/user_height/user_age",
    )
    parser.add_argument(
        "--weight",
        type=float,
        help="Override the profile body weight (kg)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Session JSON output path; defaults to the export directory",
    )
    parser.add_argument("--verbose", action="store_true", help="Log every fix decision")
    return parser


def replay_fixes(
    fixes: Sequence[RawFix],
    profile: UserProfile,
) -> Optional[WorkoutSession]:
    """Run ``fixes`` through a controller driven by their own timestamps."""

    if not fixes:
        return None
    clock = ManualClock(fixes[0].timestamp_ms)
    source = ReplayFixSource(fixes)
    controller = SessionController(
        profile,
        source=source,
        config=SessionControllerConfig(clock=clock, auto_sample=False),
    )
    with controller:
        controller.start()
        source.replay(
            before_each=lambda fix: clock.set(fix.timestamp_ms),
            after_each=lambda _fix: controller.sample(),
        )
        return controller.finish()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        fixes, summary = read_fixes_csv(args.fixes)
    except (FixFormatError, FileNotFoundError) as exc:
        _LOG.error("Failed to load fixes '%s': %s", args.fixes, exc)
        return 1
    _LOG.info(
        "Loaded %d fixes (%d skipped) from %s",
        summary.rows_parsed,
        summary.rows_skipped,
        args.fixes,
    )

    profile = load_profile_or_default(args.profile)
    if args.weight is not None:
        profile = UserProfile(
            id=profile.id,
            weight_kg=args.weight,
            height_cm=profile.height_cm,
            age_years=profile.age_years,
        )

    session = replay_fixes(fixes, profile)
    if session is None:
        _LOG.error("No usable fixes in %s", args.fixes)
        return 1

    _LOG.info(
        "Distance %s | Duration %s | Pace %s | Calories %s | Route points %d",
        format_distance(session.distance_km),
        format_duration(session.duration_ms),
        format_pace(session.average_pace_kmh),
        format_calories(session.calories_kcal),
        len(session.route),
    )
    write_session_json(session, args.output)
    return 0

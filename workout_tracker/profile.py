"""Load the user profile from the local JSON preference file."""

from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Mapping

from .config import DEFAULT_AGE_YEARS, DEFAULT_HEIGHT_CM, DEFAULT_WEIGHT_KG, PROFILE_PATH
from .errors import ProfileFormatError
from .models import UserProfile

_LOG = logging.getLogger(__name__)


def default_profile() -> UserProfile:
    return UserProfile(
        id=str(uuid.uuid4()),
        weight_kg=DEFAULT_WEIGHT_KG,
        height_cm=DEFAULT_HEIGHT_CM,
        age_years=DEFAULT_AGE_YEARS,
    )


def profile_from_prefs(prefs: Mapping[str, Any]) -> UserProfile:
    """Build a profile from preference keys, defaulting anything unset.

    Recognised keys are ``user_id``, ``user_weight`` (kg), ``user_height``
    (cm) and ``user_age`` (years).
    """

    try:
        weight = float(prefs.get("user_weight", DEFAULT_WEIGHT_KG))
        height = float(prefs.get("user_height", DEFAULT_HEIGHT_CM))
        age = int(prefs.get("user_age", DEFAULT_AGE_YEARS))
    except (TypeError, ValueError) as exc:
        raise ProfileFormatError(f"Invalid profile value: {exc}") from exc
    user_id = prefs.get("user_id") or str(uuid.uuid4())
    return UserProfile(id=str(user_id), weight_kg=weight, height_cm=height, age_years=age)


def load_profile(path: str | Path = PROFILE_PATH) -> UserProfile:
    """Read the preference file at ``path``; a missing file yields defaults.

    Raises:
        ProfileFormatError: If the file is not a JSON object or holds
            non-numeric measurements.
    """

    p = Path(path)
    if not p.exists():
        _LOG.info("No profile at %s; using defaults", p)
        return default_profile()
    try:
        payload = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ProfileFormatError(f"Unable to read profile {p}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ProfileFormatError(f"Profile {p} must contain a JSON object")
    return profile_from_prefs(payload)


def load_profile_or_default(path: str | Path = PROFILE_PATH) -> UserProfile:
    try:
        return load_profile(path)
    except ProfileFormatError as exc:
        _LOG.warning("Falling back to default profile: %s", exc)
        return default_profile()


__all__ = [
    "default_profile",
    "load_profile",
    "load_profile_or_default",
    "profile_from_prefs",
]

import json
import logging
from pathlib import Path

import pytest

from workout_tracker.errors import ProfileFormatError
from workout_tracker.profile import load_profile, load_profile_or_default, profile_from_prefs


def test_missing_file_uses_defaults(tmp_path: Path) -> None:
    profile = load_profile(tmp_path / "absent.json")
    assert profile.weight_kg == 70.0
    assert profile.height_cm == 170.0
    assert profile.age_years == 25
    assert profile.id


def test_reads_preference_keys(tmp_path: Path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text(
        json.dumps({"user_id": "abc", "user_weight": 82.5, "user_height": 181, "user_age": 40}),
        encoding="utf-8",
    )
    profile = load_profile(path)
    assert profile.id == "abc"
    assert profile.weight_kg == 82.5
    assert profile.height_cm == 181.0
    assert profile.age_years == 40


def test_partial_prefs_fill_defaults() -> None:
    profile = profile_from_prefs({"user_weight": "65"})
    assert profile.weight_kg == 65.0
    assert profile.age_years == 25


def test_non_numeric_weight_rejected() -> None:
    with pytest.raises(ProfileFormatError):
        profile_from_prefs({"user_weight": "heavy"})


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_malformed_file_raises(tmp_path: Path, content: str) -> None:
    path = tmp_path / "prefs.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ProfileFormatError):
        load_profile(path)


def test_fallback_logs_and_defaults(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "prefs.json"
    path.write_text("{broken", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="workout_tracker.profile"):
        profile = load_profile_or_default(path)
    assert profile.weight_kg == 70.0
    assert "default profile" in caplog.text

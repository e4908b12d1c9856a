import pytest

from workout_tracker.energy import estimate_calories, estimate_pace, met_for_speed


@pytest.mark.parametrize(
    "speed_kmh, expected_met",
    [
        (0.0, 2.0),
        (4.0, 2.0),
        (4.01, 7.0),
        (8.0, 7.0),
        (11.0, 8.5),
        (11.01, 10.0),
        (25.0, 10.0),
    ],
)
def test_met_bands_use_inclusive_upper_bounds(speed_kmh: float, expected_met: float) -> None:
    assert met_for_speed(speed_kmh) == expected_met


def test_walking_half_hour_calories() -> None:
    assert estimate_calories(70.0, 2.0, 1_800_000) == pytest.approx(70.0)


def test_running_half_hour_calories() -> None:
    assert estimate_calories(70.0, 6.0, 1_800_000) == pytest.approx(350.0)


@pytest.mark.parametrize("duration_ms", [0, 500, 999, -1000])
def test_short_samples_burn_nothing(duration_ms: int) -> None:
    assert estimate_calories(70.0, 1.0, duration_ms) == 0.0


def test_one_second_standing_still_uses_lowest_band() -> None:
    assert estimate_calories(72.0, 0.0, 1000) == pytest.approx(2.0 * 72.0 / 3600.0)


def test_pace_in_kmh() -> None:
    assert estimate_pace(5.0, 1_800_000) == pytest.approx(10.0)


@pytest.mark.parametrize("distance_km, duration_ms", [(0.0, 1000), (-1.0, 1000), (3.0, 0)])
def test_pace_is_zero_without_distance_or_time(distance_km: float, duration_ms: int) -> None:
    assert estimate_pace(distance_km, duration_ms) == 0.0

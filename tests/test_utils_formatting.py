import json

import pytest

from workout_tracker.utils import (
    format_calories,
    format_distance,
    format_duration,
    format_pace,
    json_dumps_sorted,
)


@pytest.mark.parametrize(
    "duration_ms, expected",
    [
        (0, "00:00:00"),
        (999, "00:00:00"),
        (61_000, "00:01:01"),
        (3_723_000, "01:02:03"),
        (36_000_000, "10:00:00"),
        (-5000, "00:00:00"),
    ],
)
def test_format_duration(duration_ms: int, expected: str) -> None:
    assert format_duration(duration_ms) == expected


def test_numeric_formatters_use_fixed_precision() -> None:
    assert format_distance(1.234) == "1.23 km"
    assert format_distance(0) == "0.00 km"
    assert format_calories(70.4) == "70 kcal"
    assert format_calories(349.7) == "350 kcal"
    assert format_pace(10) == "10.00 km/h"
    assert format_pace(5.678) == "5.68 km/h"


def test_json_dumps_sorted_orders_keys_and_stringifies_them() -> None:
    payload = {"route": [(51.48, -3.18)], 2: "two", "a": {"z": 1, "b": 2}}
    text = json_dumps_sorted(payload)
    assert text == '{"2":"two","a":{"b":2,"z":1},"route":[[51.48,-3.18]]}'
    assert json.loads(json_dumps_sorted(payload, indent=2)) == json.loads(text)

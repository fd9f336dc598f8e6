from __future__ import annotations

import pytest

from maplog.core.errors import InvalidWorkoutInput
from maplog.core.forms import parse_workout_form


def test_parse_running_form_from_text_inputs() -> None:
    parsed = parse_workout_form(
        {"type": "running", "distance": "5.2", "duration": " 24 ", "cadence": "178"}
    )

    assert parsed.kind == "running"
    assert parsed.distance_km == 5.2
    assert parsed.duration_min == 24.0
    assert parsed.extra == 178.0


def test_parse_cycling_form_allows_zero_and_negative_elevation() -> None:
    flat = parse_workout_form(
        {"type": "cycling", "distance": 20, "duration": 60, "elevation": 0}
    )
    downhill = parse_workout_form(
        {"type": "cycling", "distance": 20, "duration": 60, "elevation": "-35"}
    )

    assert flat.extra == 0.0
    assert downhill.extra == -35.0


@pytest.mark.parametrize(
    "values",
    [
        {"type": "running", "distance": 0, "duration": 24, "cadence": 178},
        {"type": "running", "distance": -3, "duration": 24, "cadence": 178},
        {"type": "running", "distance": "abc", "duration": 24, "cadence": 178},
        {"type": "running", "distance": "", "duration": 24, "cadence": 178},
        {"type": "running", "distance": 5, "duration": 24, "cadence": None},
        {"type": "running", "distance": "inf", "duration": 24, "cadence": 178},
        {"type": "cycling", "distance": 5, "duration": 24, "elevation": None},
        {"type": "cycling", "distance": 5, "duration": "nan", "elevation": 10},
        {"type": "rowing", "distance": 5, "duration": 24, "cadence": 20},
        {"type": "running", "distance": 10**400, "duration": 24, "cadence": 178},
    ],
)
def test_parse_rejects_invalid_values(values: dict) -> None:
    with pytest.raises(InvalidWorkoutInput):
        parse_workout_form(values)

"""Parsing and validation of raw workout form values."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping

from maplog.core.errors import InvalidWorkoutInput
from maplog.workout.model import WORKOUT_KINDS, WorkoutKind


@dataclass(frozen=True)
class WorkoutFormValues:
    kind: WorkoutKind
    distance_km: float
    duration_min: float
    extra: float  # cadence (running) or elevation gain (cycling)


def _parse_number(raw: object, field_name: str) -> float:
    if raw is None or isinstance(raw, bool):
        raise InvalidWorkoutInput(f"invalid {field_name}")
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError as exc:
            raise InvalidWorkoutInput(f"{field_name} is out of range") from exc
    else:
        text = str(raw).strip()
        if not text:
            raise InvalidWorkoutInput(f"{field_name} is required")
        try:
            value = float(text)
        except ValueError as exc:
            raise InvalidWorkoutInput(f"invalid {field_name}") from exc
    if not math.isfinite(value):
        raise InvalidWorkoutInput(f"{field_name} must be a finite number")
    return value


def _parse_positive(raw: object, field_name: str) -> float:
    value = _parse_number(raw, field_name)
    if value <= 0:
        raise InvalidWorkoutInput(f"{field_name} must be > 0")
    return value


def parse_workout_form(values: Mapping[str, object]) -> WorkoutFormValues:
    """Validate ``type``, ``distance``, ``duration`` and ``cadence``/``elevation``.

    Elevation only has to be finite; a ride can lose height.
    """
    kind = str(values.get("type") or "").strip().lower()
    if kind not in WORKOUT_KINDS:
        raise InvalidWorkoutInput(f"Unknown workout type '{kind}'")

    distance = _parse_positive(values.get("distance"), "distance")
    duration = _parse_positive(values.get("duration"), "duration")
    if kind == "running":
        extra = _parse_positive(values.get("cadence"), "cadence")
    else:
        extra = _parse_number(values.get("elevation"), "elevation")

    return WorkoutFormValues(
        kind=kind,  # type: ignore[arg-type]
        distance_km=distance,
        duration_min=duration,
        extra=extra,
    )

"""Workout list <-> JSON blob conversion."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Iterable

from maplog.core.errors import InvalidWorkoutInput, StorageUnreadable
from maplog.workout.model import AnyWorkout, build_workout

logger = logging.getLogger(__name__)


def workout_to_record(workout: AnyWorkout) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": workout.id,
        "created_at": workout.created_at.isoformat(),
        "coords": [workout.coords[0], workout.coords[1]],
        "distance_km": workout.distance_km,
        "duration_min": workout.duration_min,
        "kind": workout.kind,
        "description": workout.description,
    }
    if workout.kind == "running":
        record["cadence_spm"] = workout.cadence_spm
        record["pace_min_per_km"] = workout.pace_min_per_km
    else:
        record["elevation_gain_m"] = workout.elevation_gain_m
        record["speed_km_per_h"] = workout.speed_km_per_h
    return record


def workout_from_record(record: object, index: int = 0) -> AnyWorkout:
    """Rebuild one workout; stored pace/speed are ignored and re-derived."""
    if not isinstance(record, dict):
        raise InvalidWorkoutInput(f"Record {index + 1}: must be an object")

    kind = record.get("kind")
    if kind == "running":
        extra = record.get("cadence_spm")
    elif kind == "cycling":
        extra = record.get("elevation_gain_m")
    else:
        raise InvalidWorkoutInput(f"Record {index + 1}: invalid kind {kind!r}")

    workout_id = record.get("id")
    if not isinstance(workout_id, str) or not workout_id:
        raise InvalidWorkoutInput(f"Record {index + 1}: invalid id")

    description = record.get("description")
    if not isinstance(description, str) or not description:
        raise InvalidWorkoutInput(f"Record {index + 1}: invalid description")

    created_raw = record.get("created_at")
    if not isinstance(created_raw, str):
        raise InvalidWorkoutInput(f"Record {index + 1}: invalid created_at")
    try:
        created_at = datetime.fromisoformat(created_raw)
    except ValueError as exc:
        raise InvalidWorkoutInput(f"Record {index + 1}: invalid created_at") from exc

    coords = record.get("coords")
    if not isinstance(coords, list) or len(coords) != 2:
        raise InvalidWorkoutInput(f"Record {index + 1}: invalid coords")

    try:
        return build_workout(
            kind,
            (coords[0], coords[1]),
            record.get("distance_km"),  # type: ignore[arg-type]
            record.get("duration_min"),  # type: ignore[arg-type]
            extra,  # type: ignore[arg-type]
            workout_id=workout_id,
            created_at=created_at,
            description=description,
        )
    except InvalidWorkoutInput as exc:
        raise InvalidWorkoutInput(f"Record {index + 1}: {exc}") from exc


def dump_workouts(workouts: Iterable[AnyWorkout]) -> str:
    return json.dumps(
        [workout_to_record(workout) for workout in workouts], ensure_ascii=True
    )


def load_workouts(blob: str) -> list[AnyWorkout]:
    """Decode a stored blob.

    Raises :class:`StorageUnreadable` when the blob is not a JSON array.
    Records that fail validation are skipped and logged, the rest are kept
    in their stored order.
    """
    try:
        data = json.loads(blob)
    except (ValueError, RecursionError) as exc:
        raise StorageUnreadable(f"Invalid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise StorageUnreadable("Stored workouts must be a JSON array")

    out: list[AnyWorkout] = []
    for i, raw in enumerate(data):
        try:
            out.append(workout_from_record(raw, index=i))
        except InvalidWorkoutInput as exc:
            logger.warning("Skipping stored workout: %s", exc)
    return out

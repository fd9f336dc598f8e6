"""Workout domain models."""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Literal, Union

from maplog.core.errors import InvalidWorkoutInput


WorkoutKind = Literal["running", "cycling"]
Coords = tuple[float, float]

WORKOUT_KINDS: tuple[WorkoutKind, ...] = ("running", "cycling")

MONTHS: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def _local_now() -> datetime:
    return datetime.now().astimezone()


class IdSource:
    """Millisecond timestamp ids, bumped so one process never repeats a value."""

    def __init__(self, clock_ms: Callable[[], int] | None = None) -> None:
        self._clock_ms = clock_ms or (lambda: time.time_ns() // 1_000_000)
        self._last = -1
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            value = max(self._clock_ms(), self._last + 1)
            self._last = value
        return str(value)


_ids = IdSource()


def describe(kind: str, created_at: datetime) -> str:
    return f"{kind[:1].upper()}{kind[1:]} on {MONTHS[created_at.month - 1]} {created_at.day}"


def _require_finite(value: float, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidWorkoutInput(f"{name} must be a number")
    try:
        number = float(value)
    except OverflowError as exc:
        raise InvalidWorkoutInput(f"{name} is out of range") from exc
    if not math.isfinite(number):
        raise InvalidWorkoutInput(f"{name} must be a finite number")
    return number


def _require_positive(value: float, name: str) -> float:
    number = _require_finite(value, name)
    if number <= 0:
        raise InvalidWorkoutInput(f"{name} must be > 0")
    return number


def _require_coords(coords: object) -> Coords:
    if not isinstance(coords, (tuple, list)) or len(coords) != 2:
        raise InvalidWorkoutInput("coords must be a (latitude, longitude) pair")
    return (
        _require_finite(coords[0], "latitude"),
        _require_finite(coords[1], "longitude"),
    )


@dataclass(frozen=True)
class Workout:
    """Fields shared by every workout; use :class:`Running` or :class:`Cycling`."""

    coords: Coords
    distance_km: float
    duration_min: float
    id: str = field(default="", kw_only=True)
    created_at: datetime = field(default_factory=_local_now, kw_only=True)
    description: str = field(default="", kw_only=True)

    kind: WorkoutKind = field(init=False)

    def __post_init__(self) -> None:
        if type(self) is Workout:
            raise TypeError("Workout is abstract; build Running or Cycling")
        object.__setattr__(self, "coords", _require_coords(self.coords))
        object.__setattr__(
            self, "distance_km", _require_positive(self.distance_km, "distance_km")
        )
        object.__setattr__(
            self, "duration_min", _require_positive(self.duration_min, "duration_min")
        )
        if not self.id:
            object.__setattr__(self, "id", _ids.next_id())
        if not self.description:
            object.__setattr__(self, "description", describe(self.kind, self.created_at))


@dataclass(frozen=True)
class Running(Workout):
    cadence_spm: float = 0.0
    pace_min_per_km: float = field(init=False)
    kind: WorkoutKind = field(default="running", init=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(
            self, "cadence_spm", _require_positive(self.cadence_spm, "cadence_spm")
        )
        object.__setattr__(self, "pace_min_per_km", self.duration_min / self.distance_km)


@dataclass(frozen=True)
class Cycling(Workout):
    elevation_gain_m: float = 0.0
    speed_km_per_h: float = field(init=False)
    kind: WorkoutKind = field(default="cycling", init=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        # Elevation may be zero or negative (downhill rides).
        object.__setattr__(
            self,
            "elevation_gain_m",
            _require_finite(self.elevation_gain_m, "elevation_gain_m"),
        )
        object.__setattr__(
            self, "speed_km_per_h", self.distance_km / (self.duration_min / 60)
        )


AnyWorkout = Union[Running, Cycling]


def build_workout(
    kind: str,
    coords: Coords,
    distance_km: float,
    duration_min: float,
    extra: float,
    *,
    workout_id: str = "",
    created_at: datetime | None = None,
    description: str = "",
) -> AnyWorkout:
    """Build the variant for ``kind``; ``extra`` is cadence or elevation gain."""
    if kind == "running":
        return Running(
            coords,
            distance_km,
            duration_min,
            cadence_spm=extra,
            id=workout_id,
            created_at=created_at or _local_now(),
            description=description,
        )
    if kind == "cycling":
        return Cycling(
            coords,
            distance_km,
            duration_min,
            elevation_gain_m=extra,
            id=workout_id,
            created_at=created_at or _local_now(),
            description=description,
        )
    raise InvalidWorkoutInput(f"Unknown workout type '{kind}'")


def derived_metric(workout: AnyWorkout) -> float:
    if workout.kind == "running":
        return workout.pace_min_per_km
    return workout.speed_km_per_h

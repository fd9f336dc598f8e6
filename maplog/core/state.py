"""Application state owned by the workout controller."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from maplog.workout.model import AnyWorkout, Coords


Phase = Literal["idle", "pending_pick"]


@dataclass
class AppState:
    workouts: list[AnyWorkout] = field(default_factory=list)
    pending_coords: Coords | None = None
    phase: Phase = "idle"
    map_ready: bool = False
    locating: bool = False

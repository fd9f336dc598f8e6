"""Interfaces the controller drives, and the plain data it hands them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from maplog.core.errors import GeolocationUnavailable
from maplog.workout.model import AnyWorkout, Coords, WorkoutKind


PickHandler = Callable[[Coords], None]
ListClickHandler = Callable[[str], None]
PositionCallback = Callable[[Coords], None]
PositionErrorCallback = Callable[[str], None]


class MapView(Protocol):
    def init_view(self, coords: Coords, zoom: int) -> None: ...

    def on_location_pick(self, handler: PickHandler) -> None: ...

    def place_marker(self, coords: Coords, popup_label: str, style: str) -> None: ...

    def pan_to(self, coords: Coords, zoom: int) -> None: ...


class WorkoutForm(Protocol):
    def show_form(self) -> None: ...

    def hide_form_and_clear(self) -> None: ...

    def toggle_fields_for_type(self, kind: WorkoutKind) -> None: ...

    def render_list_entry(self, summary: WorkoutSummary) -> None: ...

    def on_list_item_click(self, handler: ListClickHandler) -> None: ...

    def alert(self, message: str) -> None: ...


class Geolocation(Protocol):
    def request_current_position(
        self,
        on_success: PositionCallback,
        on_error: PositionErrorCallback,
    ) -> None: ...


class StaticGeolocation:
    """Always reports the same origin; used when ``--origin`` is given."""

    def __init__(self, coords: Coords) -> None:
        self._coords = coords

    def request_current_position(
        self,
        on_success: PositionCallback,
        on_error: PositionErrorCallback,
    ) -> None:
        on_success(self._coords)


ICONS: dict[str, str] = {"running": "🏃‍♂️", "cycling": "🚴‍♀️"}


@dataclass(frozen=True)
class SummaryDetail:
    icon: str
    value: str
    unit: str


@dataclass(frozen=True)
class WorkoutSummary:
    workout_id: str
    kind: WorkoutKind
    title: str
    details: tuple[SummaryDetail, ...]


def _fmt_value(value: float) -> str:
    return f"{value:g}"


def summarize(workout: AnyWorkout) -> WorkoutSummary:
    details = [
        SummaryDetail(ICONS[workout.kind], _fmt_value(workout.distance_km), "km"),
        SummaryDetail("⏱", _fmt_value(workout.duration_min), "min"),
    ]
    if workout.kind == "running":
        details.append(SummaryDetail("⚡️", f"{workout.pace_min_per_km:.1f}", "min/km"))
        details.append(SummaryDetail("🦶🏼", _fmt_value(workout.cadence_spm), "spm"))
    else:
        details.append(SummaryDetail("⚡️", f"{workout.speed_km_per_h:.1f}", "km/h"))
        details.append(SummaryDetail("⛰", _fmt_value(workout.elevation_gain_m), "m"))
    return WorkoutSummary(
        workout_id=workout.id,
        kind=workout.kind,
        title=workout.description,
        details=tuple(details),
    )


def popup_label(workout: AnyWorkout) -> str:
    return f"{ICONS[workout.kind]} {workout.description}"


def marker_style(workout: AnyWorkout) -> str:
    return f"{workout.kind}-popup"


def parse_position_response(result: object) -> Coords:
    """Read ``{"lat": .., "lng": ..}`` from the browser; ``{"error": ..}`` raises."""
    if not isinstance(result, dict):
        raise GeolocationUnavailable("Unexpected geolocation response")
    if "error" in result:
        raise GeolocationUnavailable(str(result["error"] or "Geolocation failed"))
    try:
        return (float(result["lat"]), float(result["lng"]))
    except (KeyError, TypeError, ValueError, OverflowError) as exc:
        raise GeolocationUnavailable("Unexpected geolocation response") from exc

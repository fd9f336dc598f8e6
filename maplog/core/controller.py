"""Controller that owns the workout list and drives the map and form."""

from __future__ import annotations

import logging
from typing import Callable, Mapping

from maplog.core.collaborators import (
    Geolocation,
    MapView,
    WorkoutForm,
    marker_style,
    popup_label,
    summarize,
)
from maplog.core.config import AppConfig
from maplog.core.errors import InvalidWorkoutInput, StorageUnreadable
from maplog.core.forms import parse_workout_form
from maplog.core.state import AppState
from maplog.workout.model import AnyWorkout, Coords, WorkoutKind, build_workout
from maplog.workout.serialization import dump_workouts, load_workouts
from maplog.workout.storage import KeyValueStorage

logger = logging.getLogger(__name__)

POSITION_ERROR_MESSAGE = "Could not get your position"
INVALID_INPUT_MESSAGE = "Inputs have to be positive numbers!"
NO_LOCATION_MESSAGE = "Pick a location on the map first"
SAVE_ERROR_MESSAGE = "Could not save your workouts"


class WorkoutController:
    def __init__(
        self,
        map_view: MapView,
        form: WorkoutForm,
        storage: KeyValueStorage,
        geolocation: Geolocation,
        config: AppConfig | None = None,
        reload: Callable[[], None] | None = None,
    ) -> None:
        self._map = map_view
        self._form = form
        self._storage = storage
        self._geolocation = geolocation
        self._config = config or AppConfig()
        self._reload = reload
        self.state = AppState()
        self._form.on_list_item_click(self.move_to_workout)

    @property
    def workouts(self) -> tuple[AnyWorkout, ...]:
        return tuple(self.state.workouts)

    @property
    def map_ready(self) -> bool:
        return self.state.map_ready

    def start(self) -> None:
        self.restore()
        self.acquire_origin()

    def acquire_origin(self) -> None:
        if self.state.locating or self.state.map_ready:
            return
        self.state.locating = True
        self._geolocation.request_current_position(
            self._load_map, self._on_position_error
        )

    def _load_map(self, coords: Coords) -> None:
        self.state.locating = False
        self._map.init_view(coords, self._config.map_zoom_level)
        self._map.on_location_pick(self.on_location_picked)
        self.state.map_ready = True
        # Restored workouts get their markers once a map exists.
        for workout in self.state.workouts:
            self._render_marker(workout)

    def _on_position_error(self, message: str) -> None:
        self.state.locating = False
        logger.warning("Geolocation unavailable: %s", message)
        self._form.alert(POSITION_ERROR_MESSAGE)

    def on_location_picked(self, coords: Coords) -> None:
        self.state.pending_coords = coords
        self.state.phase = "pending_pick"
        self._form.show_form()

    def on_type_changed(self, kind: WorkoutKind) -> None:
        self._form.toggle_fields_for_type(kind)

    def cancel_pending(self) -> None:
        self.state.pending_coords = None
        self.state.phase = "idle"
        self._form.hide_form_and_clear()

    def submit_workout(self, values: Mapping[str, object]) -> AnyWorkout | None:
        coords = self.state.pending_coords
        if coords is None:
            self._form.alert(NO_LOCATION_MESSAGE)
            return None

        try:
            parsed = parse_workout_form(values)
            workout = build_workout(
                parsed.kind,
                coords,
                parsed.distance_km,
                parsed.duration_min,
                parsed.extra,
            )
        except InvalidWorkoutInput as exc:
            logger.info("Rejected workout input: %s", exc)
            self._form.alert(INVALID_INPUT_MESSAGE)
            return None

        self.state.workouts.append(workout)
        self._render_marker(workout)
        self._form.render_list_entry(summarize(workout))
        self._form.hide_form_and_clear()
        self.state.pending_coords = None
        self.state.phase = "idle"
        self.persist()
        return workout

    def _render_marker(self, workout: AnyWorkout) -> None:
        self._map.place_marker(workout.coords, popup_label(workout), marker_style(workout))

    def move_to_workout(self, workout_id: str) -> None:
        workout = self.find_by_id(workout_id)
        if workout is None or not self.state.map_ready:
            return
        self._map.pan_to(workout.coords, self._config.map_zoom_level)

    def find_by_id(self, workout_id: str) -> AnyWorkout | None:
        for workout in self.state.workouts:
            if workout.id == workout_id:
                return workout
        return None

    def persist(self) -> None:
        try:
            self._storage.set_item(
                self._config.storage_key, dump_workouts(self.state.workouts)
            )
        except OSError as exc:
            logger.warning("Could not persist workouts: %s", exc)
            self._form.alert(SAVE_ERROR_MESSAGE)

    def restore(self) -> None:
        try:
            blob = self._storage.get_item(self._config.storage_key)
            if not blob:
                return
            workouts = load_workouts(blob)
        except (OSError, UnicodeDecodeError, StorageUnreadable) as exc:
            logger.warning("Ignoring stored workouts: %s", exc)
            return

        self.state.workouts = workouts
        for workout in workouts:
            self._form.render_list_entry(summarize(workout))

    def reset_all(self) -> None:
        self._storage.remove_item(self._config.storage_key)
        self.state = AppState()
        if self._reload is not None:
            self._reload()

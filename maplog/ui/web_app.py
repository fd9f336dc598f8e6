"""NiceGUI web UI for the map workout log."""

from __future__ import annotations

import logging
from typing import Any

from nicegui import Client, background_tasks, events, ui

from maplog.core.collaborators import (
    Geolocation,
    ListClickHandler,
    PickHandler,
    PositionCallback,
    PositionErrorCallback,
    StaticGeolocation,
    WorkoutSummary,
    parse_position_response,
)
from maplog.core.config import AppConfig
from maplog.core.controller import WorkoutController
from maplog.core.errors import GeolocationUnavailable
from maplog.workout.model import Coords, WorkoutKind
from maplog.workout.storage import FileStorage

logger = logging.getLogger(__name__)

GEOLOCATION_JS = """
new Promise((resolve) => {
  if (!navigator.geolocation) {
    resolve({error: "Geolocation is not supported"});
    return;
  }
  navigator.geolocation.getCurrentPosition(
    (pos) => resolve({lat: pos.coords.latitude, lng: pos.coords.longitude}),
    (err) => resolve({error: err.message}),
    {timeout: %d},
  );
})
"""

PAGE_STYLE = """
<style>
  body { background: #2d3439; color: #ececec; font-family: "Manrope", Arial, sans-serif; }
  .ml-sidebar { background: #2d3439; width: 420px; max-width: 100vw; }
  .ml-card { background: #42484d; border-radius: 6px; cursor: pointer; }
  .ml-card--running { border-left: 5px solid #00c46a; }
  .ml-card--cycling { border-left: 5px solid #ffb545; }
  .ml-muted { color: #aaaaaa; }
  .running-popup .leaflet-popup-content-wrapper { border-left: 5px solid #00c46a; }
  .cycling-popup .leaflet-popup-content-wrapper { border-left: 5px solid #ffb545; }
</style>
"""


class LeafletMapView:
    def __init__(self, leaflet: ui.leaflet, config: AppConfig) -> None:
        self._leaflet = leaflet
        self._config = config

    def init_view(self, coords: Coords, zoom: int) -> None:
        self._leaflet.clear_layers()
        self._leaflet.tile_layer(
            url_template=self._config.tile_url,
            options={"attribution": self._config.tile_attribution},
        )
        self._leaflet.set_center(coords)
        self._leaflet.set_zoom(zoom)

    def on_location_pick(self, handler: PickHandler) -> None:
        def _on_click(e: events.GenericEventArguments) -> None:
            latlng = e.args.get("latlng") or {}
            handler((float(latlng["lat"]), float(latlng["lng"])))

        self._leaflet.on("map-click", _on_click)

    def place_marker(self, coords: Coords, popup_label: str, style: str) -> None:
        marker = self._leaflet.marker(latlng=coords)
        marker.run_method(
            "bindPopup",
            popup_label,
            {
                "maxWidth": 250,
                "minWidth": 100,
                "autoClose": False,
                "closeOnClick": False,
                "className": style,
            },
        )
        marker.run_method("openPopup")

    def pan_to(self, coords: Coords, zoom: int) -> None:
        self._leaflet.run_map_method(
            "setView", list(coords), zoom, {"animate": True, "pan": {"duration": 1}}
        )


class FormPanel:
    """Workout form plus the list of logged workouts."""

    def __init__(self) -> None:
        self._click_handler: ListClickHandler | None = None
        with ui.column().classes("ml-sidebar h-screen p-4 gap-3 overflow-auto") as root:
            ui.label("Workout log").classes("text-2xl font-bold")
            self.status = ui.label("Click on the map to log a workout").classes(
                "text-sm ml-muted"
            )
            with ui.card().classes("w-full ml-card") as form_card:
                with ui.row().classes("w-full gap-2"):
                    self.type_select = ui.select(
                        {"running": "Running", "cycling": "Cycling"},
                        value="running",
                        label="Type",
                    ).classes("w-1/3")
                    self.distance = ui.number("Distance (km)", min=0).classes("w-1/3")
                    self.duration = ui.number("Duration (min)", min=0).classes("w-1/4")
                with ui.row().classes("w-full gap-2") as self.cadence_row:
                    self.cadence = ui.number("Cadence (step/min)", min=0).classes("w-1/2")
                with ui.row().classes("w-full gap-2") as self.elevation_row:
                    self.elevation = ui.number("Elev gain (m)").classes("w-1/2")
                with ui.row().classes("w-full justify-end gap-2"):
                    self.cancel_btn = ui.button("Cancel").props("outline")
                    self.submit_btn = ui.button("OK").props("color=positive")
            with ui.column().classes("w-full gap-2") as self.entries:
                pass
            with ui.row().classes("w-full justify-end"):
                self.reset_btn = ui.button("Reset all").props("flat color=negative")
        self._root = root
        self._form_card = form_card
        self.elevation_row.set_visibility(False)
        self._form_card.set_visibility(False)

    def values(self) -> dict[str, Any]:
        return {
            "type": self.type_select.value,
            "distance": self.distance.value,
            "duration": self.duration.value,
            "cadence": self.cadence.value,
            "elevation": self.elevation.value,
        }

    def set_status(self, text: str) -> None:
        self.status.set_text(text)

    def show_form(self) -> None:
        self._form_card.set_visibility(True)
        self.distance.run_method("focus")

    def hide_form_and_clear(self) -> None:
        for field in (self.distance, self.duration, self.cadence, self.elevation):
            field.set_value(None)
        self._form_card.set_visibility(False)

    def toggle_fields_for_type(self, kind: WorkoutKind) -> None:
        self.cadence_row.set_visibility(kind == "running")
        self.elevation_row.set_visibility(kind == "cycling")

    def render_list_entry(self, summary: WorkoutSummary) -> None:
        with self.entries:
            with ui.card().classes(f"w-full ml-card ml-card--{summary.kind}") as card:
                ui.label(summary.title).classes("text-base font-semibold")
                with ui.row().classes("gap-4"):
                    for detail in summary.details:
                        ui.label(f"{detail.icon} {detail.value} {detail.unit}").classes(
                            "text-sm"
                        )
        card.on("click", lambda _, wid=summary.workout_id: self._on_entry_click(wid))
        # Newest first.
        card.move(self.entries, target_index=0)

    def _on_entry_click(self, workout_id: str) -> None:
        if self._click_handler is not None:
            self._click_handler(workout_id)

    def on_list_item_click(self, handler: ListClickHandler) -> None:
        self._click_handler = handler

    def alert(self, message: str) -> None:
        with self._root:
            ui.notify(message, color="negative")


class BrowserGeolocation:
    """Asks the connected browser for its position via ``navigator.geolocation``."""

    def __init__(self, client: Client, timeout_sec: float) -> None:
        self._client = client
        self._timeout_sec = timeout_sec

    def request_current_position(
        self,
        on_success: PositionCallback,
        on_error: PositionErrorCallback,
    ) -> None:
        background_tasks.create(self._locate(on_success, on_error), name="geolocation")

    async def _locate(
        self,
        on_success: PositionCallback,
        on_error: PositionErrorCallback,
    ) -> None:
        code = GEOLOCATION_JS % int(self._timeout_sec * 1000)
        try:
            # Extra second so the browser-side timeout fires first.
            result = await self._client.run_javascript(code, timeout=self._timeout_sec + 1)
        except TimeoutError:
            on_error("Timed out waiting for the browser position")
            return
        try:
            coords = parse_position_response(result)
        except GeolocationUnavailable as exc:
            on_error(str(exc))
            return
        on_success(coords)


def build_page(client: Client, config: AppConfig, origin: Coords | None) -> WorkoutController:
    ui.add_head_html(PAGE_STYLE)
    with ui.row().classes("w-full h-screen no-wrap gap-0"):
        panel = FormPanel()
        # World view until the position is known; picks stay disabled until then.
        leaflet = ui.leaflet(center=(0.0, 0.0), zoom=2).classes("grow h-screen")

    geolocation: Geolocation
    if origin is not None:
        geolocation = StaticGeolocation(origin)
    else:
        geolocation = BrowserGeolocation(client, config.geolocation_timeout_sec)

    controller = WorkoutController(
        map_view=LeafletMapView(leaflet, config),
        form=panel,
        storage=FileStorage(config.data_dir),
        geolocation=geolocation,
        config=config,
        reload=ui.navigate.reload,
    )

    def on_submit() -> None:
        if controller.submit_workout(panel.values()) is not None:
            panel.set_status(f"{len(controller.workouts)} workouts logged")

    def on_type_change(e: events.ValueChangeEventArguments) -> None:
        controller.on_type_changed(e.value)

    panel.type_select.on_value_change(on_type_change)
    panel.submit_btn.on_click(on_submit)
    panel.cancel_btn.on_click(controller.cancel_pending)
    panel.reset_btn.on_click(controller.reset_all)
    for field in (panel.distance, panel.duration, panel.cadence, panel.elevation):
        field.on("keydown.enter", on_submit)
    return controller


def run_web_ui(
    *,
    config: AppConfig | None = None,
    origin: Coords | None = None,
    host: str = "127.0.0.1",
    port: int = 8088,
) -> int:
    settings = config or AppConfig()

    @ui.page("/")
    async def index(client: Client) -> None:
        controller = build_page(client, settings, origin)
        await client.connected()
        controller.start()
        logger.info("Restored %d workouts", len(controller.workouts))

    ui.run(host=host, port=port, reload=False, title="Maplog")
    return 0

"""Runtime settings shared by the controller, web UI and CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from maplog.workout.storage import default_data_dir

DEFAULT_TILE_URL = "https://tile.openstreetmap.fr/hot/{z}/{x}/{y}.png"
DEFAULT_TILE_ATTRIBUTION = (
    '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
)


@dataclass(frozen=True)
class AppConfig:
    map_zoom_level: int = 13
    storage_key: str = "workouts"
    data_dir: Path = field(default_factory=default_data_dir)
    geolocation_timeout_sec: float = 10.0
    tile_url: str = DEFAULT_TILE_URL
    tile_attribution: str = DEFAULT_TILE_ATTRIBUTION
